"""Group management and group membership."""

from __future__ import annotations

from mnotify.core.exceptions import MNotifyError
from mnotify.core.models import Group, StatusResponse
from mnotify.core.types import Failure, RequestDescriptor, Result
from mnotify.core.validation import (
    GROUP_LIST_KEYS,
    normalize_collection,
    normalize_group,
    normalize_status_response,
)
from mnotify.services.base import ResourceService
from mnotify.utils import compact

COLLECTION_PATH = "/group"
ITEM_PATH = "/group/{group_id}"
MEMBERS_PATH = "/group/{group_id}/contact"
MEMBER_PATH = "/group/{group_id}/contact/{contact_id}"


class GroupService(ResourceService):
    """Create, list and delete groups; add and remove their contacts."""

    service_name = "groups"

    async def create_group_safe(
        self, name: str, description: str | None = None
    ) -> Result[Group, MNotifyError]:
        operation = "create_group"
        if not name or not name.strip():
            return self._reject(
                operation,
                "create_group requires a group name",
                method="POST",
                path=COLLECTION_PATH,
            )
        body = compact({"group_name": name, "description": description})
        return await self._execute(
            operation,
            RequestDescriptor("POST", COLLECTION_PATH, body=body),
            normalize_group,
            "Invalid group response format",
        )

    async def create_group(self, name: str, description: str | None = None) -> Group:
        return (await self.create_group_safe(name, description)).unwrap()

    async def get_groups_safe(self) -> Result[list[Group], MNotifyError]:
        return await self._execute(
            "get_groups",
            RequestDescriptor("GET", COLLECTION_PATH),
            lambda data: normalize_collection(data, GROUP_LIST_KEYS, normalize_group),
            "Invalid groups response format",
        )

    async def get_groups(self) -> list[Group]:
        return (await self.get_groups_safe()).unwrap()

    async def get_group_safe(self, group_id: str) -> Result[Group, MNotifyError]:
        operation = "get_group"
        path = self._resolve_path(operation, "GET", ITEM_PATH, group_id=group_id)
        if isinstance(path, Failure):
            return path
        return await self._execute(
            operation,
            RequestDescriptor("GET", path.value),
            normalize_group,
            "Invalid group response format",
        )

    async def get_group(self, group_id: str) -> Group:
        return (await self.get_group_safe(group_id)).unwrap()

    async def add_contact_to_group_safe(
        self, group_id: str, contact_id: str
    ) -> Result[StatusResponse, MNotifyError]:
        operation = "add_contact_to_group"
        path = self._resolve_path(operation, "POST", MEMBERS_PATH, group_id=group_id)
        if isinstance(path, Failure):
            return path
        if not contact_id or not str(contact_id).strip():
            return self._reject(
                operation,
                "add_contact_to_group requires contact_id",
                method="POST",
                path=MEMBERS_PATH,
            )
        return await self._execute(
            operation,
            RequestDescriptor("POST", path.value, body={"contact_id": contact_id}),
            normalize_status_response,
            "Invalid add_contact_to_group response format",
        )

    async def add_contact_to_group(
        self, group_id: str, contact_id: str
    ) -> StatusResponse:
        return (await self.add_contact_to_group_safe(group_id, contact_id)).unwrap()

    async def remove_contact_from_group_safe(
        self, group_id: str, contact_id: str
    ) -> Result[StatusResponse, MNotifyError]:
        operation = "remove_contact_from_group"
        path = self._resolve_path(
            operation, "DELETE", MEMBER_PATH, group_id=group_id, contact_id=contact_id
        )
        if isinstance(path, Failure):
            return path
        return await self._execute(
            operation,
            RequestDescriptor("DELETE", path.value),
            normalize_status_response,
            "Invalid remove_contact_from_group response format",
        )

    async def remove_contact_from_group(
        self, group_id: str, contact_id: str
    ) -> StatusResponse:
        return (
            await self.remove_contact_from_group_safe(group_id, contact_id)
        ).unwrap()

    async def delete_group_safe(
        self, group_id: str
    ) -> Result[StatusResponse, MNotifyError]:
        operation = "delete_group"
        path = self._resolve_path(operation, "DELETE", ITEM_PATH, group_id=group_id)
        if isinstance(path, Failure):
            return path
        return await self._execute(
            operation,
            RequestDescriptor("DELETE", path.value),
            normalize_status_response,
            "Invalid delete_group response format",
        )

    async def delete_group(self, group_id: str) -> StatusResponse:
        return (await self.delete_group_safe(group_id)).unwrap()
