"""Contact management."""

from __future__ import annotations

from mnotify.core.exceptions import MNotifyError
from mnotify.core.models import Contact, CreateContactInput
from mnotify.core.types import Failure, RequestDescriptor, Result
from mnotify.core.validation import (
    CONTACT_LIST_KEYS,
    normalize_collection,
    normalize_contact,
)
from mnotify.services.base import ResourceService
from mnotify.utils import compact, to_array

CREATE_PATH = "/contact/{group_id}"
LIST_PATH = "/contact"


class ContactService(ResourceService):
    service_name = "contacts"

    async def create_contact_safe(
        self, contact: CreateContactInput, group_id: str | None = None
    ) -> Result[Contact, MNotifyError]:
        """Create a contact inside a group.

        The API files every contact under a group, so ``group_id`` is
        required; without it the call fails locally with no request made.
        """
        operation = "create_contact"
        path = self._resolve_path(operation, "POST", CREATE_PATH, group_id=group_id)
        if isinstance(path, Failure):
            return path

        body = compact(
            {
                "phone": contact.phone,
                "title": contact.title,
                "firstname": contact.firstname,
                "lastname": contact.lastname,
                "email": to_array(contact.email) if contact.email else None,
                "dob": contact.dob,
            }
        )
        return await self._execute(
            operation,
            RequestDescriptor("POST", path.value, body=body),
            normalize_contact,
            "Invalid contact response format",
        )

    async def create_contact(
        self, contact: CreateContactInput, group_id: str | None = None
    ) -> Contact:
        return (await self.create_contact_safe(contact, group_id)).unwrap()

    async def get_contacts_safe(self) -> Result[list[Contact], MNotifyError]:
        return await self._execute(
            "get_contacts",
            RequestDescriptor("GET", LIST_PATH),
            lambda data: normalize_collection(data, CONTACT_LIST_KEYS, normalize_contact),
            "Invalid contacts response format",
        )

    async def get_contacts(self) -> list[Contact]:
        return (await self.get_contacts_safe()).unwrap()
