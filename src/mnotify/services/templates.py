"""Message templates."""

from __future__ import annotations

from mnotify.core.exceptions import MNotifyError
from mnotify.core.models import StatusResponse, Template
from mnotify.core.types import Failure, RequestDescriptor, Result
from mnotify.core.validation import (
    TEMPLATE_LIST_KEYS,
    normalize_collection,
    normalize_status_response,
    normalize_template,
)
from mnotify.services.base import ResourceService

COLLECTION_PATH = "/template"
ITEM_PATH = "/template/{template_id}"


class TemplateService(ResourceService):
    service_name = "templates"

    async def create_template_safe(
        self, name: str, content: str
    ) -> Result[Template, MNotifyError]:
        """Submit a template for approval; new templates start as ``pending``."""
        operation = "create_template"
        if not name or not content:
            return self._reject(
                operation,
                "create_template requires a title and content",
                method="POST",
                path=COLLECTION_PATH,
            )
        return await self._execute(
            operation,
            RequestDescriptor(
                "POST", COLLECTION_PATH, body={"title": name, "content": content}
            ),
            normalize_template,
            "Invalid template response format",
        )

    async def create_template(self, name: str, content: str) -> Template:
        return (await self.create_template_safe(name, content)).unwrap()

    async def get_templates_safe(self) -> Result[list[Template], MNotifyError]:
        return await self._execute(
            "get_templates",
            RequestDescriptor("GET", COLLECTION_PATH),
            lambda data: normalize_collection(
                data, TEMPLATE_LIST_KEYS, normalize_template
            ),
            "Invalid templates response format",
        )

    async def get_templates(self) -> list[Template]:
        return (await self.get_templates_safe()).unwrap()

    async def get_template_safe(
        self, template_id: str
    ) -> Result[Template, MNotifyError]:
        operation = "get_template"
        path = self._resolve_path(
            operation, "GET", ITEM_PATH, template_id=template_id
        )
        if isinstance(path, Failure):
            return path
        return await self._execute(
            operation,
            RequestDescriptor("GET", path.value),
            normalize_template,
            "Invalid template response format",
        )

    async def get_template(self, template_id: str) -> Template:
        return (await self.get_template_safe(template_id)).unwrap()

    async def delete_template_safe(
        self, template_id: str
    ) -> Result[StatusResponse, MNotifyError]:
        operation = "delete_template"
        path = self._resolve_path(
            operation, "DELETE", ITEM_PATH, template_id=template_id
        )
        if isinstance(path, Failure):
            return path
        return await self._execute(
            operation,
            RequestDescriptor("DELETE", path.value),
            normalize_status_response,
            "Invalid delete_template response format",
        )

    async def delete_template(self, template_id: str) -> StatusResponse:
        return (await self.delete_template_safe(template_id)).unwrap()
