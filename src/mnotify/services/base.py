"""Shared execution flow for resource services.

Every resource operation runs the same railway:

1. shape the payload (and reject bad input without touching the network),
2. call the transport,
3. annotate a failure with ``{service, operation}``,
4. check the returned JSON and normalize it into a domain record.

The ``*_safe`` methods on subclasses return a ``Result``; the plain methods
unwrap it, so both conventions share this single code path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar
from urllib.parse import quote

from mnotify.core.exceptions import (
    MNotifyError,
    annotate_result_error,
    validation_error,
)
from mnotify.core.types import Failure, RequestDescriptor, Result, Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from mnotify.client.http_client import HttpClient
    from mnotify.core.types import HttpMethod

logger = logging.getLogger(__name__)


class ResourceService:
    """Base class holding the transport and the service name used in context."""

    service_name: ClassVar[str] = "resource"

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    def _context(self, operation: str, **fields: Any) -> dict[str, Any]:
        return {"service": self.service_name, "operation": operation, **fields}

    def _reject(
        self,
        operation: str,
        message: str,
        *,
        method: HttpMethod,
        path: str,
        status_code: int = 0,
        data: Any = None,
    ) -> Failure[MNotifyError]:
        """Synthesize a client-side failure; no request is made."""
        logger.debug("%s.%s rejected locally: %s", self.service_name, operation, message)
        return Failure(
            validation_error(
                message,
                self._context(operation, method=method, path=path),
                data=data,
                status_code=status_code,
            )
        )

    def _resolve_path(
        self,
        operation: str,
        method: HttpMethod,
        template: str,
        **identifiers: str | None,
    ) -> Result[str, MNotifyError]:
        """Fill a route template, rejecting blank identifiers up front."""
        for name, value in identifiers.items():
            if value is None or not str(value).strip():
                return self._reject(
                    operation,
                    f"{operation} requires {name} (route {template})",
                    method=method,
                    path=template,
                )
        return Success(
            template.format(
                **{name: quote(str(value), safe="") for name, value in identifiers.items()}
            )
        )

    async def _execute[T](
        self,
        operation: str,
        descriptor: RequestDescriptor,
        normalize: Callable[[Any], T | None],
        invalid_message: str,
    ) -> Result[T, MNotifyError]:
        """Run the transport call and turn the raw JSON into a record."""
        result = annotate_result_error(
            await self._client.request_safe(descriptor),
            service=self.service_name,
            operation=operation,
        )
        if isinstance(result, Failure):
            return result

        record = normalize(result.value)
        if record is None:
            return self._reject(
                operation,
                invalid_message,
                method=descriptor.method,
                path=descriptor.path,
                data=result.value,
            )
        return Success(record)
