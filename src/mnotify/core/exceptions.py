"""Exceptions raised and returned by the mNotify client.

``MNotifyError`` is the single structured error every remote failure is
mapped to. It travels inside ``Failure`` on the Result path and is raised
unchanged by the throwing API. The remaining classes cover local problems
(configuration, malformed payloads) that never reach the network.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal, TypedDict

if TYPE_CHECKING:
    from mnotify.core.types import Result

ErrorStage = Literal["request", "validation", "response", "network"]


class ErrorContext(TypedDict, total=False):
    """Diagnostic breadcrumbs attached as an error moves up the layers."""

    service: str
    operation: str
    stage: ErrorStage
    method: str
    path: str
    url: str
    retry_count: int


class MNotifyError(Exception):
    """Structured failure from the mNotify API or its client.

    Attributes:
        message: Human-readable description.
        status_code: HTTP status, 408 for client timeouts, 0 for network and
            validation failures.
        data: Raw response payload when one was received.
        context: Where the failure happened (service, operation, stage, ...).
        cause: The original exception or value, if this error wraps one.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        data: Any = None,
        context: Mapping[str, Any] | None = None,
        cause: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.data = data
        self.context: ErrorContext = ErrorContext(**(context or {}))
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def __repr__(self) -> str:
        return (
            f"MNotifyError(message={self.message!r}, status_code={self.status_code!r}, "
            f"context={dict(self.context)!r})"
        )

    def with_context(
        self, context: Mapping[str, Any] | None = None, /, **fields: Any
    ) -> MNotifyError:
        """Return a copy whose context is merged with ``context`` and ``fields``.

        Later keys win; message, status, data, cause and traceback carry over.
        """
        merged = {**self.context, **(context or {}), **fields}
        wrapped = MNotifyError(
            self.message, self.status_code, self.data, merged, self.cause
        )
        return wrapped.with_traceback(self.__traceback__)

    @classmethod
    def from_unknown(
        cls,
        error: object,
        fallback_message: str,
        status_code: int,
        context: Mapping[str, Any] | None = None,
        data: Any = None,
    ) -> MNotifyError:
        """Normalize any caught value into an ``MNotifyError``.

        An existing ``MNotifyError`` only gains the extra context. Other
        exceptions become the cause and lend their message; anything else is
        kept as the cause behind ``fallback_message``.
        """
        if isinstance(error, MNotifyError):
            return error.with_context(context) if context else error

        if isinstance(error, BaseException):
            wrapped = cls(
                str(error) or fallback_message, status_code, data, context, error
            )
            return wrapped.with_traceback(error.__traceback__)

        return cls(fallback_message, status_code, data, context, error)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly snapshot for logs and bug reports."""
        cause: Any = self.cause
        if isinstance(cause, BaseException):
            cause = {"name": type(cause).__name__, "message": str(cause)}
        return {
            "name": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "data": self.data,
            "context": dict(self.context),
            "cause": cause,
        }


def annotate_result_error[T](
    result: Result[T, MNotifyError],
    context: Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> Result[T, MNotifyError]:
    """Stamp context onto a failed Result; successes pass through untouched."""
    return result.map_err(lambda error: error.with_context(context, **fields))


def validation_error(
    message: str,
    context: Mapping[str, Any] | None = None,
    *,
    data: Any = None,
    cause: Any = None,
    status_code: int = 0,
) -> MNotifyError:
    """Build a client-side failure tagged with the ``validation`` stage."""
    return MNotifyError(
        message,
        status_code,
        data,
        {**(context or {}), "stage": "validation"},
        cause,
    )


class ConfigurationError(Exception):
    """Raised when the client cannot be configured from the given values."""


class FieldValidationError(ValueError):
    """Raised when a payload is missing a required field."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnwrapError(Exception):
    """Raised when unwrapping a Failure whose payload is not an exception."""

    def __init__(self, error: object) -> None:
        super().__init__(f"Called unwrap() on a Failure: {error!r}")
        self.error = error
