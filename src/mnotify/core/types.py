"""Core data types that flow between the transport and the resource services.

This module defines the Result container used as the uniform calling
convention, plus the immutable request descriptor the transport consumes.
Every value here is created per call and never shared between requests.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
import typing

from mnotify.core.exceptions import UnwrapError

if typing.TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Mapping

# --- Minimal guard helpers (clarity > boilerplate) ---

T = typing.TypeVar("T")


def _freeze_mapping(
    m: dict[str, T] | typing.Mapping[str, T] | None,
) -> typing.Mapping[str, T] | None:
    """Return an immutable mapping view or None.

    Accepts dict or Mapping; wraps dicts in MappingProxyType while preserving type.
    """
    if m is None or isinstance(m, MappingProxyType):
        return m
    return MappingProxyType(dict(m))


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result Monad for Railway-Oriented Error Handling ---
# Resource services return these instead of raising, so remote failures are a
# predictable part of the data flow. The throwing API is derived via unwrap().

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure")


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful outcome carrying a value."""

    value: TSuccess

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map[U](self, fn: Callable[[TSuccess], U]) -> Success[U]:
        """Transform the carried value."""
        return Success(fn(self.value))

    def map_err(self, fn: Callable[[typing.Any], typing.Any]) -> Success[TSuccess]:  # noqa: ARG002
        return Success(self.value)

    def and_then[U, F](
        self, fn: Callable[[TSuccess], Success[U] | Failure[F]]
    ) -> Success[U] | Failure[F]:
        """Chain another Result-producing step without nesting."""
        return fn(self.value)

    def unwrap(self) -> TSuccess:
        return self.value

    def unwrap_or(self, default: TSuccess) -> TSuccess:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, fn: Callable[[typing.Any], TSuccess]) -> TSuccess:  # noqa: ARG002
        return self.value

    def match[U](
        self,
        *,
        ok: Callable[[TSuccess], U],
        err: Callable[[typing.Any], U],  # noqa: ARG002
    ) -> U:
        """Dispatch to the ``ok`` handler."""
        return ok(self.value)


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed outcome carrying the error."""

    error: TFailure

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[typing.Any], typing.Any]) -> Failure[TFailure]:  # noqa: ARG002
        return Failure(self.error)

    def map_err[F](self, fn: Callable[[TFailure], F]) -> Failure[F]:
        """Transform the carried error."""
        return Failure(fn(self.error))

    def and_then(self, fn: Callable[[typing.Any], typing.Any]) -> Failure[TFailure]:  # noqa: ARG002
        return Failure(self.error)

    def unwrap(self) -> typing.NoReturn:
        """Raise the carried error.

        Exceptions are raised as-is so callers of the throwing API see the
        exact object the Result path would have returned.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError(self.error)

    def unwrap_or[U](self, default: U) -> U:
        return default

    def unwrap_or_else[U](self, fn: Callable[[TFailure], U]) -> U:
        return fn(self.error)

    def match[U](
        self,
        *,
        ok: Callable[[typing.Any], U],  # noqa: ARG002
        err: Callable[[TFailure], U],
    ) -> U:
        """Dispatch to the ``err`` handler."""
        return err(self.error)


Result = Success[TSuccess] | Failure[TFailure]


def ok[U](value: U) -> Success[U]:
    """Construct a successful Result."""
    return Success(value)


def err[F](error: F) -> Failure[F]:
    """Construct a failed Result."""
    return Failure(error)


def try_catch[U](
    fn: Callable[[], U],
    error_handler: Callable[[Exception], typing.Any] | None = None,
) -> Result[U, typing.Any]:
    """Run ``fn`` and capture a raised exception as a Failure."""
    try:
        return Success(fn())
    except Exception as e:
        return Failure(error_handler(e) if error_handler else e)


async def try_catch_async[U](
    fn: Callable[[], Awaitable[U]],
    error_handler: Callable[[Exception], typing.Any] | None = None,
) -> Result[U, typing.Any]:
    """Async counterpart of :func:`try_catch`."""
    try:
        return Success(await fn())
    except Exception as e:
        return Failure(error_handler(e) if error_handler else e)


def combine[U, F](results: Iterable[Success[U] | Failure[F]]) -> Result[list[U], F]:
    """Collapse Results into one: all values, or the first Failure encountered."""
    values: list[U] = []
    for result in results:
        if isinstance(result, Failure):
            return Failure(result.error)
        values.append(result.value)
    return Success(values)


# --- Request description ---

HttpMethod = typing.Literal["GET", "POST", "PUT", "DELETE", "PATCH"]
_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")


@dataclasses.dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """A single call against the remote API, built fresh per operation.

    ``path`` is relative to the configured base URL. ``body`` is serialized
    as JSON when present; ``params`` are merged into the query string after
    the API key.
    """

    method: HttpMethod
    path: str
    body: typing.Any = None
    params: Mapping[str, str | int | float] | None = None

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.method, str)
            and self.method.upper() in _METHODS,
            message=f"must be one of {list(_METHODS)}, got {self.method!r}",
            field_name="method",
        )
        _require(
            condition=isinstance(self.path, str) and self.path.strip() != "",
            message="must be a non-empty str",
            field_name="path",
            exc=TypeError,
        )
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "params", _freeze_mapping(self.params))
