"""Request timings and transport counters.

``HttpClient`` wraps each attempt in a ``transport.request`` scope and counts
``transport.retry`` and ``transport.failure``. When telemetry is off (the
default) every call lands on one shared no-op object. Set
``MNOTIFY_TELEMETRY=1`` (or ``DEBUG=1``) and pass at least one reporter to
collect anything.
"""

from collections import deque
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os
import time
from types import TracebackType
from typing import Any, Protocol, Self, runtime_checkable

log = logging.getLogger(__name__)

# Concurrent requests each see their own chain of open scopes
_open_scopes: ContextVar[tuple[str, ...]] = ContextVar("mnotify_scopes", default=())

_ENV_ENABLED = os.getenv("MNOTIFY_TELEMETRY") == "1" or os.getenv("DEBUG") == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Receives attempt timings and counter increments."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...  # noqa: D102
    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None: ...  # noqa: D102


@dataclass(frozen=True, slots=True)
class _Disabled:
    def __call__(self, name: str, **metadata: Any) -> Self:  # noqa: ARG002
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        return None

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        pass


class _Recording:
    """Times scopes and forwards counters to every reporter."""

    __slots__ = ("reporters",)

    def __init__(self, *reporters: TelemetryReporter):
        self.reporters = reporters

    def __call__(self, name: str, **metadata: Any) -> AbstractContextManager["_Recording"]:
        if not name or not isinstance(name, str):
            raise ValueError("Scope name must be a non-empty string")
        return self._timed(name, metadata)

    @contextmanager
    def _timed(self, name: str, metadata: dict[str, Any]) -> Iterator["_Recording"]:
        outer = _open_scopes.get()
        token = _open_scopes.set((*outer, name))
        started = time.perf_counter()
        try:
            yield self
        finally:
            elapsed = time.perf_counter() - started
            _open_scopes.reset(token)
            self._emit("record_timing", _qualify(outer, name), elapsed, outer, metadata)

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        """Add ``increment`` to the counter ``name`` under the open scopes."""
        outer = _open_scopes.get()
        self._emit(
            "record_metric",
            _qualify(outer, name),
            increment,
            outer,
            {"metric_type": "counter", **metadata},
        )

    def _emit(
        self,
        method: str,
        scope: str,
        value: Any,
        outer: tuple[str, ...],
        metadata: dict[str, Any],
    ) -> None:
        payload = {"depth": len(outer), "parent_scope": _qualify(outer), **metadata}
        for reporter in self.reporters:
            try:
                getattr(reporter, method)(scope, value, **payload)
            except Exception as e:
                # A broken reporter must never fail a request
                log.error(
                    "Telemetry reporter '%s' failed: %s",
                    type(reporter).__name__,
                    e,
                    exc_info=True,
                )


def _qualify(outer: tuple[str, ...], name: str | None = None) -> str | None:
    parts = (*outer, name) if name else outer
    return ".".join(parts) if parts else None


_DISABLED = _Disabled()

type TelemetryContextProtocol = _Recording | _Disabled


def TelemetryContext(  # noqa: N802
    *reporters: TelemetryReporter, enabled: bool | None = None
) -> TelemetryContextProtocol:
    """Return the context ``HttpClient`` reports through.

    Without reporters, or with telemetry disabled, this is always the same
    no-op instance.
    """
    active = _ENV_ENABLED if enabled is None else enabled
    if active and reporters:
        return _Recording(*reporters)
    return _DISABLED


class MemoryReporter:
    """Keeps the most recent entries per scope in memory."""

    def __init__(self, max_entries_per_scope: int = 1000):
        self.max_entries = max_entries_per_scope
        self.timings: dict[str, deque[tuple[float, dict[str, Any]]]] = {}
        self.metrics: dict[str, deque[tuple[Any, dict[str, Any]]]] = {}

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        self.timings.setdefault(scope, deque(maxlen=self.max_entries)).append(
            (duration, metadata)
        )

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        self.metrics.setdefault(scope, deque(maxlen=self.max_entries)).append(
            (value, metadata)
        )

    def summary(self) -> dict[str, dict[str, float]]:
        """Per scope: ``calls`` and ``seconds`` for timings, ``total`` for counters."""
        result: dict[str, dict[str, float]] = {}
        for scope, entries in self.timings.items():
            result[scope] = {
                "calls": len(entries),
                "seconds": sum(duration for duration, _ in entries),
            }
        for scope, entries in self.metrics.items():
            result.setdefault(scope, {})["total"] = sum(
                value for value, _ in entries if isinstance(value, int | float)
            )
        return result
