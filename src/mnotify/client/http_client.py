"""HTTP transport for the mNotify API.

Turns a ``RequestDescriptor`` into a ``Result`` holding the decoded JSON
body or an ``MNotifyError``. This is the only module that talks to the
network; resource services build descriptors and validate what comes back.

Behavior summary:

- The API key is sent both as the ``Authorization`` header and as the ``key``
  query parameter; descriptor params never override it.
- Every attempt is bounded by a client-side hard timeout (status 408).
- HTTP 429 is the only retried status. The wait comes from ``Retry-After``
  (seconds, default 1) and the retry count is threaded through, so the number
  of attempts never exceeds ``max_retries + 1``.
- ``request()`` is ``request_safe().unwrap()``; there is no second code path.
"""

from __future__ import annotations

import asyncio
import logging
import math
from typing import TYPE_CHECKING, Any

import httpx

from mnotify.core.exceptions import ConfigurationError, ErrorContext, MNotifyError
from mnotify.core.types import Failure, RequestDescriptor, Result, Success
from mnotify.telemetry import TelemetryContext
from mnotify.utils import safe_json_parse

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mnotify.config import FrozenConfig
    from mnotify.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.mnotify.com/api/"
DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_AFTER_SECONDS = 1.0
API_KEY_PARAM = "key"
_REDACTED = "redacted"

# --- Telemetry scopes/keys ---
T_REQUEST = "transport.request"
T_RETRY = "transport.retry"
T_FAILURE = "transport.failure"


def _normalize_base_url(base_url: str) -> str:
    """Ensure a trailing slash so relative joins keep any path prefix."""
    return base_url if base_url.endswith("/") else f"{base_url}/"


def parse_retry_after(value: str | None) -> float:
    """Seconds to wait before retrying a 429; falls back to one second."""
    if not value:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        seconds = float(value.strip())
    except ValueError:
        return DEFAULT_RETRY_AFTER_SECONDS
    if not math.isfinite(seconds) or seconds < 0:
        return DEFAULT_RETRY_AFTER_SECONDS
    return seconds


class HttpClient:
    """Authenticated, timed, rate-limit-aware transport.

    Instances hold immutable configuration only, so one client can serve any
    number of concurrent requests. A fresh ``httpx.AsyncClient`` is opened per
    attempt and closed before the call returns.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int | float = DEFAULT_TIMEOUT_MS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        transport: httpx.AsyncBaseTransport | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Configure the transport.

        Args:
            api_key: mNotify API key.
            base_url: API root; any path prefix (``/api``) is preserved.
            timeout: Per-attempt timeout in milliseconds.
            max_retries: How many times a 429 response is retried.
            transport: Optional httpx transport, mainly for tests.
            telemetry: Optional telemetry context.
        """
        if not api_key or not isinstance(api_key, str):
            raise ConfigurationError("api_key must be a non-empty string")
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout!r}")
        if max_retries < 0:
            raise ConfigurationError(
                f"max_retries must be >= 0, got {max_retries!r}"
            )
        self._api_key = api_key
        self._base_url = _normalize_base_url(base_url)
        self._timeout_ms = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    @classmethod
    def from_config(
        cls,
        config: FrozenConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> HttpClient:
        """Build a transport from a resolved configuration."""
        if not config.api_key:
            raise ConfigurationError(
                "api_key is required. Set MNOTIFY_API_KEY, provide it in a config "
                "file, or pass it programmatically."
            )
        return cls(
            config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
            transport=transport,
            telemetry=telemetry,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> int | float:
        return self._timeout_ms

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def __repr__(self) -> str:
        return (
            f"HttpClient(api_key='[REDACTED]', base_url={self._base_url!r}, "
            f"timeout={self._timeout_ms!r}, max_retries={self._max_retries!r})"
        )

    # --- Public API ---

    def build_url(
        self, path: str, params: Mapping[str, str | int | float] | None = None
    ) -> str:
        """Resolve ``path`` against the base URL and attach the query string."""
        return self._compose_url(path, params, self._api_key)

    async def request_safe(
        self, descriptor: RequestDescriptor, retry_count: int = 0
    ) -> Result[Any, MNotifyError]:
        """Perform the request and return the decoded body or the failure."""
        url = self.build_url(descriptor.path, descriptor.params)
        context: ErrorContext = {
            "stage": "request",
            "method": descriptor.method,
            "path": descriptor.path,
            "url": self._compose_url(descriptor.path, descriptor.params, _REDACTED),
            "retry_count": retry_count,
        }
        logger.debug(
            "%s %s (attempt %d)", descriptor.method, context["url"], retry_count + 1
        )

        try:
            with self._telemetry(
                T_REQUEST,
                method=descriptor.method,
                path=descriptor.path,
                retry_count=retry_count,
            ):
                response = await self._send(descriptor, url)
        except (TimeoutError, httpx.TimeoutException) as e:
            return self._fail(
                MNotifyError(
                    "Request timeout", 408, context={**context, "stage": "network"}, cause=e
                )
            )
        except Exception as e:  # Network failures of any kind map to status 0
            return self._fail(
                MNotifyError.from_unknown(
                    e, "Network error", 0, {**context, "stage": "network"}
                )
            )

        if response.status_code == 429 and retry_count < self._max_retries:
            delay = parse_retry_after(response.headers.get("retry-after"))
            logger.warning(
                "Rate limited on %s %s; retrying in %.2fs (%d/%d)",
                descriptor.method,
                descriptor.path,
                delay,
                retry_count + 1,
                self._max_retries,
            )
            self._telemetry.count(T_RETRY, path=descriptor.path)
            await asyncio.sleep(delay)
            return await self.request_safe(descriptor, retry_count + 1)

        return self._decode(response, {**context, "stage": "response"})

    async def request(
        self, descriptor: RequestDescriptor, retry_count: int = 0
    ) -> Any:
        """Throwing form of :meth:`request_safe`.

        Raises:
            MNotifyError: The same error ``request_safe`` would return.
        """
        return (await self.request_safe(descriptor, retry_count)).unwrap()

    # --- Internal helpers ---

    def _compose_url(
        self,
        path: str,
        params: Mapping[str, str | int | float] | None,
        key: str,
    ) -> str:
        joined = httpx.URL(self._base_url).join(path.lstrip("/"))
        query: list[tuple[str, str]] = [(API_KEY_PARAM, key)]
        for name, value in (params or {}).items():
            if name == API_KEY_PARAM:
                continue
            query.append((name, str(value)))
        return str(joined.copy_with(params=query))

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _send(self, descriptor: RequestDescriptor, url: str) -> httpx.Response:
        """Issue one attempt under a hard client-side deadline."""
        timeout_seconds = self._timeout_ms / 1000
        async with asyncio.timeout(timeout_seconds):
            async with httpx.AsyncClient(
                transport=self._transport, timeout=timeout_seconds
            ) as client:
                return await client.request(
                    descriptor.method,
                    url,
                    headers=self._headers(),
                    json=descriptor.body,
                )

    def _decode(
        self, response: httpx.Response, context: ErrorContext
    ) -> Result[Any, MNotifyError]:
        if not response.is_success:
            payload = safe_json_parse(response.content, {})
            message = payload.get("message") if isinstance(payload, dict) else None
            if not isinstance(message, str) or not message:
                message = response.reason_phrase or f"HTTP {response.status_code}"
            return self._fail(
                MNotifyError(message, response.status_code, payload, context)
            )

        if not response.content.strip():
            return Success({})
        try:
            return Success(response.json())
        except ValueError as e:
            return self._fail(
                MNotifyError(
                    "Invalid JSON response",
                    0,
                    response.text,
                    context,
                    e,
                )
            )

    def _fail(self, error: MNotifyError) -> Failure[MNotifyError]:
        logger.debug(
            "Request failed: status=%s stage=%s path=%s: %s",
            error.status_code,
            error.context.get("stage"),
            error.context.get("path"),
            error.message,
        )
        self._telemetry.count(T_FAILURE, status_code=error.status_code)
        return Failure(error)
