"""The primary user-facing entry point.

``MNotify`` wires one transport to the five resource services. This is the
only place where ambient configuration is resolved; everything below it
receives a ``FrozenConfig`` or an ``HttpClient``.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from mnotify.client.http_client import HttpClient
from mnotify.config import FrozenConfig, resolve_config
from mnotify.services import (
    AccountService,
    ContactService,
    GroupService,
    SMSService,
    TemplateService,
)
from mnotify.utils import compact

if TYPE_CHECKING:
    import httpx

    from mnotify.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)


class MNotify:
    """Client for the mNotify bulk messaging API.

    Example:
        client = MNotify(api_key="...")
        result = await client.sms.send_quick_bulk_sms_safe(
            SendSMSOptions(recipient="233200000000", sender="MyApp", message="Hi")
        )

    Attributes:
        sms: Quick bulk SMS and delivery reports.
        contacts: Contact creation and listing.
        groups: Groups and their members.
        templates: Message templates.
        account: Balance and sender IDs.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: int | None = None,
        max_retries: int | None = None,
        config: FrozenConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        """Build the client.

        Explicit arguments win over ``config``. Without ``config`` the
        configuration system is consulted (environment, pyproject.toml, the
        home config file) for anything not passed here.

        Raises:
            ConfigurationError: If no api key can be found or a value is invalid.
            ValueError: If the configuration sources fail validation.
        """
        overrides = compact(
            {
                "api_key": api_key,
                "base_url": base_url,
                "timeout": timeout,
                "max_retries": max_retries,
            }
        )
        if config is None:
            config = resolve_config(overrides).to_frozen()
        elif overrides:
            config = dataclasses.replace(config, **overrides)

        self.config = config
        self.http = HttpClient.from_config(
            config, transport=transport, telemetry=telemetry
        )
        self.sms = SMSService(self.http)
        self.contacts = ContactService(self.http)
        self.groups = GroupService(self.http)
        self.templates = TemplateService(self.http)
        self.account = AccountService(self.http)
        logger.debug("Initialized %r", self.http)

    def __repr__(self) -> str:
        return f"MNotify(config={self.config})"


def create_client(
    config: FrozenConfig | None = None,
    *,
    api_key: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MNotify:
    """Create a client from a frozen config, or resolve one from the environment."""
    return MNotify(api_key, config=config, transport=transport)
