"""Account balance and sender-ID registration."""

from __future__ import annotations

from mnotify.core.exceptions import MNotifyError
from mnotify.core.models import BalanceResponse, SenderId
from mnotify.core.types import RequestDescriptor, Result
from mnotify.core.validation import normalize_balance, normalize_sender_id
from mnotify.services.base import ResourceService

BALANCE_PATH = "/balance/sms"
SENDER_REGISTER_PATH = "/senderid/register"
SENDER_STATUS_PATH = "/senderid/status"


class AccountService(ResourceService):
    """Balance lookups and sender-ID lifecycle.

    Sender IDs must be approved before they can be used as an SMS ``sender``.
    Register one with :meth:`register_sender_id` and poll its approval with
    :meth:`check_sender_id_status`.
    """

    service_name = "account"

    async def get_balance_safe(self) -> Result[BalanceResponse, MNotifyError]:
        return await self._execute(
            "get_balance",
            RequestDescriptor("GET", BALANCE_PATH),
            normalize_balance,
            "Invalid balance response format",
        )

    async def get_balance(self) -> BalanceResponse:
        return (await self.get_balance_safe()).unwrap()

    async def register_sender_id_safe(
        self, name: str, purpose: str
    ) -> Result[SenderId, MNotifyError]:
        operation = "register_sender_id"
        if not name or not name.strip():
            return self._reject(
                operation,
                "register_sender_id requires a sender name",
                method="POST",
                path=SENDER_REGISTER_PATH,
            )
        return await self._execute(
            operation,
            RequestDescriptor(
                "POST",
                SENDER_REGISTER_PATH,
                body={"sender_name": name, "purpose": purpose},
            ),
            lambda data: normalize_sender_id(data, default_name=name),
            "Invalid sender ID response format",
        )

    async def register_sender_id(self, name: str, purpose: str) -> SenderId:
        return (await self.register_sender_id_safe(name, purpose)).unwrap()

    async def check_sender_id_status_safe(
        self, name: str
    ) -> Result[SenderId, MNotifyError]:
        """Look up the approval state of a registered sender ID."""
        operation = "check_sender_id_status"
        if not name or not name.strip():
            return self._reject(
                operation,
                "check_sender_id_status requires a sender name",
                method="POST",
                path=SENDER_STATUS_PATH,
            )
        return await self._execute(
            operation,
            RequestDescriptor(
                "POST", SENDER_STATUS_PATH, body={"sender_name": name}
            ),
            lambda data: normalize_sender_id(data, default_name=name),
            "Invalid sender ID response format",
        )

    async def check_sender_id_status(self, name: str) -> SenderId:
        return (await self.check_sender_id_status_safe(name)).unwrap()

    async def get_sender_ids_safe(self) -> Result[list[SenderId], MNotifyError]:
        """Always fails: the API has no endpoint listing sender IDs."""
        return self._reject(
            "get_sender_ids",
            "mNotify API does not provide a sender list endpoint; "
            "use check_sender_id_status(name) for a known sender ID",
            method="POST",
            path=SENDER_STATUS_PATH,
            status_code=400,
        )

    async def get_sender_ids(self) -> list[SenderId]:
        return (await self.get_sender_ids_safe()).unwrap()
