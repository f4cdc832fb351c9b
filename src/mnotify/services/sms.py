"""SMS sending and delivery reports."""

from __future__ import annotations

from mnotify.core.exceptions import MNotifyError
from mnotify.core.models import DeliveryReport, SendSMSOptions, SendSMSResponse
from mnotify.core.types import Failure, RequestDescriptor, Result
from mnotify.core.validation import (
    is_string,
    normalize_delivery_report,
    normalize_send_sms_response,
)
from mnotify.services.base import ResourceService
from mnotify.utils import to_array

SEND_PATH = "/sms/quick"
STATUS_PATH = "/campaign/{campaign_id}/{status}"


class SMSService(ResourceService):
    """Quick bulk SMS and campaign status lookups."""

    service_name = "sms"

    async def send_quick_bulk_sms_safe(
        self, options: SendSMSOptions
    ) -> Result[SendSMSResponse, MNotifyError]:
        """Send one message to one or more recipients.

        A single recipient string is sent as a one-element list. Empty
        recipients, sender or message, and a schedule flag without a date,
        are rejected before any request is made.
        """
        operation = "send_quick_bulk_sms"
        candidates = to_array(options.recipient)
        recipients = [r for r in candidates if is_string(r) and r.strip()]
        problem = None
        if any(r is not None and not is_string(r) for r in candidates):
            problem = "send_quick_bulk_sms recipients must be strings"
        elif not recipients:
            problem = "send_quick_bulk_sms requires at least one recipient"
        elif not options.sender or not options.sender.strip():
            problem = "send_quick_bulk_sms requires a sender"
        elif not options.message:
            problem = "send_quick_bulk_sms requires a message"
        elif options.is_schedule and not options.schedule_date:
            problem = "schedule_date is required when is_schedule is true"
        if problem:
            return self._reject(operation, problem, method="POST", path=SEND_PATH)

        descriptor = RequestDescriptor(
            "POST",
            SEND_PATH,
            body={
                "recipient": recipients,
                "sender": options.sender,
                "message": options.message,
                "is_schedule": bool(options.is_schedule),
                "schedule_date": options.schedule_date or "",
            },
        )
        return await self._execute(
            operation,
            descriptor,
            normalize_send_sms_response,
            "Invalid SMS response format",
        )

    async def send_quick_bulk_sms(self, options: SendSMSOptions) -> SendSMSResponse:
        return (await self.send_quick_bulk_sms_safe(options)).unwrap()

    async def get_sms_status_safe(
        self, campaign_id: str, status: str = "null"
    ) -> Result[DeliveryReport, MNotifyError]:
        """Fetch the delivery report of a campaign, optionally filtered by status."""
        operation = "get_sms_status"
        path = self._resolve_path(
            operation,
            "GET",
            STATUS_PATH,
            campaign_id=campaign_id,
            status=status or "null",
        )
        if isinstance(path, Failure):
            return path
        return await self._execute(
            operation,
            RequestDescriptor("GET", path.value),
            normalize_delivery_report,
            "Invalid delivery report format",
        )

    async def get_sms_status(
        self, campaign_id: str, status: str = "null"
    ) -> DeliveryReport:
        return (await self.get_sms_status_safe(campaign_id, status)).unwrap()
