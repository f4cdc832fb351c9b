"""Canonical domain records for the mNotify resources.

These are the normalized shapes handed to callers. The remote API spells
several fields differently across versions; the normalizers in
``mnotify.core.validation`` resolve those variants before a record is built,
so every instance here is fully typed with defaults filled in.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import dataclasses
from typing import Any, Literal

ApprovalStatus = Literal["approved", "pending", "rejected"]
APPROVAL_STATUSES: tuple[ApprovalStatus, ...] = ("approved", "pending", "rejected")


# --- Messaging ---


@dataclasses.dataclass(frozen=True, slots=True)
class SendSMSOptions:
    """Input for a quick bulk send.

    ``recipient`` may be a single number or a sequence of numbers.
    """

    recipient: str | Sequence[str]
    sender: str
    message: str
    is_schedule: bool = False
    schedule_date: str = ""


@dataclasses.dataclass(frozen=True, slots=True)
class SendSMSSummary:
    id: str
    message_id: str
    type: str = "sms"
    total_sent: int = 0
    contacts: int = 0
    total_rejected: int = 0
    numbers_sent: tuple[str, ...] = ()
    credit_used: float = 0
    credit_left: float = 0


@dataclasses.dataclass(frozen=True, slots=True)
class SendSMSResponse:
    status: str
    code: str
    message: str
    summary: SendSMSSummary


@dataclasses.dataclass(frozen=True, slots=True)
class DeliveryReportEntry:
    id: str
    recipient: str
    message: str = ""
    sender: str = ""
    status: str = ""
    date_sent: str = ""
    campaign_id: str = ""
    retries: int = 0


@dataclasses.dataclass(frozen=True, slots=True)
class DeliveryReport:
    status: str
    report: tuple[DeliveryReportEntry, ...] = ()


# --- Contacts and groups ---


@dataclasses.dataclass(frozen=True, slots=True)
class Contact:
    id: str
    phone: str
    firstname: str = ""
    lastname: str = ""
    title: str = ""
    email: tuple[str, ...] = ()
    dob: str = ""


@dataclasses.dataclass(frozen=True, slots=True)
class CreateContactInput:
    """Fields accepted when creating a contact inside a group."""

    phone: str
    firstname: str
    lastname: str
    title: str | None = None
    email: str | Sequence[str] | None = None
    dob: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class Group:
    id: str
    name: str
    description: str = ""
    contact_count: int = 0
    created_at: str = ""
    updated_at: str = ""


# --- Templates and account ---


@dataclasses.dataclass(frozen=True, slots=True)
class Template:
    id: str
    name: str
    content: str
    status: ApprovalStatus = "pending"
    created_at: str = ""
    updated_at: str = ""


@dataclasses.dataclass(frozen=True, slots=True)
class SenderId:
    name: str
    status: ApprovalStatus = "pending"
    id: str = ""
    purpose: str = ""
    created_at: str = ""


@dataclasses.dataclass(frozen=True, slots=True)
class BalanceResponse:
    balance: float
    currency: str = "GHS"
    bonus: float = 0


@dataclasses.dataclass(frozen=True, slots=True)
class StatusResponse:
    """Acknowledgement returned by mutating endpoints (delete, register, ...)."""

    status: str
    message: str = ""
    data: Mapping[str, Any] = dataclasses.field(default_factory=dict)
