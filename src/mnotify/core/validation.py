"""Guards, shape validators and normalizers for untyped API payloads.

The mNotify API renamed several fields between versions (``_id`` vs ``id``,
``body`` vs ``content``, ...). Rather than strict schemas, each entity gets
one minimum-shape validator and one normalizer that resolves the accepted
field-name variants and fills safe defaults. Everything here is total: the
functions never raise on malformed input, they answer ``False`` or ``None``.
``validate_required`` is the single exception and raises by contract.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import math
from typing import Any, TypeGuard

from mnotify.core.exceptions import FieldValidationError
from mnotify.core.models import (
    APPROVAL_STATUSES,
    ApprovalStatus,
    BalanceResponse,
    Contact,
    DeliveryReport,
    DeliveryReportEntry,
    Group,
    SenderId,
    SendSMSResponse,
    SendSMSSummary,
    StatusResponse,
    Template,
)

_MISSING = object()

# --- Field-name variants accepted from the wire ---

ID_FIELDS = ("id", "_id")
GROUP_ID_FIELDS = (*ID_FIELDS, "group_id")
TEMPLATE_ID_FIELDS = (*ID_FIELDS, "template_id")
SUMMARY_ID_FIELDS = ("_id", "id")
MESSAGE_ID_FIELDS = ("message_id", "campaign_id")
PHONE_FIELDS = ("phone", "phone_number")
FIRSTNAME_FIELDS = ("firstname", "first_name")
LASTNAME_FIELDS = ("lastname", "last_name")
DOB_FIELDS = ("dob", "dbo")
GROUP_NAME_FIELDS = ("name", "group_name")
CONTACT_COUNT_FIELDS = ("contact_count", "total_contacts")
TEMPLATE_NAME_FIELDS = ("name", "title")
TEMPLATE_CONTENT_FIELDS = ("content", "body")
BALANCE_FIELDS = ("balance", "sms_balance")
SENDER_NAME_FIELDS = ("sender_name", "name")
SENDER_STATUS_FIELDS = ("approval_status", "sender_status", "status")
DATE_SENT_FIELDS = ("date_sent", "created_at")

CONTACT_LIST_KEYS = ("contacts_list", "contacts", "data")
GROUP_LIST_KEYS = ("group_list", "groups", "data")
TEMPLATE_LIST_KEYS = ("template_list", "templates", "data")


# --- Type guards ---


def is_string(value: object) -> TypeGuard[str]:
    return isinstance(value, str)


def is_number(value: object) -> TypeGuard[int | float]:
    """True for real numbers; booleans and NaN are rejected."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_array(value: object) -> TypeGuard[list[Any] | tuple[Any, ...]]:
    return isinstance(value, list | tuple)


def is_object(value: object) -> TypeGuard[dict[str, Any]]:
    return isinstance(value, dict)


def _is_identifier(value: object) -> bool:
    return (is_string(value) and value != "") or (
        is_number(value) and not isinstance(value, float)
    )


# --- Required-field checks ---


def validate_required(obj: object, fields: Iterable[str]) -> None:
    """Raise ``FieldValidationError`` unless every field is present and not None."""
    if not is_object(obj):
        raise FieldValidationError("Expected object")
    for field in fields:
        if obj.get(field) is None:
            raise FieldValidationError(f"Missing required field: {field}", field)


def has_required_fields(obj: object, fields: Iterable[str]) -> bool:
    """Non-raising form of :func:`validate_required`."""
    try:
        validate_required(obj, fields)
    except FieldValidationError:
        return False
    return True


def first_present(obj: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Return the value of the first name present (and not None) in ``obj``."""
    for name in names:
        value = obj.get(name, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return default


def unwrap_entity(data: object, *keys: str) -> object:
    """Unwrap ``{"<entity>": {...}}`` envelopes; other shapes pass through."""
    if is_object(data):
        for key in keys:
            inner = data.get(key)
            if is_object(inner):
                return inner
    return data


def unwrap_collection(data: object, *keys: str) -> list[Any] | None:
    """Return the list behind a bare-list or ``{"<key>": [...]}`` response."""
    if is_array(data):
        return list(data)
    if is_object(data):
        for key in keys:
            inner = data.get(key)
            if is_array(inner):
                return list(inner)
    return None


# --- Coercions used by normalizers ---


def _as_str(value: object, default: str = "") -> str:
    if is_string(value):
        return value
    if is_number(value):
        return str(value)
    return default


def _as_int(value: object, default: int = 0) -> int:
    if is_number(value):
        number = value
    elif is_string(value):
        try:
            number = float(value)
        except ValueError:
            return default
    else:
        return default
    if isinstance(number, float) and not math.isfinite(number):
        return default
    return int(number)


def _as_float(value: object) -> float | None:
    if is_number(value):
        return float(value)
    if is_string(value):
        try:
            parsed = float(value.replace(",", ""))
        except ValueError:
            return None
        return None if math.isnan(parsed) else parsed
    return None


def _as_str_tuple(value: object) -> tuple[str, ...]:
    if is_string(value):
        return (value,) if value else ()
    if is_array(value):
        return tuple(str(item) for item in value if is_string(item) or is_number(item))
    return ()


def _as_approval_status(value: object) -> ApprovalStatus:
    text = _as_str(value).strip().lower()
    for status in APPROVAL_STATUSES:
        if text == status:
            return status
    return "pending"


# --- Entity validators (minimum shape) ---


def is_contact_like(data: object) -> bool:
    if not is_object(data):
        return False
    return _is_identifier(first_present(data, *ID_FIELDS)) and is_string(
        first_present(data, *PHONE_FIELDS)
    )


def is_group_like(data: object) -> bool:
    if not is_object(data):
        return False
    return _is_identifier(first_present(data, *GROUP_ID_FIELDS)) and is_string(
        first_present(data, *GROUP_NAME_FIELDS)
    )


def is_template_like(data: object) -> bool:
    if not is_object(data):
        return False
    return (
        _is_identifier(first_present(data, *TEMPLATE_ID_FIELDS))
        and is_string(first_present(data, *TEMPLATE_NAME_FIELDS))
        and is_string(first_present(data, *TEMPLATE_CONTENT_FIELDS))
    )


def is_sms_response_like(data: object) -> bool:
    if not is_object(data) or not is_string(data.get("status")):
        return False
    summary = data.get("summary")
    if not is_object(summary):
        return False
    return _is_identifier(first_present(summary, *SUMMARY_ID_FIELDS)) and _is_identifier(
        first_present(summary, *MESSAGE_ID_FIELDS)
    )


def _is_report_entry_like(item: object) -> bool:
    if not is_object(item):
        return False
    return _is_identifier(first_present(item, *ID_FIELDS)) and is_string(
        item.get("recipient")
    )


def is_delivery_report_like(data: object) -> bool:
    if not is_object(data) or not is_string(data.get("status")):
        return False
    report = data.get("report")
    return is_array(report) and all(_is_report_entry_like(item) for item in report)


def is_balance_like(data: object) -> bool:
    if not is_object(data):
        return False
    return _as_float(first_present(data, *BALANCE_FIELDS)) is not None


def is_sender_id_like(data: object) -> bool:
    return is_object(data)


# --- Normalizers (canonical records) ---


def normalize_contact(data: object) -> Contact | None:
    data = unwrap_entity(data, "contact", "data")
    if not is_contact_like(data):
        return None
    return Contact(
        id=_as_str(first_present(data, *ID_FIELDS)),
        phone=first_present(data, *PHONE_FIELDS),
        firstname=_as_str(first_present(data, *FIRSTNAME_FIELDS)),
        lastname=_as_str(first_present(data, *LASTNAME_FIELDS)),
        title=_as_str(data.get("title")),
        email=_as_str_tuple(data.get("email")),
        dob=_as_str(first_present(data, *DOB_FIELDS)),
    )


def normalize_group(data: object) -> Group | None:
    data = unwrap_entity(data, "group", "data")
    if not is_group_like(data):
        return None
    return Group(
        id=_as_str(first_present(data, *GROUP_ID_FIELDS)),
        name=first_present(data, *GROUP_NAME_FIELDS),
        description=_as_str(data.get("description")),
        contact_count=_as_int(first_present(data, *CONTACT_COUNT_FIELDS)),
        created_at=_as_str(data.get("created_at")),
        updated_at=_as_str(data.get("updated_at")),
    )


def normalize_template(data: object) -> Template | None:
    data = unwrap_entity(data, "template", "data")
    if not is_template_like(data):
        return None
    return Template(
        id=_as_str(first_present(data, *TEMPLATE_ID_FIELDS)),
        name=first_present(data, *TEMPLATE_NAME_FIELDS),
        content=first_present(data, *TEMPLATE_CONTENT_FIELDS),
        status=_as_approval_status(data.get("status")),
        created_at=_as_str(data.get("created_at")),
        updated_at=_as_str(data.get("updated_at")),
    )


def normalize_send_sms_response(data: object) -> SendSMSResponse | None:
    if not is_sms_response_like(data):
        return None
    summary = data["summary"]
    return SendSMSResponse(
        status=data["status"],
        code=_as_str(data.get("code")),
        message=_as_str(data.get("message")),
        summary=SendSMSSummary(
            id=_as_str(first_present(summary, *SUMMARY_ID_FIELDS)),
            message_id=_as_str(first_present(summary, *MESSAGE_ID_FIELDS)),
            type=_as_str(summary.get("type"), "sms"),
            total_sent=_as_int(summary.get("total_sent")),
            contacts=_as_int(summary.get("contacts")),
            total_rejected=_as_int(summary.get("total_rejected")),
            numbers_sent=_as_str_tuple(summary.get("numbers_sent")),
            credit_used=_as_float(summary.get("credit_used")) or 0,
            credit_left=_as_float(summary.get("credit_left")) or 0,
        ),
    )


def _normalize_report_entry(item: Mapping[str, Any]) -> DeliveryReportEntry:
    return DeliveryReportEntry(
        id=_as_str(first_present(item, *ID_FIELDS)),
        recipient=item["recipient"],
        message=_as_str(item.get("message")),
        sender=_as_str(item.get("sender")),
        status=_as_str(item.get("status")),
        date_sent=_as_str(first_present(item, *DATE_SENT_FIELDS)),
        campaign_id=_as_str(item.get("campaign_id")),
        retries=_as_int(item.get("retries")),
    )


def normalize_delivery_report(data: object) -> DeliveryReport | None:
    if not is_delivery_report_like(data):
        return None
    return DeliveryReport(
        status=data["status"],
        report=tuple(_normalize_report_entry(item) for item in data["report"]),
    )


def normalize_balance(data: object) -> BalanceResponse | None:
    if not is_balance_like(data):
        return None
    return BalanceResponse(
        balance=_as_float(first_present(data, *BALANCE_FIELDS)),
        currency=_as_str(data.get("currency"), "GHS") or "GHS",
        bonus=_as_float(data.get("bonus")) or 0,
    )


def normalize_sender_id(data: object, default_name: str | None = None) -> SenderId | None:
    """Normalize a sender-ID payload.

    The status endpoint answers with the approval state only, so the caller
    may supply the name it asked about. A top-level ``status`` is only read
    as the approval state when it holds one of the approval values; on most
    responses it is the request outcome (``"success"``).
    """
    data = unwrap_entity(data, "sender", "data")
    if not is_sender_id_like(data):
        return None
    name = first_present(data, *SENDER_NAME_FIELDS, default=default_name)
    if not is_string(name) or not name:
        return None
    status_value = next(
        (
            data[field]
            for field in SENDER_STATUS_FIELDS
            if _as_str(data.get(field)).strip().lower() in APPROVAL_STATUSES
        ),
        None,
    )
    return SenderId(
        name=name,
        status=_as_approval_status(status_value),
        id=_as_str(first_present(data, *ID_FIELDS)),
        purpose=_as_str(data.get("purpose")),
        created_at=_as_str(data.get("created_at")),
    )


def normalize_status_response(data: object) -> StatusResponse | None:
    if not is_object(data):
        return None
    return StatusResponse(
        status=_as_str(first_present(data, "status", "code")),
        message=_as_str(data.get("message")),
        data=dict(data),
    )


def normalize_collection[T](
    data: object,
    keys: tuple[str, ...],
    normalize: Callable[[object], T | None],
) -> list[T] | None:
    """Normalize every item of a collection response.

    A single item that cannot be normalized invalidates the whole response,
    so callers never receive a silently truncated list.
    """
    items = unwrap_collection(data, *keys)
    if items is None:
        return None
    records: list[T] = []
    for item in items:
        record = normalize(item)
        if record is None:
            return None
        records.append(record)
    return records
