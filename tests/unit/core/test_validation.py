"""Guards, minimum-shape validators and tolerant normalizers."""

import math

import pytest

from mnotify.core.exceptions import FieldValidationError
from mnotify.core.validation import (
    CONTACT_LIST_KEYS,
    GROUP_LIST_KEYS,
    has_required_fields,
    is_array,
    is_balance_like,
    is_number,
    is_object,
    is_sms_response_like,
    is_string,
    normalize_balance,
    normalize_collection,
    normalize_contact,
    normalize_delivery_report,
    normalize_group,
    normalize_send_sms_response,
    normalize_sender_id,
    normalize_status_response,
    normalize_template,
    validate_required,
)


def _sms_response(**summary_overrides):
    summary = {
        "_id": "A346D5E8-DB36-4A69-9C28-7BC6D1D42A9A",
        "message_id": "20181113161515",
        "type": "API QUICK SMS",
        "total_sent": 2,
        "contacts": 2,
        "total_rejected": 0,
        "numbers_sent": ["0249706365", "0203698970"],
        "credit_used": 2,
        "credit_left": 1502,
    }
    summary.update(summary_overrides)
    return {
        "status": "success",
        "code": "2000",
        "message": "messages sent successfully",
        "summary": summary,
    }


class TestGuards:
    @pytest.mark.unit
    def test_is_number_rejects_bool_and_nan(self):
        assert is_number(3)
        assert is_number(2.5)
        assert not is_number(True)
        assert not is_number(math.nan)
        assert not is_number("3")

    @pytest.mark.unit
    def test_container_guards(self):
        assert is_array([]) and is_array(())
        assert not is_array({})
        assert is_object({}) and not is_object([])
        assert is_string("") and not is_string(None)

    @pytest.mark.unit
    def test_validate_required_names_the_missing_field(self):
        with pytest.raises(FieldValidationError) as exc_info:
            validate_required({"a": 1, "b": None}, ["a", "b"])
        assert exc_info.value.field == "b"

    @pytest.mark.unit
    def test_validate_required_rejects_non_objects(self):
        with pytest.raises(FieldValidationError, match="Expected object"):
            validate_required(["a"], ["a"])

    @pytest.mark.unit
    def test_has_required_fields_never_raises(self):
        assert has_required_fields({"a": 0}, ["a"])
        assert not has_required_fields({}, ["a"])
        assert not has_required_fields(None, ["a"])


class TestSmsNormalization:
    @pytest.mark.unit
    def test_full_response_is_normalized(self):
        record = normalize_send_sms_response(_sms_response())
        assert record is not None
        assert record.status == "success"
        assert record.summary.id == "A346D5E8-DB36-4A69-9C28-7BC6D1D42A9A"
        assert record.summary.numbers_sent == ("0249706365", "0203698970")
        assert record.summary.credit_left == 1502

    @pytest.mark.unit
    def test_missing_summary_is_rejected(self):
        data = _sms_response()
        del data["summary"]
        assert not is_sms_response_like(data)
        assert normalize_send_sms_response(data) is None

    @pytest.mark.unit
    def test_campaign_id_is_accepted_for_message_id(self):
        data = _sms_response()
        data["summary"].pop("message_id")
        data["summary"]["campaign_id"] = "CMP-1"
        record = normalize_send_sms_response(data)
        assert record is not None
        assert record.summary.message_id == "CMP-1"

    @pytest.mark.unit
    @pytest.mark.parametrize("total_sent", [float("inf"), "inf", "-Infinity"])
    def test_non_finite_counts_fall_back_to_zero(self, total_sent):
        record = normalize_send_sms_response(_sms_response(total_sent=total_sent))
        assert record is not None
        assert record.summary.total_sent == 0

    @pytest.mark.unit
    def test_delivery_report(self):
        report = normalize_delivery_report(
            {
                "status": "success",
                "report": [
                    {
                        "_id": 4,
                        "recipient": "233244000000",
                        "status": "DELIVERED",
                        "created_at": "2024-01-01 10:00:00",
                    }
                ],
            }
        )
        assert report is not None
        entry = report.report[0]
        assert entry.id == "4"
        assert entry.date_sent == "2024-01-01 10:00:00"
        assert entry.retries == 0

    @pytest.mark.unit
    def test_delivery_report_with_bad_entry_is_rejected(self):
        assert normalize_delivery_report({"status": "ok", "report": [{"_id": 1}]}) is None


class TestEntityNormalization:
    @pytest.mark.unit
    def test_contact_accepts_alternate_field_names(self):
        contact = normalize_contact(
            {
                "_id": "c1",
                "phone_number": "0244000000",
                "first_name": "Ama",
                "last_name": "Mensah",
                "email": "ama@example.com",
                "dbo": "1990-01-01",
            }
        )
        assert contact is not None
        assert contact.id == "c1"
        assert contact.phone == "0244000000"
        assert contact.firstname == "Ama"
        assert contact.email == ("ama@example.com",)
        assert contact.dob == "1990-01-01"

    @pytest.mark.unit
    def test_contact_inside_envelope(self):
        contact = normalize_contact({"status": "success", "contact": {"id": 7, "phone": "1"}})
        assert contact is not None
        assert contact.id == "7"
        assert contact.firstname == ""

    @pytest.mark.unit
    def test_contact_without_phone_is_rejected(self):
        assert normalize_contact({"_id": "c1", "firstname": "A"}) is None

    @pytest.mark.unit
    def test_group_defaults(self):
        group = normalize_group({"_id": "g1", "group_name": "VIP", "total_contacts": "12"})
        assert group is not None
        assert group.name == "VIP"
        assert group.contact_count == 12
        assert group.description == ""

    @pytest.mark.unit
    def test_group_with_infinite_count_keeps_default(self):
        group = normalize_group(
            {"_id": "g1", "group_name": "VIP", "contact_count": "inf"}
        )
        assert group is not None
        assert group.contact_count == 0

    @pytest.mark.unit
    def test_template_status_defaults_to_pending(self):
        template = normalize_template(
            {"id": "t1", "title": "Promo", "body": "Hello {name}", "status": "weird"}
        )
        assert template is not None
        assert template.name == "Promo"
        assert template.content == "Hello {name}"
        assert template.status == "pending"

    @pytest.mark.unit
    def test_balance_from_string_and_alias(self):
        balance = normalize_balance({"sms_balance": "1,250.50"})
        assert balance is not None
        assert balance.balance == 1250.5
        assert balance.currency == "GHS"
        assert not is_balance_like({"balance": "n/a"})

    @pytest.mark.unit
    def test_sender_id_uses_requested_name_when_missing(self):
        sender = normalize_sender_id(
            {"status": "success", "message": "ok", "sender_status": "Approved"},
            default_name="MyApp",
        )
        assert sender is not None
        assert sender.name == "MyApp"
        assert sender.status == "approved"

    @pytest.mark.unit
    def test_sender_id_outcome_status_is_not_an_approval_state(self):
        sender = normalize_sender_id({"status": "success", "sender_name": "MyApp"})
        assert sender is not None
        assert sender.status == "pending"

    @pytest.mark.unit
    def test_sender_id_without_any_name_is_rejected(self):
        assert normalize_sender_id({"status": "success"}) is None

    @pytest.mark.unit
    def test_status_response_keeps_the_raw_payload(self):
        status = normalize_status_response({"code": 2000, "message": "deleted"})
        assert status is not None
        assert status.status == "2000"
        assert status.data == {"code": 2000, "message": "deleted"}
        assert normalize_status_response([]) is None


class TestCollections:
    @pytest.mark.unit
    def test_bare_list_and_envelope_are_both_accepted(self):
        items = [{"_id": "1", "phone": "a"}, {"_id": "2", "phone": "b"}]
        assert len(normalize_collection(items, CONTACT_LIST_KEYS, normalize_contact)) == 2
        wrapped = {"status": "success", "contacts_list": items}
        assert len(normalize_collection(wrapped, CONTACT_LIST_KEYS, normalize_contact)) == 2

    @pytest.mark.unit
    def test_one_bad_item_invalidates_the_collection(self):
        items = [{"_id": "g1", "name": "A"}, {"name": "no id"}]
        assert normalize_collection(items, GROUP_LIST_KEYS, normalize_group) is None

    @pytest.mark.unit
    def test_non_collection_is_rejected(self):
        assert normalize_collection({"status": "success"}, GROUP_LIST_KEYS, normalize_group) is None
