"""Tests for validators, the record normalizer and the cleaning stage."""

from datetime import date
from decimal import Decimal

import pytest

from txn_etl.cleaning.normalizer import (
    normalize_phone,
    normalize_record,
    title_case_name,
)
from txn_etl.cleaning import stage as stage_module
from txn_etl.cleaning.stage import CleaningStage
from txn_etl.cleaning.validators import (
    find_rejection_reason,
    is_blank,
    is_valid_email,
)
from txn_etl.models.record import UNKNOWN_PHONE, AnnotationKind


class TestValidators:
    """Test field-level predicates."""

    def test_is_blank(self):
        """Test None, empty and whitespace-only values."""
        assert is_blank(None)
        assert is_blank("")
        assert is_blank("   \t")
        assert not is_blank("TXN001")

    def test_valid_emails(self):
        assert is_valid_email("john@example.com")
        assert is_valid_email("JOHN.SMITH+tag@Mail.Example.ORG")
        assert is_valid_email("  padded@example.com  ")

    def test_invalid_emails(self):
        assert not is_valid_email(None)
        assert not is_valid_email("")
        assert not is_valid_email("not-an-email")
        assert not is_valid_email("missing@tld")
        assert not is_valid_email("short@example.c")
        assert not is_valid_email("two@@example.com")

    def test_valid_record_has_no_reason(self, make_record):
        assert find_rejection_reason(make_record()) is None

    @pytest.mark.parametrize(
        "overrides, reason",
        [
            ({"transaction_id": "  "}, "missing transaction id"),
            ({"customer_id": None}, "missing customer id"),
            ({"amount": Decimal("0")}, "non-positive amount"),
            ({"amount": Decimal("-100")}, "non-positive amount"),
            ({"amount": None}, "non-positive amount"),
            ({"transaction_date": None}, "null date"),
            ({"email": "not-an-email"}, "invalid email"),
        ],
    )
    def test_rejection_reasons(self, make_record, overrides, reason):
        """Each hard rule maps to its own reason."""
        assert find_rejection_reason(make_record(**overrides)) == reason

    def test_first_failing_rule_wins(self, make_record):
        """Only the first matching reason is reported."""
        record = make_record(customer_id="", amount=Decimal("-1"), email="bad")
        assert find_rejection_reason(record) == "missing customer id"


class TestNormalizer:
    """Test field normalization helpers."""

    def test_title_case_name(self):
        assert title_case_name("JOHN SMITH") == "John Smith"
        assert title_case_name("john smith") == "John Smith"
        assert title_case_name("  mary   ann  ") == "Mary Ann"
        assert title_case_name("John Smith") == "John Smith"

    def test_title_case_blank(self):
        assert title_case_name(None) is None
        assert title_case_name("") == ""

    def test_normalize_phone(self):
        assert normalize_phone("5551234567") == "(555) 123-4567"
        assert normalize_phone("+15551234567") == "(555) 123-4567"
        assert normalize_phone("1-555-123-4567") == "(555) 123-4567"
        assert normalize_phone("(555) 123-4567") == "(555) 123-4567"

    def test_normalize_phone_unparseable(self):
        assert normalize_phone("12345") is None
        assert normalize_phone("25551234567") is None
        assert normalize_phone("") is None
        assert normalize_phone(None) is None

    def test_normalize_record_notes_changes(self, make_record):
        record = make_record(full_name="JOHN SMITH", phone="555.123.4567")
        normalize_record(record)

        assert record.full_name == "John Smith"
        assert record.phone == "(555) 123-4567"
        assert [n.kind for n in record.notes] == [
            AnnotationKind.NAME_NORMALIZED,
            AnnotationKind.PHONE_NORMALIZED,
        ]

    def test_normalize_record_code_fields(self, make_record):
        record = make_record(
            currency=" eur ", transaction_type="wire ", country=" de", email=" A@B.COM "
        )
        normalize_record(record)

        assert record.currency == "EUR"
        assert record.transaction_type == "WIRE"
        assert record.country == "DE"
        assert record.email == "a@b.com"

    def test_unparseable_phone_set_to_unknown(self, make_record):
        record = make_record(phone="12345")
        normalize_record(record)

        assert record.phone == UNKNOWN_PHONE
        assert record.has_note(AnnotationKind.PHONE_UNPARSEABLE)

    def test_normalization_is_idempotent(self, make_record):
        """An already-normalized record gains no changes and no notes."""
        record = make_record(full_name="John Smith", phone="(555) 123-4567")
        normalize_record(record)
        assert record.notes == []

        record = make_record(full_name="JANE DOE", phone="bogus")
        normalize_record(record)
        notes_after_first = list(record.notes)
        normalize_record(record)
        assert record.notes == notes_after_first
        assert record.full_name == "Jane Doe"
        assert record.phone == UNKNOWN_PHONE


class TestCleaningStage:
    """Test the batch cleaning stage."""

    def test_valid_record_passes_through(self, make_record):
        result = CleaningStage().clean([make_record()])

        assert result.cleaned_count == 1
        assert result.rejected_count == 0
        assert result.reasons == []

    def test_scenario_record_is_normalized(self, make_record):
        record = make_record(
            full_name="JOHN SMITH",
            phone="5551234567",
            email="JOHN@EXAMPLE.COM",
            amount=Decimal("12000"),
            transaction_type="CASH",
        )
        result = CleaningStage().clean([record])

        cleaned = result.accepted[0]
        assert cleaned.full_name == "John Smith"
        assert cleaned.phone == "(555) 123-4567"
        assert cleaned.email == "john@example.com"

    def test_non_positive_amounts_rejected(self, make_record):
        records = [
            make_record(transaction_id="A", amount=Decimal("-100")),
            make_record(transaction_id="B", amount=Decimal("0")),
            make_record(transaction_id="C"),
        ]
        result = CleaningStage().clean(records)

        assert [r.transaction_id for r in result.accepted] == ["C"]
        assert result.rejected_count == 2
        assert result.reasons == [
            "non-positive amount for txn: A",
            "non-positive amount for txn: B",
        ]

    def test_reason_mentions_record(self, make_record):
        result = CleaningStage().clean(
            [
                make_record(transaction_id=""),
                make_record(transaction_id="TXN009", email="nope"),
                make_record(transaction_id="TXN010", transaction_date=None),
            ]
        )

        assert result.reasons[0].startswith("missing transaction id: ")
        assert "CUST001" in result.reasons[0]
        assert result.reasons[1] == "invalid email 'nope' for txn: TXN009"
        assert result.reasons[2] == "null date for txn: TXN010"

    def test_bad_record_does_not_abort_batch(self, make_record):
        records = [
            make_record(transaction_id="A"),
            make_record(transaction_id="B", customer_id=None),
            make_record(transaction_id="C"),
        ]
        result = CleaningStage().clean(records)

        assert [r.transaction_id for r in result.accepted] == ["A", "C"]
        assert result.rejected_count == 1

    def test_unexpected_error_rejects_only_that_record(self, make_record, monkeypatch):
        real_normalize = stage_module.normalize_record

        def failing_normalize(record):
            if record.transaction_id == "B":
                raise RuntimeError("boom")
            return real_normalize(record)

        monkeypatch.setattr(stage_module, "normalize_record", failing_normalize)
        records = [make_record(transaction_id=tid) for tid in ("A", "B", "C")]
        result = CleaningStage().clean(records)

        assert [r.transaction_id for r in result.accepted] == ["A", "C"]
        assert result.rejected_count == 1
        assert result.reasons == ["unprocessable record for txn: B"]

    def test_accepted_email_is_lowered_and_trimmed(self, make_record):
        original = "  Mixed.Case@Example.COM "
        result = CleaningStage().clean([make_record(email=original)])

        email = result.accepted[0].email
        assert email == original.strip().lower()
        assert is_valid_email(email)

    def test_empty_batch(self):
        result = CleaningStage().clean([])

        assert result.accepted == []
        assert result.rejected_count == 0
        assert result.reasons == []

    def test_counters_reset_between_calls(self, make_record):
        """A second call reports statistics for that call only."""
        stage = CleaningStage()
        first = stage.clean([make_record(customer_id=""), make_record()])
        second = stage.clean([make_record()])

        assert first.rejected_count == 1
        assert second.rejected_count == 0
        assert second.reasons == []
        assert second.cleaned_count == 1

    def test_dates_are_kept(self, make_record):
        result = CleaningStage().clean([make_record(transaction_date=date(2024, 1, 2))])
        assert result.accepted[0].transaction_date == date(2024, 1, 2)
