"""Deterministic field-level fixes for records that passed validation."""

from __future__ import annotations

import logging
import re

from txn_etl.models.record import UNKNOWN_PHONE, AnnotationKind, Record

logger = logging.getLogger(__name__)


NON_DIGITS = re.compile(r"[^0-9]")


# ============================================================================
# Field helpers
# ============================================================================

def title_case_name(name: str | None) -> str | None:
    """
    Title-case a display name.

    - "JOHN SMITH" -> "John Smith"
    - "  mary   ann  o'neil " -> "Mary Ann O'neil"

    Blank names are returned unchanged.
    """
    if name is None or not name.strip():
        return name
    words = name.strip().lower().split()
    return " ".join(word[0].upper() + word[1:] for word in words)


def normalize_phone(phone: str | None) -> str | None:
    """
    Format a phone number as a 10-digit domestic number.

    - "5551234567" -> "(555) 123-4567"
    - "+1 555.123.4567" -> "(555) 123-4567"
    - "12345" -> None

    Returns None when the digits cannot form a 10-digit number.
    """
    digits = NON_DIGITS.sub("", phone or "")
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) != 10:
        return None
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def upper_trim(value: str | None) -> str | None:
    return value.strip().upper() if value is not None else None


def lower_trim(value: str | None) -> str | None:
    return value.strip().lower() if value is not None else None


# ============================================================================
# Record normalization
# ============================================================================

def normalize_record(record: Record) -> Record:
    """
    Apply all soft fixes to a record in place.

    Name and phone changes are written to the record's audit trail. Running
    this twice on the same record adds nothing the second time.
    """
    titled = title_case_name(record.full_name)
    if titled != record.full_name:
        record.full_name = titled
        record.annotate(AnnotationKind.NAME_NORMALIZED, "Name normalized")

    formatted = normalize_phone(record.phone)
    if formatted is None:
        if record.phone != UNKNOWN_PHONE:
            logger.debug(f"Unparseable phone {record.phone!r} for txn {record.transaction_id}")
            record.phone = UNKNOWN_PHONE
            record.annotate(
                AnnotationKind.PHONE_UNPARSEABLE, "Phone unparseable, set to UNKNOWN"
            )
    elif formatted != record.phone:
        record.phone = formatted
        record.annotate(AnnotationKind.PHONE_NORMALIZED, "Phone normalized")

    record.currency = upper_trim(record.currency)
    record.transaction_type = upper_trim(record.transaction_type)
    record.country = upper_trim(record.country)
    record.email = lower_trim(record.email)

    return record
