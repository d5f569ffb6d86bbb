"""Field validators used by the cleaning stage.

Every function here is a pure predicate over a value or a record. The
hard-rejection rules are evaluated in the order they are declared and the
first failing rule decides the rejection reason.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Callable

from txn_etl.models.record import Record


EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

MISSING_TRANSACTION_ID = "missing transaction id"
MISSING_CUSTOMER_ID = "missing customer id"
NON_POSITIVE_AMOUNT = "non-positive amount"
NULL_DATE = "null date"
INVALID_EMAIL = "invalid email"


def is_blank(value: str | None) -> bool:
    """True for None, empty and whitespace-only strings."""
    return value is None or not str(value).strip()


def is_valid_email(value: str | None) -> bool:
    """Check an address against the canonical ``local@domain.tld`` shape."""
    if is_blank(value):
        return False
    return EMAIL_PATTERN.match(str(value).strip()) is not None


def has_positive_amount(record: Record) -> bool:
    return record.amount is not None and record.amount > Decimal("0")


def has_transaction_date(record: Record) -> bool:
    return isinstance(record.transaction_date, date)


# (reason, predicate that must hold for the record to survive)
HARD_REJECTION_RULES: tuple[tuple[str, Callable[[Record], bool]], ...] = (
    (MISSING_TRANSACTION_ID, lambda r: not is_blank(r.transaction_id)),
    (MISSING_CUSTOMER_ID, lambda r: not is_blank(r.customer_id)),
    (NON_POSITIVE_AMOUNT, has_positive_amount),
    (NULL_DATE, has_transaction_date),
    (INVALID_EMAIL, lambda r: is_valid_email(r.email)),
)


def find_rejection_reason(record: Record) -> str | None:
    """
    Return the reason the record must be rejected, or None if it is usable.

    Rules short-circuit: only the first failing rule is reported.
    """
    for reason, predicate in HARD_REJECTION_RULES:
        if not predicate(record):
            return reason
    return None


def describe_rejection(reason: str, record: Record) -> str:
    """Build the rejection line shown in run statistics."""
    if reason == MISSING_TRANSACTION_ID:
        return f"{reason}: {record.summary()}"
    if reason == INVALID_EMAIL:
        return f"{reason} '{record.email}' for txn: {record.transaction_id}"
    return f"{reason} for txn: {record.transaction_id}"
