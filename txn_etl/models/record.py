"""Transaction record and its structured audit trail."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


UNKNOWN_PHONE = "UNKNOWN"


class AnnotationKind(str, Enum):
    """Kinds of audit events a record can collect on its way through the pipeline."""

    NAME_NORMALIZED = "name_normalized"
    PHONE_NORMALIZED = "phone_normalized"
    PHONE_UNPARSEABLE = "phone_unparseable"
    CURRENCY_CONVERTED = "currency_converted"
    UNKNOWN_CURRENCY = "unknown_currency"
    FLAGGED = "flagged"


class Annotation(BaseModel):
    """A single audit event attached to a record."""

    kind: AnnotationKind = Field(..., description="What happened to the record")
    detail: str = Field(..., description="Human-readable description of the change")


class Record(BaseModel):
    """A customer transaction as it moves through cleaning and transformation.

    Records are mutated in place by the stages. Every field the parser may
    fail to supply is optional so that the cleaner, not the model, decides
    whether the record is usable.
    """

    transaction_id: str | None = Field(default=None, description="Unique transaction identifier")
    customer_id: str | None = Field(default=None, description="Owning customer identifier")
    full_name: str | None = Field(default=None, description="Customer display name")
    phone: str | None = Field(default=None, description="Customer phone number")
    email: str | None = Field(default=None, description="Customer email address")
    amount: Decimal | None = Field(default=None, description="Transaction amount in `currency`")
    currency: str | None = Field(default=None, description="ISO 4217 currency code")
    transaction_date: date | None = Field(default=None, description="Calendar date of the transaction")
    transaction_type: str | None = Field(default=None, description="Category, e.g. CASH, WIRE, ACH")
    country: str | None = Field(default=None, description="ISO 3166 alpha-2 country code")

    flagged: bool = Field(default=False, description="True when at least one flagging rule matched")
    flags: list[str] = Field(default_factory=list, description="Matched flag names, in rule order")
    notes: list[Annotation] = Field(default_factory=list, description="Ordered audit trail")

    def annotate(self, kind: AnnotationKind, detail: str) -> None:
        """Append an audit event. Notes are never overwritten."""
        self.notes.append(Annotation(kind=kind, detail=detail))

    def has_note(self, kind: AnnotationKind) -> bool:
        return any(note.kind == kind for note in self.notes)

    def notes_of(self, kind: AnnotationKind) -> list[Annotation]:
        return [note for note in self.notes if note.kind == kind]

    @property
    def cleansing_notes(self) -> str:
        """Audit trail rendered as one string for storage and reports."""
        return render_notes(self.notes)

    def summary(self) -> str:
        return (
            f"Transaction(id={self.transaction_id!r}, customer={self.customer_id!r}, "
            f"amount={self.amount} {self.currency}, date={self.transaction_date}, "
            f"flagged={self.flagged})"
        )


def render_notes(notes: list[Annotation]) -> str:
    """Join annotation details into the single-line cleansing notes text."""
    return "; ".join(note.detail for note in notes)
