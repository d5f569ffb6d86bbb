"""Transaction table holding the pipeline's output."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, DateTime, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from txn_etl.db.base import Base
from txn_etl.models.record import Record


FLAGGED_VIEW_NAME = "flagged_transactions"
FLAGGED_VIEW_SELECT = "SELECT * FROM transactions WHERE flagged"


class TransactionRow(Base):
    """
    One cleaned, converted and flagged transaction.

    Rows are keyed by the source transaction id; loading the same id again
    replaces the stored row.
    """

    __tablename__ = "transactions"

    transaction_id: Mapped[str] = mapped_column(
        String(255), primary_key=True, comment="Unique transaction ID from the source file"
    )
    customer_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True, comment="Owning customer ID"
    )
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(
        String(32), nullable=True, comment="(AAA) BBB-CCCC or UNKNOWN"
    )
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    amount_usd: Mapped[Decimal] = mapped_column(
        Numeric(precision=18, scale=2),
        nullable=False,
        comment="Amount in the reference currency",
    )
    transaction_date: Mapped[str] = mapped_column(
        String(10), nullable=False, index=True, comment="ISO-8601 date (YYYY-MM-DD)"
    )
    transaction_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)

    flagged: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True, comment="Needs compliance review"
    )
    cleansing_notes: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="Rendered audit trail"
    )

    loaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_transaction_flagged_country", "flagged", "country"),
    )

    @staticmethod
    def values_from_record(record: Record) -> Dict[str, Any]:
        """Column values for a transformed record."""
        return {
            "transaction_id": record.transaction_id,
            "customer_id": record.customer_id,
            "full_name": record.full_name,
            "phone": record.phone,
            "email": record.email,
            "amount_usd": record.amount,
            "transaction_date": record.transaction_date.isoformat()
            if record.transaction_date
            else None,
            "transaction_type": record.transaction_type,
            "country": record.country,
            "flagged": record.flagged,
            "cleansing_notes": record.cleansing_notes,
            "loaded_at": datetime.now(timezone.utc),
        }

    def __repr__(self) -> str:
        return (
            f"<TransactionRow(transaction_id={self.transaction_id}, "
            f"amount_usd={self.amount_usd}, flagged={self.flagged})>"
        )
