"""Database models for the transaction pipeline."""

from .transaction import FLAGGED_VIEW_NAME, FLAGGED_VIEW_SELECT, TransactionRow

__all__ = ["FLAGGED_VIEW_NAME", "FLAGGED_VIEW_SELECT", "TransactionRow"]
