"""Repository layer for database operations."""

from .transaction_repository import LoadSummary, TransactionRepository

__all__ = ["LoadSummary", "TransactionRepository"]
