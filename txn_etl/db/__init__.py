"""Persistence for transformed transactions."""

from txn_etl.db.loader import DatabaseLoader, sanitize_db_url
from txn_etl.db.repositories import LoadSummary, TransactionRepository

__all__ = ["DatabaseLoader", "LoadSummary", "TransactionRepository", "sanitize_db_url"]
