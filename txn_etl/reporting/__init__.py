"""Data quality reporting."""

from txn_etl.reporting.report import QualityReporter

__all__ = ["QualityReporter"]
