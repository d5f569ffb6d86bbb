"""
Human-readable data quality report for a pipeline run.

The report is plain text: printed to stdout by the CLI and optionally saved
next to the run as ``etl_report_<timestamp>.txt``.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

import structlog

from txn_etl.db.repositories import LoadSummary
from txn_etl.models.record import Record
from txn_etl.models.statistics import RunStatistics

logger = structlog.get_logger(__name__)


RULE = "=" * 60


def _section(title: str) -> str:
    return f"\n--- {title} ".ljust(61, "-")


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


class QualityReporter:
    """Renders run statistics and the final batch into a text report."""

    def __init__(self, max_rejections: int = 10, top_countries: int = 5):
        self.max_rejections = max_rejections
        self.top_countries = top_countries

    def render(
        self,
        stats: RunStatistics,
        records: Sequence[Record],
        summary: Optional[LoadSummary] = None,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Build the report text.

        Args:
            stats: Counters and messages for the run
            records: Final transformed batch
            summary: Verification query result, if the load step ran
            generated_at: Report timestamp (defaults to now)

        Returns:
            Report as a single string
        """
        generated_at = generated_at or datetime.now()
        lines = [
            RULE,
            "  ETL PIPELINE - DATA QUALITY REPORT",
            RULE,
            f"  Run timestamp : {generated_at:%Y-%m-%d %H:%M:%S}",
            _section("PIPELINE SUMMARY"),
            f"  Records read       : {stats.total_read}",
            f"  Rows skipped       : {stats.skipped_rows}",
            f"  Records cleaned    : {stats.total_cleaned}",
            f"  Records rejected   : {stats.total_rejected}",
            f"  Duplicates removed : {stats.duplicates_removed}",
            f"  Conversions        : {stats.currency_conversions}",
            f"  Records loaded     : {stats.total_loaded}",
            f"  Records flagged    : {stats.total_flagged}",
            f"  Pass rate          : {stats.pass_rate:.1f}%",
        ]

        if records:
            lines.extend(self._breakdown(records))
            lines.extend(self._financials(records))

        if summary is not None:
            lines.extend(
                [
                    _section("DB VERIFICATION"),
                    f"  Total records     : {summary.total}",
                    f"  Flagged records   : {summary.flagged}",
                    f"  Total volume      : {_money(summary.total_amount)}",
                    f"  Unique countries  : {summary.unique_countries}",
                ]
            )

        if stats.rejected_rows:
            lines.append(_section("REJECTION REASONS"))
            shown = stats.rejected_rows[: self.max_rejections]
            lines.extend(f"  - {reason}" for reason in shown)
            remaining = len(stats.rejected_rows) - len(shown)
            if remaining > 0:
                lines.append(f"  ... and {remaining} more.")

        if stats.warnings:
            lines.append(_section("WARNINGS"))
            lines.extend(f"  - {warning}" for warning in stats.warnings)

        lines.append("")
        lines.append(RULE)
        return "\n".join(lines) + "\n"

    def _breakdown(self, records: Sequence[Record]) -> list[str]:
        by_type = Counter(r.transaction_type or "UNKNOWN" for r in records)
        by_country = Counter(r.country or "UNKNOWN" for r in records)

        lines = [_section("TRANSACTION BREAKDOWN"), "  By Transaction Type:"]
        lines.extend(f"    {name:<20} : {count}" for name, count in sorted(by_type.items()))
        lines.append(f"  Top {self.top_countries} Countries:")
        lines.extend(
            f"    {name:<20} : {count}"
            for name, count in by_country.most_common(self.top_countries)
        )
        return lines

    def _financials(self, records: Sequence[Record]) -> list[str]:
        amounts = [r.amount for r in records if r.amount is not None]
        total = sum(amounts, Decimal("0"))
        average = (total / len(amounts)) if amounts else Decimal("0")
        largest = max(amounts) if amounts else Decimal("0")
        currency = records[0].currency or ""
        return [
            _section(f"FINANCIAL SUMMARY ({currency})"),
            f"  Total volume : {_money(total):>18}",
            f"  Average txn  : {_money(average):>18}",
            f"  Largest txn  : {_money(largest):>18}",
        ]

    def write(self, report: str, directory: str | Path = ".") -> Optional[Path]:
        """
        Save the report as ``etl_report_YYYYMMDD_HHMMSS.txt``.

        A failed write is logged and returns None; it never fails the run.
        """
        path = Path(directory) / f"etl_report_{datetime.now():%Y%m%d_%H%M%S}.txt"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(report, encoding="utf-8")
        except OSError as e:
            logger.error("report.write_failed", path=str(path), error=str(e))
            return None
        logger.info("report.saved", path=str(path))
        return path
