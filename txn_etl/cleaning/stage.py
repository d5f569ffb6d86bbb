"""Cleaning stage: partitions a batch into accepted and rejected records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from txn_etl.cleaning.normalizer import normalize_record
from txn_etl.cleaning.validators import describe_rejection, find_rejection_reason
from txn_etl.models.record import Record

logger = logging.getLogger(__name__)


UNPROCESSABLE_RECORD = "unprocessable record"


@dataclass
class CleaningResult:
    """Output of a single ``CleaningStage.clean`` call."""

    accepted: list[Record] = field(default_factory=list)
    rejected_count: int = 0
    reasons: list[str] = field(default_factory=list)

    @property
    def cleaned_count(self) -> int:
        return len(self.accepted)

    def reject(self, reason: str) -> None:
        self.rejected_count += 1
        self.reasons.append(reason)


class CleaningStage:
    """
    Validates and normalizes raw records.

    Records that fail a hard-rejection rule are dropped with a reason;
    everything else is normalized in place and accepted. The stage keeps no
    state between calls: each call builds and returns a fresh result.
    """

    def clean(self, records: Sequence[Record]) -> CleaningResult:
        """
        Clean a batch of records.

        Args:
            records: Parsed records in input order

        Returns:
            Accepted records plus the rejection count and reasons for this call
        """
        result = CleaningResult()

        for record in records:
            try:
                reason = find_rejection_reason(record)
                if reason is not None:
                    result.reject(describe_rejection(reason, record))
                    continue
                normalize_record(record)
            except Exception as e:
                logger.warning(
                    f"Rejecting record {record.transaction_id!r} after "
                    f"{type(e).__name__}: {e}"
                )
                result.reject(f"{UNPROCESSABLE_RECORD} for txn: {record.transaction_id}")
                continue
            result.accepted.append(record)

        logger.info(
            f"[CLEAN] Cleaned: {result.cleaned_count} | Rejected: {result.rejected_count}"
        )
        return result
