"""Transformation stage: deduplication, currency conversion and flagging."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from txn_etl.models.record import AnnotationKind, Record
from txn_etl.transformation.config import TransformationConfig
from txn_etl.transformation.converter import CurrencyConverter
from txn_etl.transformation.rules import FlaggingRules

logger = logging.getLogger(__name__)


@dataclass
class TransformationResult:
    """Output of a single ``TransformationStage.transform`` call."""

    records: list[Record] = field(default_factory=list)
    flagged_count: int = 0
    duplicates_removed: int = 0
    conversions_count: int = 0
    warnings: list[str] = field(default_factory=list)


class TransformationStage:
    """
    Applies business rules to cleaned records.

    Orchestrates:
    1. Duplicate removal (first occurrence of an id wins)
    2. Conversion to the reference currency
    3. Compliance / fraud flagging

    Counters and the seen-id set live in the per-call result, so the same
    stage instance can be reused for any number of batches.
    """

    def __init__(self, config: TransformationConfig | None = None):
        """
        Initialize transformation stage.

        Args:
            config: Lookup tables and thresholds
        """
        self.config = config or TransformationConfig()
        self.config.validate_config()
        self.converter = CurrencyConverter(
            self.config.exchange_rates, self.config.reference_currency
        )
        self.rules = FlaggingRules(self.config)

    def transform(self, records: Sequence[Record]) -> TransformationResult:
        """
        Transform a batch of cleaned records.

        Args:
            records: Records accepted by the cleaning stage, in input order

        Returns:
            Surviving records and the counters for this call
        """
        result = TransformationResult()
        seen_ids: set[str] = set()

        for record in records:
            if record.transaction_id in seen_ids:
                logger.warning(f"[TRANSFORM] Duplicate transaction ID removed: {record.transaction_id}")
                result.duplicates_removed += 1
                result.warnings.append(f"Duplicate transaction ID removed: {record.transaction_id}")
                continue
            seen_ids.add(record.transaction_id)  # type: ignore[arg-type]

            self._convert(record, result)
            self._flag(record, result)
            result.records.append(record)

        logger.info(
            f"[TRANSFORM] Transformed: {len(result.records)} | "
            f"Flagged: {result.flagged_count} | "
            f"Duplicates removed: {result.duplicates_removed} | "
            f"Currency conversions: {result.conversions_count}"
        )
        return result

    def _convert(self, record: Record, result: TransformationResult) -> None:
        source = record.currency
        assert record.amount is not None, "cleaned records always carry an amount"

        if self.converter.is_reference(source):
            record.amount = self.converter.to_reference(record.amount, source)
            return

        if not self.converter.is_known(source):
            warning = (
                f"Unknown currency {source!r} for txn: {record.transaction_id}; "
                f"assumed rate 1.0"
            )
            logger.warning(f"[TRANSFORM] {warning}")
            result.warnings.append(warning)
            record.annotate(AnnotationKind.UNKNOWN_CURRENCY, f"Unknown currency {source}")

        rate = self.converter.rate_for(source)
        record.amount = self.converter.to_reference(record.amount, source)
        record.currency = self.converter.reference_currency
        record.annotate(
            AnnotationKind.CURRENCY_CONVERTED, f"Converted from {source} (rate={rate:.4f})"
        )
        result.conversions_count += 1

    def _flag(self, record: Record, result: TransformationResult) -> None:
        flags = self.rules.evaluate(record)
        if not flags:
            return
        record.flagged = True
        record.flags.extend(flag.value for flag in flags)
        record.annotate(
            AnnotationKind.FLAGGED, "FLAGS: " + ", ".join(flag.value for flag in flags)
        )
        result.flagged_count += 1
