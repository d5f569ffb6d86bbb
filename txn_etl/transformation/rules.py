"""Compliance and fraud flagging rules."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from txn_etl.models.record import Record
from txn_etl.transformation.config import TransformationConfig


class FlagName(str, Enum):
    """Names of the flags a record can collect."""

    LARGE_CASH_TRANSACTION = "LARGE_CASH_TRANSACTION"
    HIGH_RISK_COUNTRY = "HIGH_RISK_COUNTRY"
    POTENTIAL_STRUCTURING = "POTENTIAL_STRUCTURING"
    LARGE_WIRE_TRANSFER = "LARGE_WIRE_TRANSFER"


class FlaggingRules:
    """Collection of independent flagging rules.

    Each rule looks at one record only and rules never exclude each other.
    Amounts are expected in the reference currency.
    """

    def __init__(self, config: TransformationConfig | None = None):
        """
        Initialize flagging rules.

        Args:
            config: Transformation configuration with thresholds and country set
        """
        self.config = config or TransformationConfig()
        self.thresholds = self.config.thresholds

    def _amount(self, record: Record) -> Decimal:
        return record.amount if record.amount is not None else Decimal("0")

    def large_cash_transaction(self, record: Record) -> bool:
        """Cash at or above the reporting threshold."""
        return (
            record.transaction_type == self.config.cash_type
            and self._amount(record) >= self.thresholds.large_cash
        )

    def high_risk_country(self, record: Record) -> bool:
        return record.country in self.config.high_risk_countries

    def potential_structuring(self, record: Record) -> bool:
        """Amount just under the reporting threshold, any type."""
        amount = self._amount(record)
        return self.thresholds.structuring_floor <= amount < self.thresholds.large_cash

    def large_wire_transfer(self, record: Record) -> bool:
        return self._amount(record) > self.thresholds.large_wire

    def evaluate(self, record: Record) -> tuple[FlagName, ...]:
        """
        Run every rule against a record.

        Args:
            record: Normalized record with a reference-currency amount

        Returns:
            Matched flags in rule-evaluation order (empty when nothing fired)
        """
        checks = (
            (FlagName.LARGE_CASH_TRANSACTION, self.large_cash_transaction),
            (FlagName.HIGH_RISK_COUNTRY, self.high_risk_country),
            (FlagName.POTENTIAL_STRUCTURING, self.potential_structuring),
            (FlagName.LARGE_WIRE_TRANSFER, self.large_wire_transfer),
        )
        return tuple(flag for flag, rule in checks if rule(record))
