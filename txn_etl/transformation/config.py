"""Configuration for the transformation stage.

Lookup tables:
--------------
- exchange_rates       : units of reference currency per unit of source currency
- high_risk_countries  : FATF high-risk / monitored jurisdictions (simplified)

Flagging thresholds (reference currency):
-----------------------------------------
- LARGE_CASH_TRANSACTION : type == CASH and amount >= large_cash
- POTENTIAL_STRUCTURING  : structuring_floor <= amount < large_cash
- LARGE_WIRE_TRANSFER    : amount > large_wire

All models are frozen so a stage can share one instance safely.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from txn_etl.core.errors import ConfigError


DEFAULT_EXCHANGE_RATES: dict[str, Decimal] = {
    "USD": Decimal("1.0"),
    "EUR": Decimal("1.08"),
    "GBP": Decimal("1.27"),
    "INR": Decimal("0.012"),
    "CAD": Decimal("0.74"),
    "AUD": Decimal("0.65"),
    "JPY": Decimal("0.0067"),
    "MXN": Decimal("0.058"),
}

DEFAULT_HIGH_RISK_COUNTRIES: frozenset[str] = frozenset(
    {"MM", "IQ", "IR", "KP", "SY", "YE", "AF", "LY", "SO"}
)


def rebase_rates(rates: dict[str, Decimal], reference_currency: str) -> dict[str, Decimal]:
    """
    Re-express a rate table in terms of another reference currency.

    - rebase_rates({"USD": 1, "EUR": 1.08}, "EUR") -> {"USD": 1/1.08, "EUR": 1}

    Raises ConfigError if the new reference currency is not in the table.
    """
    base = rates.get(reference_currency)
    if base is None or base <= 0:
        raise ConfigError(f"No exchange rate for reference currency {reference_currency}")
    return {code: rate / base for code, rate in rates.items()}


class FlaggingThresholds(BaseModel):
    """Amount thresholds used by the flagging rules."""

    model_config = ConfigDict(frozen=True)

    large_cash: Decimal = Field(
        default=Decimal("10000"), gt=0, description="Currency transaction report threshold"
    )
    structuring_floor: Decimal = Field(
        default=Decimal("9000"), gt=0, description="Lower bound of the structuring band"
    )
    large_wire: Decimal = Field(
        default=Decimal("50000"), gt=0, description="Unusually large transfer threshold"
    )


class TransformationConfig(BaseModel):
    """Main configuration for the transformation stage."""

    model_config = ConfigDict(frozen=True)

    reference_currency: str = Field(
        default="USD", min_length=3, max_length=3, description="Currency all amounts convert to"
    )
    exchange_rates: dict[str, Decimal] = Field(
        default_factory=lambda: dict(DEFAULT_EXCHANGE_RATES),
        description="Static rate table keyed by ISO currency code",
    )
    high_risk_countries: frozenset[str] = Field(
        default=DEFAULT_HIGH_RISK_COUNTRIES,
        description="Country codes that always raise HIGH_RISK_COUNTRY",
    )
    cash_type: str = Field(default="CASH", description="Transaction type treated as cash")
    thresholds: FlaggingThresholds = Field(default_factory=FlaggingThresholds)

    @classmethod
    def for_reference(cls, reference_currency: str) -> "TransformationConfig":
        """Default tables with every rate rebased onto ``reference_currency``."""
        reference_currency = reference_currency.strip().upper()
        return cls(
            reference_currency=reference_currency,
            exchange_rates=rebase_rates(DEFAULT_EXCHANGE_RATES, reference_currency),
        )

    def validate_config(self) -> None:
        """Validate the lookup tables and thresholds.

        Raises ConfigError if the reference currency is not in the rate table
        at a 1:1 rate, or the structuring band sits above the cash threshold.
        """
        rate = self.exchange_rates.get(self.reference_currency)
        if rate is None:
            raise ConfigError(
                f"Reference currency {self.reference_currency} missing from exchange rates"
            )
        if rate != Decimal("1"):
            raise ConfigError(
                f"Reference currency {self.reference_currency} must have rate 1, got {rate}"
            )
        if self.thresholds.structuring_floor > self.thresholds.large_cash:
            raise ConfigError("structuring_floor must not exceed large_cash")
