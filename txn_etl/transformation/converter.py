"""Static-table currency conversion to the reference currency."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

CENT = Decimal("0.01")
DEFAULT_RATE = Decimal("1")


class CurrencyConverter:
    """
    Converts amounts with a fixed lookup table.

    Unknown currencies convert at 1:1. Callers are expected to check
    ``is_known`` and surface a warning for those.
    """

    def __init__(self, rates: Mapping[str, Decimal], reference_currency: str = "USD"):
        self.rates = dict(rates)
        self.reference_currency = reference_currency

    def is_known(self, currency: str | None) -> bool:
        return currency is not None and currency in self.rates

    def is_reference(self, currency: str | None) -> bool:
        return currency == self.reference_currency

    def rate_for(self, currency: str | None) -> Decimal:
        if currency is None:
            return DEFAULT_RATE
        return self.rates.get(currency, DEFAULT_RATE)

    def to_reference(self, amount: Decimal, currency: str | None) -> Decimal:
        """
        Convert an amount to the reference currency.

        The result is rounded to cents, half away from zero.

        Args:
            amount: Amount in ``currency``
            currency: ISO code of the amount

        Returns:
            Amount in the reference currency with two decimal places
        """
        return (amount * self.rate_for(currency)).quantize(CENT, rounding=ROUND_HALF_UP)
