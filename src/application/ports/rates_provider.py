"""Port for live exchange rates."""

from decimal import Decimal
from typing import Protocol


class RatesProviderPort(Protocol):
    """Port fetching live rates quoted against a base currency."""

    def fetch_rates(self, base: str) -> dict[str, Decimal] | None:
        """Return ``{code: units of code per 1 base}``, or None on failure."""


__all__ = ["RatesProviderPort"]
