"""Port for stored exchange rates."""

from datetime import date
from decimal import Decimal
from typing import Protocol

from src.domain.models import ExchangeRate


class ExchangeRateRepositoryPort(Protocol):
    """Port exposing the exchange-rate table (rates to CNY)."""

    def list_rates(self) -> list[ExchangeRate]:
        """Return every stored rate, newest first."""

    def latest_rate(self, from_currency: str) -> ExchangeRate | None:
        """Return the most recent rate for a currency."""

    def upsert_rate(
        self,
        from_currency: str,
        rate: Decimal,
        effective_date: date,
    ) -> None:
        """Create or replace the rate for ``(from_currency, effective_date)``."""


__all__ = ["ExchangeRateRepositoryPort"]
