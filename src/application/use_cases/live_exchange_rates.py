"""Live exchange rates with an explicit time-based cache.

Rates are quoted as units of a currency per one unit of the base currency,
the way the upstream API publishes them. Concurrent misses may each call the
provider; there is no request coalescing.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from src.application.ports.rates_provider import RatesProviderPort
from src.infrastructure.logging.logger import get_app_logger

DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_QUOTE_BASE = "USD"

# Used when the provider is unreachable.
FALLBACK_RATES: dict[str, dict[str, Decimal]] = {
    "CNY": {
        "USD": Decimal("0.1389"),
        "HKD": Decimal("1.0833"),
        "JPY": Decimal("21.43"),
        "CNY": Decimal("1"),
    },
    "USD": {
        "CNY": Decimal("7.2"),
        "HKD": Decimal("7.8"),
        "JPY": Decimal("154.3"),
        "USD": Decimal("1"),
    },
}


@dataclass(frozen=True)
class _CacheEntry:
    rates: dict[str, Decimal]
    fetched_at: float


class ExchangeRateCache:
    """Rate tables per base currency, expiring after ``ttl_seconds``."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, base: str) -> dict[str, Decimal] | None:
        entry = self._entries.get(base)
        if entry is None:
            return None
        if self._clock() - entry.fetched_at >= self._ttl_seconds:
            del self._entries[base]
            return None
        return entry.rates

    def put(self, base: str, rates: dict[str, Decimal]) -> None:
        self._entries[base] = _CacheEntry(rates=dict(rates), fetched_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()


class LiveExchangeRateService:
    """Fetch, cache and convert with live rates."""

    def __init__(
        self,
        provider: RatesProviderPort,
        cache: ExchangeRateCache | None = None,
        logger=None,
    ) -> None:
        """Initialize the service.

        Args:
            provider: Port fetching live rate tables.
            cache: Cache shared by the process; a private one by default.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._provider = provider
        self._cache = cache or ExchangeRateCache()
        self._logger = logger or get_app_logger()

    def get_rates(self, base: str = DEFAULT_QUOTE_BASE) -> dict[str, Decimal]:
        """Return the rate table for ``base``, falling back to built-in rates."""
        base = base.upper()
        cached = self._cache.get(base)
        if cached is not None:
            self._logger.debug(f"Using cached rates for {base}")
            return cached

        rates = self._provider.fetch_rates(base)
        if rates:
            self._cache.put(base, rates)
            self._logger.info(f"Fetched {len(rates)} live rates for {base}")
            return rates

        self._logger.warning(f"Live rates unavailable for {base}; using defaults")
        return FALLBACK_RATES.get(base, FALLBACK_RATES[DEFAULT_QUOTE_BASE])

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Units of ``to_currency`` per one ``from_currency``."""
        from_currency = from_currency.upper()
        to_currency = to_currency.upper()
        if from_currency == to_currency:
            return Decimal("1")
        rates = self.get_rates(DEFAULT_QUOTE_BASE)
        from_rate = rates.get(from_currency) or Decimal("1")
        to_rate = rates.get(to_currency) or Decimal("1")
        return to_rate / from_rate

    def convert(
        self,
        amount: Decimal,
        from_currency: str,
        to_currency: str,
    ) -> Decimal:
        return amount * self.get_rate(from_currency, to_currency)


__all__ = [
    "DEFAULT_CACHE_TTL_SECONDS",
    "ExchangeRateCache",
    "FALLBACK_RATES",
    "LiveExchangeRateService",
]
