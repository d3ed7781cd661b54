"""HTTP client for the live exchange-rate API."""

from decimal import Decimal, InvalidOperation

import requests

from src.application.ports.rates_provider import RatesProviderPort
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import (
    DEFAULT_RATES_API_TIMEOUT,
    DEFAULT_RATES_API_URL,
)


class ExchangeRateApiClient(RatesProviderPort):
    """Fetch ``{"rates": {...}}`` payloads with ``requests``."""

    def __init__(
        self,
        url_template: str = DEFAULT_RATES_API_URL,
        timeout: float = DEFAULT_RATES_API_TIMEOUT,
        session: requests.Session | None = None,
        logger=None,
    ) -> None:
        """Initialize the client.

        Args:
            url_template: Endpoint with a ``{base}`` placeholder.
            timeout: HTTP timeout in seconds.
            session: Optional session (tests inject a fake).
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._url_template = url_template
        self._timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or get_app_logger()

    def fetch_rates(self, base: str) -> dict[str, Decimal] | None:
        """Return rates quoted against ``base``, or None on any failure."""
        url = self._url_template.format(base=base)
        try:
            response = self._session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            self._logger.error(f"Exchange-rate request failed for {base}: {exc}")
            return None

        raw_rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(raw_rates, dict):
            self._logger.error(f"Exchange-rate payload for {base} has no rates")
            return None

        rates: dict[str, Decimal] = {}
        for code, value in raw_rates.items():
            try:
                rates[str(code).upper()] = Decimal(str(value))
            except InvalidOperation:
                self._logger.warning(f"Skipping unparsable rate {code}={value!r}")
        return rates


__all__ = ["ExchangeRateApiClient"]
