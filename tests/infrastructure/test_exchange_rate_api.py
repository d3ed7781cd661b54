"""Tests for the live exchange-rate HTTP client."""

from decimal import Decimal
from unittest.mock import MagicMock

import requests

from src.infrastructure.exchange_rate_api import ExchangeRateApiClient


class _Response:
    def __init__(self, payload=None, status_error=None, json_error=None) -> None:
        self._payload = payload
        self._status_error = status_error
        self._json_error = json_error

    def raise_for_status(self) -> None:
        if self._status_error is not None:
            raise self._status_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


def _client(response=None, error=None):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    logger = MagicMock()
    client = ExchangeRateApiClient(
        url_template="https://rates.test/latest/{base}",
        timeout=3,
        session=session,
        logger=logger,
    )
    return client, session, logger


def test_fetch_rates_parses_decimal_table() -> None:
    client, session, _ = _client(
        _Response({"base": "USD", "rates": {"cny": 7.2, "HKD": "7.8", "BAD": "x"}})
    )

    rates = client.fetch_rates("USD")

    assert rates == {"CNY": Decimal("7.2"), "HKD": Decimal("7.8")}
    session.get.assert_called_once_with(
        "https://rates.test/latest/USD",
        headers={"Accept": "application/json"},
        timeout=3,
    )


def test_fetch_rates_returns_none_on_http_errors() -> None:
    client, _, logger = _client(
        _Response(status_error=requests.HTTPError("503 Service Unavailable"))
    )

    assert client.fetch_rates("USD") is None
    logger.error.assert_called_once()


def test_fetch_rates_returns_none_on_network_errors() -> None:
    client, _, _ = _client(error=requests.ConnectionError("offline"))

    assert client.fetch_rates("USD") is None


def test_fetch_rates_returns_none_on_bad_payloads() -> None:
    client, _, _ = _client(_Response(json_error=ValueError("not json")))
    assert client.fetch_rates("USD") is None

    client, _, _ = _client(_Response({"result": "error"}))
    assert client.fetch_rates("USD") is None
