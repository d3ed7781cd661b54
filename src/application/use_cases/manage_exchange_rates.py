"""Use case maintaining the stored exchange-rate table."""

from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal

from src.application.ports.exchange_rate_repository import (
    ExchangeRateRepositoryPort,
)
from src.application.use_cases.live_exchange_rates import (
    LiveExchangeRateService,
)
from src.domain.constants import BASE_CURRENCY
from src.domain.errors import ValidationError
from src.domain.models import ExchangeRate
from src.domain.services.currency import (
    current_rate_table,
    normalize_currency_code,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_decimal

DEFAULT_REFRESH_CURRENCIES = ("USD", "HKD", "JPY")
_RATE_STEP = Decimal("0.0001")


def parse_effective_date(value: date | str) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid effective date: {value!r}") from exc


class ManageExchangeRatesUseCase:
    """List, upsert and refresh rates to CNY."""

    def __init__(
        self,
        rate_repository: ExchangeRateRepositoryPort,
        live_service: LiveExchangeRateService | None = None,
        logger=None,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._rate_repository = rate_repository
        self._live_service = live_service
        self._logger = logger or get_app_logger()
        self._today = today_provider or date.today

    def list_rates(self) -> list[ExchangeRate]:
        return self._rate_repository.list_rates()

    def latest(self, from_currency: str) -> ExchangeRate | None:
        return self._rate_repository.latest_rate(
            self._validate_currency(from_currency)
        )

    def current_rates(self) -> dict[str, Decimal]:
        """Latest stored rate per currency, over the import defaults."""
        return current_rate_table(self._rate_repository.list_rates())

    def upsert(
        self,
        from_currency: str,
        rate,
        effective_date: date | str,
    ) -> None:
        """Store the rate of ``from_currency`` to CNY for a date.

        Raises:
            ValidationError: If the code, rate or date is malformed.
        """
        code = self._validate_currency(from_currency)
        try:
            parsed = parse_decimal(rate, "rate")
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if parsed <= 0:
            raise ValidationError(f"rate must be positive: {rate!r}")
        when = parse_effective_date(effective_date)
        self._rate_repository.upsert_rate(code, parsed, when)
        self._logger.info(f"Stored rate {code}->CNY {parsed} on {when}")

    def refresh_from_live(
        self,
        currencies: Iterable[str] = DEFAULT_REFRESH_CURRENCIES,
    ) -> dict[str, Decimal]:
        """Store today's live CNY rates for ``currencies``.

        Returns:
            dict[str, Decimal]: Rates written, keyed by currency.
        """
        if self._live_service is None:
            raise RuntimeError("No live exchange-rate service configured.")
        today = self._today()
        written: dict[str, Decimal] = {}
        for currency in currencies:
            code = self._validate_currency(currency)
            if code == BASE_CURRENCY:
                continue
            rate = self._live_service.get_rate(code, BASE_CURRENCY)
            rate = rate.quantize(_RATE_STEP)
            self._rate_repository.upsert_rate(code, rate, today)
            written[code] = rate
        self._logger.info(f"Refreshed {len(written)} live rates")
        return written

    @staticmethod
    def _validate_currency(value: str) -> str:
        code = normalize_currency_code(value)
        if code is None or len(code) != 3 or not code.isalpha():
            raise ValidationError(f"Invalid currency code: {value!r}")
        return code


__all__ = ["ManageExchangeRatesUseCase", "parse_effective_date"]
