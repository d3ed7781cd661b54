"""Use case for the cash flow ledger."""

from decimal import Decimal

from src.application.ports.cash_flow_repository import CashFlowRepositoryPort
from src.application.ports.exchange_rate_repository import (
    ExchangeRateRepositoryPort,
)
from src.application.use_cases.manage_exchange_rates import parse_effective_date
from src.domain.constants import BASE_CURRENCY, IMPORT_CURRENCIES
from src.domain.errors import ValidationError
from src.domain.models import CashFlow, CashflowSummary
from src.domain.services.currency import (
    current_rate_table,
    normalize_currency_code,
    rate_for,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import parse_decimal, quantize_money

FLOW_TYPES = ("inflow", "outflow")


class ManageCashFlowsUseCase:
    """Add, delete, list and summarize cash flows."""

    def __init__(
        self,
        repository: CashFlowRepositoryPort,
        rate_repository: ExchangeRateRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port storing cash flows.
            rate_repository: Port reading rates for CNY amounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._rate_repository = rate_repository
        self._logger = logger or get_app_logger()

    def add(
        self,
        flow_date,
        flow_type: str,
        original_amount,
        currency: str = BASE_CURRENCY,
        cny_amount=None,
        source_account: str | None = None,
        target_account: str | None = None,
        asset_name: str | None = None,
        description: str | None = None,
    ) -> int:
        """Record a cash flow.

        ``cny_amount`` defaults to the original amount at the current rate;
        it is required for a currency without a stored or default rate.

        Returns:
            int: Id of the new cash flow.

        Raises:
            ValidationError: If the date, type, currency or amounts are malformed.
        """
        when = parse_effective_date(flow_date)
        kind = (flow_type or "").strip().lower()
        if kind not in FLOW_TYPES:
            raise ValidationError(f"Unknown flow type: {flow_type!r}")
        code = normalize_currency_code(currency) or BASE_CURRENCY
        if code not in IMPORT_CURRENCIES:
            raise ValidationError(f"Unsupported currency: {currency!r}")
        try:
            original = parse_decimal(original_amount, "original_amount")
            cny = (
                parse_decimal(cny_amount, "cny_amount")
                if cny_amount not in (None, "")
                else None
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if cny is None:
            rates = current_rate_table(self._rate_repository.list_rates())
            if code != BASE_CURRENCY and code not in rates:
                raise ValidationError(
                    f"No exchange rate stored for {code}; enter the CNY amount"
                )
            cny = original * rate_for(code, rates, self._logger)

        cash_flow_id = self._repository.add_cash_flow(
            CashFlow(
                id=0,
                flow_date=when,
                flow_type=kind,
                original_amount=quantize_money(original),
                currency=code,
                cny_amount=quantize_money(cny),
                source_account=_optional(source_account),
                target_account=_optional(target_account),
                asset_name=_optional(asset_name),
                description=_optional(description),
            )
        )
        self._logger.info(
            f"Added {kind} of {original} {code} on {when} (id={cash_flow_id})"
        )
        return cash_flow_id

    def delete(self, cash_flow_id: int) -> bool:
        deleted = self._repository.delete_cash_flow(cash_flow_id)
        if not deleted:
            self._logger.warning(f"Cash flow {cash_flow_id} not found")
        return deleted

    def list_cash_flows(self) -> list[CashFlow]:
        return self._repository.list_cash_flows()

    def summarize(self) -> CashflowSummary:
        """Total inflows and outflows in CNY."""
        total_in = Decimal("0")
        total_out = Decimal("0")
        for cash_flow in self._repository.list_cash_flows():
            if cash_flow.flow_type == "inflow":
                total_in += cash_flow.cny_amount
            else:
                total_out += cash_flow.cny_amount
        return CashflowSummary(total_in=total_in, total_out=total_out)


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


__all__ = ["FLOW_TYPES", "ManageCashFlowsUseCase"]
