"""SQLAlchemy-backed repository for exchange rates."""

from datetime import date
from decimal import Decimal

from sqlalchemy import and_, insert, select, update

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.exchange_rate_repository import (
    ExchangeRateRepositoryPort,
)
from src.domain.constants import BASE_CURRENCY
from src.domain.models import ExchangeRate
from src.infrastructure.schema import exchange_rates


class SqlAlchemyExchangeRateRepository(ExchangeRateRepositoryPort):
    """Repository backed by SQLAlchemy for the exchange-rate table."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the portfolio engine.
        """
        self._db_port = db_port

    def list_rates(self) -> list[ExchangeRate]:
        query = select(exchange_rates).order_by(
            exchange_rates.c.effective_date.desc(),
            exchange_rates.c.from_currency,
        )
        engine = self._db_port.get_portfolio_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [self._to_model(row) for row in rows]

    def latest_rate(self, from_currency: str) -> ExchangeRate | None:
        query = (
            select(exchange_rates)
            .where(exchange_rates.c.from_currency == from_currency)
            .order_by(
                exchange_rates.c.effective_date.desc(),
                exchange_rates.c.id.desc(),
            )
            .limit(1)
        )
        engine = self._db_port.get_portfolio_engine()
        with engine.connect() as conn:
            row = conn.execute(query).first()
        return self._to_model(row) if row is not None else None

    def upsert_rate(
        self,
        from_currency: str,
        rate: Decimal,
        effective_date: date,
    ) -> None:
        condition = and_(
            exchange_rates.c.from_currency == from_currency,
            exchange_rates.c.effective_date == effective_date,
        )
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            existing = conn.execute(
                select(exchange_rates.c.id).where(condition)
            ).scalar_one_or_none()
            if existing is not None:
                conn.execute(
                    update(exchange_rates)
                    .where(exchange_rates.c.id == existing)
                    .values(rate=rate)
                )
                return
            conn.execute(
                insert(exchange_rates).values(
                    from_currency=from_currency,
                    to_currency=BASE_CURRENCY,
                    rate=rate,
                    effective_date=effective_date,
                )
            )

    @staticmethod
    def _to_model(row) -> ExchangeRate:
        return ExchangeRate(
            id=row.id,
            from_currency=row.from_currency,
            to_currency=row.to_currency,
            rate=row.rate,
            effective_date=row.effective_date,
        )


__all__ = ["SqlAlchemyExchangeRateRepository"]
