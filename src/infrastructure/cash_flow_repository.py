"""SQLAlchemy-backed repository for the cash flow ledger."""

from sqlalchemy import delete, insert, select

from src.application.ports.cash_flow_repository import CashFlowRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.models import CashFlow
from src.infrastructure.schema import cash_flows


class SqlAlchemyCashFlowRepository(CashFlowRepositoryPort):
    """Repository backed by SQLAlchemy for cash flows."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the portfolio engine.
        """
        self._db_port = db_port

    def list_cash_flows(self) -> list[CashFlow]:
        """Return cash flows, newest first."""
        query = select(cash_flows).order_by(
            cash_flows.c.flow_date.desc(),
            cash_flows.c.id.desc(),
        )
        engine = self._db_port.get_portfolio_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return [
            CashFlow(
                id=row.id,
                flow_date=row.flow_date,
                flow_type=row.flow_type,
                original_amount=row.original_amount,
                currency=row.currency,
                cny_amount=row.cny_amount,
                source_account=row.source_account,
                target_account=row.target_account,
                asset_name=row.asset_name,
                description=row.description,
            )
            for row in rows
        ]

    def add_cash_flow(self, cash_flow: CashFlow) -> int:
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            result = conn.execute(
                insert(cash_flows).values(
                    flow_date=cash_flow.flow_date,
                    flow_type=cash_flow.flow_type,
                    original_amount=cash_flow.original_amount,
                    currency=cash_flow.currency,
                    cny_amount=cash_flow.cny_amount,
                    source_account=cash_flow.source_account,
                    target_account=cash_flow.target_account,
                    asset_name=cash_flow.asset_name,
                    description=cash_flow.description,
                )
            )
        return result.inserted_primary_key[0]

    def delete_cash_flow(self, cash_flow_id: int) -> bool:
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            result = conn.execute(
                delete(cash_flows).where(cash_flows.c.id == cash_flow_id)
            )
        return result.rowcount > 0


__all__ = ["SqlAlchemyCashFlowRepository"]
