"""SQLAlchemy-backed repository for portfolio records."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.engine import Connection

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.models import (
    Asset,
    AssetValue,
    Category,
    PortfolioSummary,
    Snapshot,
)
from src.infrastructure.schema import (
    asset_categories,
    asset_values,
    assets,
    portfolio_summary,
    snapshots,
)


class SqlAlchemyPortfolioRepository(PortfolioRepositoryPort):
    """Repository backed by SQLAlchemy Core for the portfolio tables.

    Without a bound connection every call runs in its own transaction. The
    repository yielded by ``transaction()`` shares one connection, so all of
    its writes commit or roll back together.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        connection: Connection | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the portfolio engine.
            connection: Optional connection every call is bound to.
        """
        self._db_port = db_port
        self._connection = connection

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyPortfolioRepository"]:
        if self._connection is not None:
            yield self
            return
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            yield SqlAlchemyPortfolioRepository(self._db_port, connection=conn)

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        if self._connection is not None:
            yield self._connection
            return
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            yield conn

    def list_categories(self) -> list[Category]:
        query = select(asset_categories).order_by(
            asset_categories.c.sort_order,
            asset_categories.c.id,
        )
        with self._connect() as conn:
            rows = conn.execute(query).all()
        return [
            Category(
                id=row.id,
                name=row.name,
                suggested_ratio=row.suggested_ratio,
                sort_order=row.sort_order,
            )
            for row in rows
        ]

    def list_assets(self) -> list[Asset]:
        query = select(assets).order_by(
            assets.c.category_id,
            assets.c.sort_order,
            assets.c.id,
        )
        with self._connect() as conn:
            rows = conn.execute(query).all()
        return [
            Asset(
                id=row.id,
                category_id=row.category_id,
                name=row.name,
                currency=row.currency,
                suggested_ratio=row.suggested_ratio,
                sort_order=row.sort_order,
            )
            for row in rows
        ]

    def list_snapshots(self) -> list[Snapshot]:
        query = select(snapshots).order_by(
            snapshots.c.snapshot_date,
            snapshots.c.id,
        )
        with self._connect() as conn:
            rows = conn.execute(query).all()
        return [
            Snapshot(
                id=row.id,
                snapshot_date=row.snapshot_date,
                label=row.label,
            )
            for row in rows
        ]

    def list_asset_values(
        self,
        category_id: int | None = None,
        snapshot_id: int | None = None,
    ) -> list[AssetValue]:
        """Return values joined with their assets.

        Args:
            category_id: Optional category filter.
            snapshot_id: Optional snapshot filter.

        Returns:
            list[AssetValue]: Values whose asset still exists.
        """
        query = select(
            asset_values,
            assets.c.name.label("asset_name"),
            assets.c.category_id,
        ).join(assets, assets.c.id == asset_values.c.asset_id)
        if category_id is not None:
            query = query.where(assets.c.category_id == category_id)
        if snapshot_id is not None:
            query = query.where(asset_values.c.snapshot_id == snapshot_id)
        query = query.order_by(asset_values.c.snapshot_id, asset_values.c.asset_id)
        with self._connect() as conn:
            rows = conn.execute(query).all()
        return [
            AssetValue(
                id=row.id,
                asset_id=row.asset_id,
                snapshot_id=row.snapshot_id,
                original_value=row.original_value,
                cny_value=row.cny_value,
                change_from_previous=row.change_from_previous,
                current_ratio=row.current_ratio,
                asset_name=row.asset_name,
                category_id=row.category_id,
            )
            for row in rows
        ]

    def list_summaries(self) -> list[PortfolioSummary]:
        query = (
            select(
                portfolio_summary,
                snapshots.c.label.label("snapshot_label"),
                snapshots.c.snapshot_date,
            )
            .join(snapshots, snapshots.c.id == portfolio_summary.c.snapshot_id)
            .order_by(snapshots.c.snapshot_date, snapshots.c.id)
        )
        with self._connect() as conn:
            rows = conn.execute(query).all()
        return [
            PortfolioSummary(
                id=row.id,
                snapshot_id=row.snapshot_id,
                total_value=row.total_value,
                change_from_previous=row.change_from_previous,
                change_from_two_previous=row.change_from_two_previous,
                snapshot_label=row.snapshot_label,
                snapshot_date=row.snapshot_date,
            )
            for row in rows
        ]

    def clear_portfolio(self) -> None:
        with self._connect() as conn:
            for table in (
                asset_values,
                portfolio_summary,
                assets,
                snapshots,
                asset_categories,
            ):
                conn.execute(delete(table))

    def upsert_category(self, name: str, sort_order: int) -> int:
        with self._connect() as conn:
            existing = conn.execute(
                select(asset_categories.c.id).where(asset_categories.c.name == name)
            ).scalar_one_or_none()
            if existing is not None:
                conn.execute(
                    update(asset_categories)
                    .where(asset_categories.c.id == existing)
                    .values(sort_order=sort_order)
                )
                return existing
            result = conn.execute(
                insert(asset_categories).values(name=name, sort_order=sort_order)
            )
            return result.inserted_primary_key[0]

    def set_category_ratio(
        self,
        category_id: int,
        suggested_ratio: Decimal | None,
    ) -> bool:
        with self._connect() as conn:
            result = conn.execute(
                update(asset_categories)
                .where(asset_categories.c.id == category_id)
                .values(suggested_ratio=suggested_ratio)
            )
        return result.rowcount > 0

    def upsert_asset(
        self,
        category_id: int,
        name: str,
        currency: str,
        sort_order: int,
    ) -> int:
        with self._connect() as conn:
            existing = conn.execute(
                select(assets.c.id).where(
                    and_(assets.c.category_id == category_id, assets.c.name == name)
                )
            ).scalar_one_or_none()
            if existing is not None:
                return existing
            result = conn.execute(
                insert(assets).values(
                    category_id=category_id,
                    name=name,
                    currency=currency,
                    sort_order=sort_order,
                )
            )
            return result.inserted_primary_key[0]

    def delete_asset(self, asset_id: int) -> bool:
        with self._connect() as conn:
            result = conn.execute(delete(assets).where(assets.c.id == asset_id))
        return result.rowcount > 0

    def upsert_snapshot(self, label: str, snapshot_date: date) -> int:
        with self._connect() as conn:
            existing = conn.execute(
                select(snapshots.c.id).where(snapshots.c.label == label)
            ).scalar_one_or_none()
            if existing is not None:
                conn.execute(
                    update(snapshots)
                    .where(snapshots.c.id == existing)
                    .values(snapshot_date=snapshot_date)
                )
                return existing
            result = conn.execute(
                insert(snapshots).values(label=label, snapshot_date=snapshot_date)
            )
            return result.inserted_primary_key[0]

    def upsert_asset_value(
        self,
        asset_id: int,
        snapshot_id: int,
        original_value: Decimal,
        cny_value: Decimal,
        change_from_previous: Decimal | None = None,
        current_ratio: Decimal | None = None,
    ) -> None:
        values = {
            "original_value": original_value,
            "cny_value": cny_value,
            "change_from_previous": change_from_previous,
            "current_ratio": current_ratio,
        }
        condition = and_(
            asset_values.c.asset_id == asset_id,
            asset_values.c.snapshot_id == snapshot_id,
        )
        with self._connect() as conn:
            existing = conn.execute(
                select(asset_values.c.id).where(condition)
            ).scalar_one_or_none()
            if existing is not None:
                conn.execute(
                    update(asset_values)
                    .where(asset_values.c.id == existing)
                    .values(**values)
                )
                return
            conn.execute(
                insert(asset_values).values(
                    asset_id=asset_id,
                    snapshot_id=snapshot_id,
                    **values,
                )
            )

    def upsert_summary(
        self,
        snapshot_id: int,
        total_value: Decimal,
        change_from_previous: Decimal | None = None,
        change_from_two_previous: Decimal | None = None,
    ) -> None:
        values = {
            "total_value": total_value,
            "change_from_previous": change_from_previous,
            "change_from_two_previous": change_from_two_previous,
        }
        with self._connect() as conn:
            existing = conn.execute(
                select(portfolio_summary.c.id).where(
                    portfolio_summary.c.snapshot_id == snapshot_id
                )
            ).scalar_one_or_none()
            if existing is not None:
                conn.execute(
                    update(portfolio_summary)
                    .where(portfolio_summary.c.id == existing)
                    .values(**values)
                )
                return
            conn.execute(
                insert(portfolio_summary).values(snapshot_id=snapshot_id, **values)
            )


__all__ = ["SqlAlchemyPortfolioRepository"]
