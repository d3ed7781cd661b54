"""Tests for the SQLAlchemy portfolio repository on in-memory SQLite."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.portfolio_repository import SqlAlchemyPortfolioRepository
from src.infrastructure.schema import asset_categories, asset_values, ensure_schema


@pytest.fixture()
def db_adapter():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    ensure_schema(engine)
    yield SqlAlchemyDatabaseEngineAdapter(engine=engine)
    engine.dispose()


def _seed(repository) -> dict[str, int]:
    category_id = repository.upsert_category("美股", 0)
    asset_id = repository.upsert_asset(category_id, "QQQ", "USD", 0)
    snapshot_id = repository.upsert_snapshot("1119", date(2024, 11, 19))
    repository.upsert_asset_value(
        asset_id,
        snapshot_id,
        Decimal("1000"),
        Decimal("7100"),
        change_from_previous=Decimal("50"),
        current_ratio=Decimal("1"),
    )
    repository.upsert_summary(snapshot_id, Decimal("7100"))
    return {"category": category_id, "asset": asset_id, "snapshot": snapshot_id}


def test_upserts_are_idempotent_by_natural_key(db_adapter) -> None:
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    ids = _seed(repository)

    assert repository.upsert_category("美股", 3) == ids["category"]
    assert repository.upsert_asset(ids["category"], "QQQ", "CNY", 9) == ids["asset"]
    assert repository.upsert_snapshot("1119", date(2023, 11, 19)) == ids["snapshot"]
    repository.upsert_asset_value(
        ids["asset"],
        ids["snapshot"],
        Decimal("1100"),
        Decimal("7810"),
    )

    assert repository.list_categories()[0].sort_order == 3
    (asset,) = repository.list_assets()
    assert asset.currency == "USD"
    assert repository.list_snapshots()[0].snapshot_date == date(2023, 11, 19)
    (value,) = repository.list_asset_values()
    assert value.cny_value == Decimal("7810")
    assert value.asset_name == "QQQ"
    assert value.category_id == ids["category"]


def test_list_asset_values_filters(db_adapter) -> None:
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    ids = _seed(repository)
    other = repository.upsert_snapshot("1219", date(2024, 12, 19))
    repository.upsert_asset_value(ids["asset"], other, Decimal("1"), Decimal("7"))

    assert len(repository.list_asset_values()) == 2
    assert len(repository.list_asset_values(snapshot_id=other)) == 1
    assert repository.list_asset_values(category_id=ids["category"] + 1) == []


def test_summaries_join_snapshot_labels(db_adapter) -> None:
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    _seed(repository)

    (summary,) = repository.list_summaries()

    assert summary.total_value == Decimal("7100")
    assert summary.snapshot_label == "1119"
    assert summary.change_from_previous is None


def test_delete_asset_leaves_values_hidden(db_adapter) -> None:
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    ids = _seed(repository)

    assert repository.delete_asset(ids["asset"]) is True
    assert repository.delete_asset(ids["asset"]) is False
    assert repository.list_asset_values() == []


def test_clear_portfolio_removes_everything(db_adapter) -> None:
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    _seed(repository)

    repository.clear_portfolio()

    assert repository.list_categories() == []
    assert repository.list_assets() == []
    assert repository.list_snapshots() == []
    assert repository.list_summaries() == []


def test_transaction_rolls_back_on_error(db_adapter) -> None:
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    _seed(repository)

    with pytest.raises(RuntimeError):
        with repository.transaction() as scoped:
            scoped.clear_portfolio()
            raise RuntimeError("boom")

    assert [item.name for item in repository.list_categories()] == ["美股"]


def test_set_category_ratio_stores_and_clears_target(db_adapter) -> None:
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    ids = _seed(repository)

    assert repository.set_category_ratio(ids["category"], Decimal("0.35")) is True
    assert repository.list_categories()[0].suggested_ratio == Decimal("0.35")

    assert repository.set_category_ratio(ids["category"], None) is True
    assert repository.list_categories()[0].suggested_ratio is None
    assert repository.set_category_ratio(999, Decimal("0.1")) is False


def test_ratio_columns_hold_shares_above_one_hundred(db_adapter) -> None:
    """Offsetting negative holdings can leave one asset at several times the total."""
    repository = SqlAlchemyPortfolioRepository(db_adapter)
    ids = _seed(repository)
    repository.upsert_asset_value(
        ids["asset"],
        ids["snapshot"],
        Decimal("1000"),
        Decimal("7100"),
        current_ratio=Decimal("250.5"),
    )

    assert repository.list_asset_values()[0].current_ratio == Decimal("250.5")
    ratio_type = asset_values.c.current_ratio.type
    assert ratio_type.precision - ratio_type.scale >= 12
    assert asset_categories.c.suggested_ratio.type.scale == 6
