"""Relational schema of the portfolio store."""

from sqlalchemy import (
    Column,
    Date,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

MONEY = Numeric(18, 2, asdecimal=True)
RATE = Numeric(10, 4, asdecimal=True)
# Shares above 100% occur when some holdings are negative.
RATIO = Numeric(18, 6, asdecimal=True)

asset_categories = Table(
    "asset_categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, unique=True),
    Column("suggested_ratio", RATIO),
    Column("sort_order", Integer, nullable=False, default=0),
)

# No foreign keys: deleting an asset leaves its values as orphans.
assets = Table(
    "assets",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("category_id", Integer, nullable=False),
    Column("name", String(200), nullable=False),
    Column("currency", String(10), nullable=False, default="CNY"),
    Column("suggested_ratio", RATIO),
    Column("sort_order", Integer, nullable=False, default=0),
    UniqueConstraint("category_id", "name", name="uq_assets_category_name"),
)

snapshots = Table(
    "snapshots",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("snapshot_date", Date, nullable=False),
    Column("label", String(10), nullable=False, unique=True),
)

asset_values = Table(
    "asset_values",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("asset_id", Integer, nullable=False),
    Column("snapshot_id", Integer, nullable=False),
    Column("original_value", MONEY),
    Column("cny_value", MONEY, nullable=False),
    Column("change_from_previous", MONEY),
    Column("current_ratio", RATIO),
    UniqueConstraint("asset_id", "snapshot_id", name="uq_asset_values_asset_snapshot"),
)

portfolio_summary = Table(
    "portfolio_summary",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("snapshot_id", Integer, nullable=False, unique=True),
    Column("total_value", MONEY, nullable=False),
    Column("change_from_previous", MONEY),
    Column("change_from_two_previous", MONEY),
)

cash_flows = Table(
    "cash_flows",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("flow_date", Date, nullable=False),
    Column("flow_type", String(10), nullable=False),
    Column("source_account", String(200)),
    Column("target_account", String(200)),
    Column("asset_name", String(200)),
    Column("original_amount", MONEY, nullable=False),
    Column("currency", String(10), nullable=False, default="CNY"),
    Column("cny_amount", MONEY, nullable=False),
    Column("description", Text),
)

exchange_rates = Table(
    "exchange_rates",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("from_currency", String(10), nullable=False),
    Column("to_currency", String(10), nullable=False, default="CNY"),
    Column("rate", RATE, nullable=False),
    Column("effective_date", Date, nullable=False),
    UniqueConstraint(
        "from_currency",
        "effective_date",
        name="uq_exchange_rates_currency_date",
    ),
)


def ensure_schema(engine: Engine) -> None:
    """Create any missing portfolio tables."""
    metadata.create_all(engine)


__all__ = [
    "metadata",
    "asset_categories",
    "assets",
    "snapshots",
    "asset_values",
    "portfolio_summary",
    "cash_flows",
    "exchange_rates",
    "ensure_schema",
]
