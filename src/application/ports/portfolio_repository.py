"""Port for persisted portfolio records."""

from contextlib import AbstractContextManager
from datetime import date
from decimal import Decimal
from typing import Protocol

from src.domain.models import (
    Asset,
    AssetValue,
    Category,
    PortfolioSummary,
    Snapshot,
)


class PortfolioRepositoryPort(Protocol):
    """Port exposing categories, assets, snapshots, values and summaries."""

    def list_categories(self) -> list[Category]:
        """Return categories ordered by sort order."""

    def list_assets(self) -> list[Asset]:
        """Return assets ordered by category and sort order."""

    def list_snapshots(self) -> list[Snapshot]:
        """Return snapshots ordered by date."""

    def list_asset_values(
        self,
        category_id: int | None = None,
        snapshot_id: int | None = None,
    ) -> list[AssetValue]:
        """Return values joined with their (existing) assets."""

    def list_summaries(self) -> list[PortfolioSummary]:
        """Return portfolio summaries ordered by snapshot date."""

    def clear_portfolio(self) -> None:
        """Delete every category, asset, snapshot, value and summary."""

    def upsert_category(self, name: str, sort_order: int) -> int:
        """Create or update a category by name and return its id."""

    def set_category_ratio(
        self,
        category_id: int,
        suggested_ratio: Decimal | None,
    ) -> bool:
        """Store a category's target share (a fraction), or clear it."""

    def upsert_asset(
        self,
        category_id: int,
        name: str,
        currency: str,
        sort_order: int,
    ) -> int:
        """Create or reuse the asset ``(category_id, name)`` and return its id."""

    def delete_asset(self, asset_id: int) -> bool:
        """Delete one asset, leaving its values in place."""

    def upsert_snapshot(self, label: str, snapshot_date: date) -> int:
        """Create or update a snapshot by label and return its id."""

    def upsert_asset_value(
        self,
        asset_id: int,
        snapshot_id: int,
        original_value: Decimal,
        cny_value: Decimal,
        change_from_previous: Decimal | None = None,
        current_ratio: Decimal | None = None,
    ) -> None:
        """Create or replace the value of ``(asset_id, snapshot_id)``."""

    def upsert_summary(
        self,
        snapshot_id: int,
        total_value: Decimal,
        change_from_previous: Decimal | None = None,
        change_from_two_previous: Decimal | None = None,
    ) -> None:
        """Create or replace the summary of a snapshot."""

    def transaction(self) -> AbstractContextManager["PortfolioRepositoryPort"]:
        """Return a context yielding a repository bound to one transaction."""


__all__ = ["PortfolioRepositoryPort"]
