"""Use case for explicit asset maintenance."""

from src.application.ports.portfolio_repository import PortfolioRepositoryPort
from src.domain.constants import BASE_CURRENCY, IMPORT_CURRENCIES
from src.domain.errors import ValidationError
from src.domain.services.currency import normalize_currency_code
from src.infrastructure.logging.logger import get_app_logger


class ManageAssetsUseCase:
    """Add assets outside an import and delete them without cascading."""

    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def add(
        self,
        category_name: str,
        name: str,
        currency: str = BASE_CURRENCY,
    ) -> int:
        """Create (or reuse) an asset, creating its category when missing.

        Raises:
            ValidationError: If a name is blank or the currency unsupported.
        """
        category_name = (category_name or "").strip()
        name = (name or "").strip()
        if not category_name or not name:
            raise ValidationError("Category and asset names are required.")
        code = normalize_currency_code(currency) or BASE_CURRENCY
        if code not in IMPORT_CURRENCIES:
            raise ValidationError(f"Unsupported currency: {currency!r}")

        categories = self._repository.list_categories()
        existing = {category.name: category for category in categories}
        if category_name in existing:
            category_id = existing[category_name].id
        else:
            category_id = self._repository.upsert_category(
                category_name,
                len(categories),
            )
        sort_order = sum(
            1
            for asset in self._repository.list_assets()
            if asset.category_id == category_id
        )
        asset_id = self._repository.upsert_asset(
            category_id,
            name,
            code,
            sort_order,
        )
        self._logger.info(f"Added asset {name} under {category_name} ({code})")
        return asset_id

    def delete(self, asset_id: int) -> bool:
        """Delete an asset; its historical values stay stored."""
        deleted = self._repository.delete_asset(asset_id)
        if not deleted:
            self._logger.warning(f"Asset {asset_id} not found")
        return deleted


__all__ = ["ManageAssetsUseCase"]
