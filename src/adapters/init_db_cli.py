"""CLI adapter creating the portfolio tables."""

from src.infrastructure.container import (
    build_database_adapter,
    initialize_database,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Create missing tables in the configured database."""
    logger = get_app_logger()
    db_adapter = build_database_adapter()
    initialize_database(db_adapter)

    url = db_adapter.get_portfolio_engine().url
    logger.info(f"Schema ensured on {url}")
    print(f"Portfolio tables are ready on {url}.")


if __name__ == "__main__":  # pragma: no cover
    main()
