"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root

DEFAULT_RATES_API_URL = "https://api.exchangerate-api.com/v4/latest/{base}"
DEFAULT_RATE_CACHE_TTL_SECONDS = 3600
DEFAULT_RATES_API_TIMEOUT = 10.0

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def default_db_url() -> str:
    """Return the SQLite file under ``data/`` used when no URL is set."""
    return f"sqlite:///{get_project_root() / 'data' / 'portfolio.db'}"


@dataclass(frozen=True)
class PortfolioSettings:
    """Runtime settings of the portfolio tracker.

    Attributes:
        db_url: SQLAlchemy URL of the portfolio database.
        import_transactional: Wrap the replace-import in one transaction.
        rate_cache_ttl_seconds: Expiry of the live rate cache.
        rates_api_url: Live rate endpoint with a ``{base}`` placeholder.
        rates_api_timeout: HTTP timeout in seconds.
    """

    db_url: str
    import_transactional: bool = False
    rate_cache_ttl_seconds: int = DEFAULT_RATE_CACHE_TTL_SECONDS
    rates_api_url: str = DEFAULT_RATES_API_URL
    rates_api_timeout: float = DEFAULT_RATES_API_TIMEOUT

    @classmethod
    def from_env(cls) -> "PortfolioSettings":
        """Build settings from environment variables.

        Unparsable values are logged and replaced by their defaults.

        Returns:
            PortfolioSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        db_url = os.getenv("PORTFOLIO_DB_URL", "").strip() or default_db_url()
        return cls(
            db_url=db_url,
            import_transactional=cls._parse_bool(
                "PORTFOLIO_IMPORT_TRANSACTIONAL",
                default=False,
                logger=logger,
            ),
            rate_cache_ttl_seconds=int(
                cls._parse_number(
                    "PORTFOLIO_RATE_CACHE_TTL_SECONDS",
                    default=DEFAULT_RATE_CACHE_TTL_SECONDS,
                    logger=logger,
                )
            ),
            rates_api_url=(
                os.getenv("PORTFOLIO_RATES_API_URL", "").strip()
                or DEFAULT_RATES_API_URL
            ),
            rates_api_timeout=cls._parse_number(
                "PORTFOLIO_RATES_API_TIMEOUT",
                default=DEFAULT_RATES_API_TIMEOUT,
                logger=logger,
            ),
        )

    @staticmethod
    def _parse_bool(name: str, default: bool, logger) -> bool:
        raw = os.getenv(name)
        if raw is None:
            return default
        cleaned = raw.strip().lower()
        if cleaned in _TRUE_VALUES:
            return True
        if cleaned in _FALSE_VALUES:
            return False
        logger.warning(f"Invalid boolean for {name}: {raw!r}; using {default}")
        return default

    @staticmethod
    def _parse_number(name: str, default: float, logger) -> float:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"Invalid number for {name}: {raw!r}; using {default}")
            return default
        if value <= 0:
            logger.warning(f"{name} must be positive, got {raw!r}; using {default}")
            return default
        return value


__all__ = ["PortfolioSettings", "default_db_url"]
