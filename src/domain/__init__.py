"""Domain package for business rules and core models."""

from .constants import BASE_CURRENCY, CATEGORY_NAMES
from .errors import (
    ParseError,
    PartialImportFailure,
    PortfolioError,
    ValidationError,
)

__all__ = [
    "BASE_CURRENCY",
    "CATEGORY_NAMES",
    "ParseError",
    "PartialImportFailure",
    "PortfolioError",
    "ValidationError",
]
