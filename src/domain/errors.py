"""Domain exceptions."""


class PortfolioError(Exception):
    """Base class for portfolio tracker errors."""


class ParseError(PortfolioError):
    """Raised when an uploaded workbook cannot be read."""


class PartialImportFailure(PortfolioError):
    """Raised when the rebuild fails after existing data was cleared."""


class ValidationError(PortfolioError, ValueError):
    """Raised when caller input is malformed."""


__all__ = [
    "PortfolioError",
    "ParseError",
    "PartialImportFailure",
    "ValidationError",
]
