"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Spreadsheet cells and SQL results arrive as ``int``, ``float``, ``str``,
    ``Decimal`` or ``None``. Blank and unparsable values become zero, which
    mirrors how the workbook format treats empty cells.

    Args:
        value: Raw numeric value from SQL, a workbook cell or a form field.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    raw = value.strip().replace(",", "") if isinstance(value, str) else str(value)
    if not raw:
        return Decimal("0")
    try:
        parsed = Decimal(raw)
    except InvalidOperation:
        return Decimal("0")
    return parsed if parsed.is_finite() else Decimal("0")


def parse_decimal(value, field_name: str) -> Decimal:
    """Parse a user supplied amount, rejecting unparsable input.

    Args:
        value: Raw input value.
        field_name: Field name used in the error message.

    Returns:
        Decimal: Parsed amount.

    Raises:
        ValueError: If the value is empty or not a finite number.
    """
    if isinstance(value, Decimal):
        parsed = value
    else:
        raw = "" if value is None else str(value).strip().replace(",", "")
        try:
            parsed = Decimal(raw)
        except InvalidOperation as exc:
            raise ValueError(
                f"{field_name} is not a valid number: {value!r}"
            ) from exc
    if not parsed.is_finite():
        raise ValueError(f"{field_name} is not a finite number: {value!r}")
    return parsed


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents."""
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


__all__ = ["coerce_decimal", "parse_decimal", "quantize_money"]
