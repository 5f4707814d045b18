"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from a parsed ledger record.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_decimal(value) -> Decimal:
    """Parse a required numeric literal into a finite Decimal.

    Args:
        value: Integer, float, Decimal, or numeric string.

    Returns:
        Decimal: Parsed value.

    Raises:
        ValueError: If the value is missing, boolean, or not a finite number.
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"Not a decimal value: {value!r}")
    if isinstance(value, str):
        value = value.strip()
    try:
        parsed = coerce_decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal value: {value!r}") from exc
    if not parsed.is_finite():
        raise ValueError(f"Not a finite decimal value: {value!r}")
    return parsed


__all__ = ["coerce_decimal", "parse_decimal"]
