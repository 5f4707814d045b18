"""Normalize externally sourced rows (bank/CSV exports) into transactions."""

import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from src.domain.constants import CURRENCY_SYMBOLS, DEFAULT_IMPORT_DATE_FORMAT
from src.domain.exceptions import AmountParseError, DateParseError, MissingColumn
from src.domain.models import ColumnMapping, SignConvention, Transaction


_NUMBER = re.compile(r"(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d+)?")


def normalize_row(
    raw_row: Mapping[str, Any],
    mapping: ColumnMapping | None = None,
    date_format: str = DEFAULT_IMPORT_DATE_FORMAT,
    sign_convention: SignConvention = SignConvention.AS_IS,
) -> Transaction:
    """Map one external row onto the ledger transaction shape.

    Account names are not checked against declared accounts; that happens
    when the imported transactions are loaded with the rest of the ledger.

    Args:
        raw_row: Row keyed by the export's column names.
        mapping: Column names for each transaction field.
        date_format: ``strptime`` format of the date column.
        sign_convention: Sign handling of the export.

    Returns:
        Transaction: Transaction with ``offset_amount = -amount``.

    Raises:
        DateParseError: If the date does not match ``date_format``.
        AmountParseError: If the amount is in an unrecognized format.
        MissingColumn: If a required field has no value and no default.
    """
    mapping = mapping or ColumnMapping()
    txn_date = parse_date(_cell(raw_row, mapping.date), date_format, mapping.date)
    amount = _row_amount(raw_row, mapping)
    if sign_convention is SignConvention.INVERTED:
        amount = -amount
    account = _cell(raw_row, mapping.account) or mapping.default_account
    if account is None:
        raise MissingColumn("account", mapping.account)
    offset_account = (
        _cell(raw_row, mapping.offset_account) or mapping.default_offset_account
    )
    if offset_account is None:
        raise MissingColumn("offset_account", mapping.offset_account)
    return Transaction(
        date=txn_date,
        account=account,
        amount=amount,
        offset_account=offset_account,
        offset_amount=-amount,
        quantity=Decimal("1"),
        payee=_cell(raw_row, mapping.payee),
        note=_cell(raw_row, mapping.note),
    )


def parse_date(value: str | None, date_format: str, column: str | None = None) -> date:
    """Parse an external date with the caller's format."""
    if value is None:
        raise MissingColumn("date", column)
    try:
        return datetime.strptime(value, date_format).date()
    except ValueError as exc:
        raise DateParseError(value, date_format) from exc


def parse_amount(value) -> Decimal:
    """Parse an external amount literal.

    Accepts signed decimals (``-12.50``, ``+3``), thousands separators
    (``1,234.56``), leading currency symbols (``$12``, ``-€4.10``),
    parenthesized negatives (``(123.45)``) and trailing minus signs
    (``123.45-``).

    Raises:
        AmountParseError: For any other format.
    """
    if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if not isinstance(value, str):
        raise AmountParseError(value)

    text = value.strip()
    negative = False
    signed = False
    if text.startswith("(") and text.endswith(")"):
        negative = signed = True
        text = text[1:-1].strip()
    elif text.endswith("-"):
        negative = signed = True
        text = text[:-1].strip()

    text = text.lstrip(CURRENCY_SYMBOLS).strip()
    if text[:1] in ("+", "-"):
        if signed:
            raise AmountParseError(value)
        negative = text[0] == "-"
        text = text[1:].strip()
        text = text.lstrip(CURRENCY_SYMBOLS).strip()

    if not any(char.isdigit() for char in text) or not _NUMBER.fullmatch(text):
        raise AmountParseError(value)
    amount = Decimal(text.replace(",", ""))
    return -amount if negative else amount


def combine_debit_credit(debit: str | None, credit: str | None) -> Decimal:
    """Combine split debit/credit cells into one signed amount.

    Debits are outgoing and become negative, credits positive.
    """
    total = Decimal("0")
    if debit is not None:
        total -= abs(parse_amount(debit))
    if credit is not None:
        total += abs(parse_amount(credit))
    return total


def _row_amount(raw_row: Mapping[str, Any], mapping: ColumnMapping) -> Decimal:
    amount = _cell(raw_row, mapping.amount)
    if amount is not None:
        return parse_amount(amount)
    debit = _cell(raw_row, mapping.debit)
    credit = _cell(raw_row, mapping.credit)
    if debit is None and credit is None:
        raise MissingColumn("amount", mapping.amount or mapping.debit)
    return combine_debit_credit(debit, credit)


def _cell(raw_row: Mapping[str, Any], column: str | None) -> str | None:
    if column is None:
        return None
    value = raw_row.get(column)
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


__all__ = [
    "normalize_row",
    "parse_date",
    "parse_amount",
    "combine_debit_credit",
]
