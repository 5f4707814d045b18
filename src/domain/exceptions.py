"""Typed errors raised by the ledger engine.

    LedgerError
    +-- StructuralError          ledger construction, fails the whole build
    |   +-- DuplicateAccount
    |   +-- UnknownAccountType
    |   +-- UnknownAccount
    |   +-- SelfReferencingTransaction
    |   +-- TransactionBeforeAccountOpen
    |   +-- InvalidField
    |   +-- InvalidPrice
    |   +-- DuplicatePrice
    +-- PriceError               balance conversion, fails a single row
    |   +-- NoPriceAvailable
    +-- ImportRowError           import normalization, skips a single row
    |   +-- DateParseError
    |   +-- AmountParseError
    |   +-- MissingColumn
    +-- LedgerSourceError        ledger files cannot be read or written
"""

from datetime import date


class LedgerError(Exception):
    """Base class for every ledger engine error."""


class StructuralError(LedgerError):
    """The raw ledger cannot be turned into a consistent model."""


class DuplicateAccount(StructuralError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Account declared more than once: {name!r}")


class UnknownAccountType(StructuralError):
    def __init__(self, value, account_name: str | None = None) -> None:
        self.value = value
        self.account_name = account_name
        where = f" for account {account_name!r}" if account_name else ""
        super().__init__(f"Unknown account type {value!r}{where}")


class UnknownAccount(StructuralError):
    def __init__(self, name: str, transaction_date: date | None = None) -> None:
        self.name = name
        self.transaction_date = transaction_date
        when = f" in transaction dated {transaction_date}" if transaction_date else ""
        super().__init__(f"Account {name!r} is not declared{when}")


class SelfReferencingTransaction(StructuralError):
    def __init__(self, account: str, transaction_date: date) -> None:
        self.account = account
        self.transaction_date = transaction_date
        super().__init__(
            f"Transaction dated {transaction_date} uses {account!r} "
            "as both account and offset_account"
        )


class TransactionBeforeAccountOpen(StructuralError):
    def __init__(
        self,
        account: str,
        opened: date,
        transaction_date: date,
    ) -> None:
        self.account = account
        self.opened = opened
        self.transaction_date = transaction_date
        super().__init__(
            f"Transaction dated {transaction_date} references {account!r} "
            f"which opens on {opened}"
        )


class InvalidField(StructuralError):
    """A raw record field is missing or cannot be coerced."""

    def __init__(self, kind: str, index: int, field: str, value) -> None:
        self.kind = kind
        self.index = index
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid {field!r} in {kind} #{index + 1}: {value!r}"
        )


class InvalidPrice(StructuralError):
    def __init__(self, commodity: str, price_date: date, value) -> None:
        self.commodity = commodity
        self.price_date = price_date
        self.value = value
        super().__init__(
            f"Price for {commodity} on {price_date} must be positive: {value}"
        )


class DuplicatePrice(StructuralError):
    def __init__(self, commodity: str, price_date: date, currency: str) -> None:
        self.commodity = commodity
        self.price_date = price_date
        self.currency = currency
        super().__init__(
            f"More than one {commodity} price in {currency} on {price_date}"
        )


class PriceError(LedgerError):
    """A balance cannot be converted into the requested currency."""


class NoPriceAvailable(PriceError):
    def __init__(
        self,
        commodity: str,
        target_currency: str,
        on: date | None = None,
    ) -> None:
        self.commodity = commodity
        self.target_currency = target_currency
        self.on = on
        when = f" on or before {on}" if on else ""
        super().__init__(
            f"No {commodity} price in {target_currency}{when}"
        )


class ImportRowError(LedgerError):
    """An external row cannot be normalized into a transaction."""


class DateParseError(ImportRowError):
    def __init__(self, value, date_format: str) -> None:
        self.value = value
        self.date_format = date_format
        super().__init__(
            f"Date {value!r} does not match format {date_format!r}"
        )


class AmountParseError(ImportRowError):
    def __init__(self, value) -> None:
        self.value = value
        super().__init__(f"Unrecognized amount format: {value!r}")


class MissingColumn(ImportRowError):
    def __init__(self, field: str, column: str | None = None) -> None:
        self.field = field
        self.column = column
        source = f" (column {column!r})" if column else ""
        super().__init__(f"Row has no value for {field}{source}")


class LedgerSourceError(LedgerError):
    """Ledger files cannot be read or written."""


__all__ = [
    "LedgerError",
    "StructuralError",
    "DuplicateAccount",
    "UnknownAccountType",
    "UnknownAccount",
    "SelfReferencingTransaction",
    "TransactionBeforeAccountOpen",
    "InvalidField",
    "InvalidPrice",
    "DuplicatePrice",
    "PriceError",
    "NoPriceAvailable",
    "ImportRowError",
    "DateParseError",
    "AmountParseError",
    "MissingColumn",
    "LedgerSourceError",
]
