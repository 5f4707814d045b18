"""Domain models package."""

from .accounts import Account, AccountType
from .finance import (
    BalanceFilter,
    BalanceRow,
    BalanceTypeTotal,
    GroupBy,
    JournalFilter,
    JournalRow,
    PayeeMatch,
    Period,
)
from .imports import ColumnMapping, ImportSummary, SignConvention, SkippedRow
from .ledger import Ledger, Price, Transaction
from .raw import RawLedger, RawRecord

__all__ = [
    "Account",
    "AccountType",
    "Transaction",
    "Price",
    "Ledger",
    "RawLedger",
    "RawRecord",
    "GroupBy",
    "Period",
    "BalanceFilter",
    "BalanceRow",
    "BalanceTypeTotal",
    "PayeeMatch",
    "JournalFilter",
    "JournalRow",
    "SignConvention",
    "ColumnMapping",
    "SkippedRow",
    "ImportSummary",
]
