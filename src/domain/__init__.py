"""Domain package for ledger rules and core models."""

from .exceptions import (
    ImportRowError,
    LedgerError,
    LedgerSourceError,
    PriceError,
    StructuralError,
)
from .models import (
    Account,
    AccountType,
    BalanceFilter,
    BalanceRow,
    ColumnMapping,
    GroupBy,
    ImportSummary,
    JournalFilter,
    JournalRow,
    Ledger,
    PayeeMatch,
    Period,
    Price,
    RawLedger,
    SignConvention,
    Transaction,
)
from .services import (
    PriceResolver,
    build_ledger,
    build_ledger_from_raw,
    compute_balances,
    list_transactions,
    normalize_row,
)

__all__ = [
    "LedgerError",
    "StructuralError",
    "PriceError",
    "ImportRowError",
    "LedgerSourceError",
    "Account",
    "AccountType",
    "Transaction",
    "Price",
    "Ledger",
    "RawLedger",
    "GroupBy",
    "Period",
    "BalanceFilter",
    "BalanceRow",
    "PayeeMatch",
    "JournalFilter",
    "JournalRow",
    "SignConvention",
    "ColumnMapping",
    "ImportSummary",
    "PriceResolver",
    "build_ledger",
    "build_ledger_from_raw",
    "compute_balances",
    "list_transactions",
    "normalize_row",
]
