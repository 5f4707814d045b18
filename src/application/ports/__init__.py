"""Application ports package."""

from .import_source import ImportRow, ImportRowSourcePort
from .ledger_source import LedgerSourcePort
from .transaction_sink import TransactionSinkPort

__all__ = [
    "ImportRow",
    "ImportRowSourcePort",
    "LedgerSourcePort",
    "TransactionSinkPort",
]
