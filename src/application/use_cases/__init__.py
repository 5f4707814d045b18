"""Application use cases package."""

from .get_account_balances import GetAccountBalancesUseCase
from .get_accounts import GetAccountsUseCase
from .get_journal import GetJournalUseCase
from .import_transactions import ImportTransactionsUseCase
from .load_ledger import LoadLedgerUseCase

__all__ = [
    "LoadLedgerUseCase",
    "GetAccountsUseCase",
    "GetAccountBalancesUseCase",
    "GetJournalUseCase",
    "ImportTransactionsUseCase",
]
