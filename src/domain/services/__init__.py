"""Domain services package."""

from .balances import compute_balances, summarize_by_type
from .fx import PriceResolver, build_price_index, convert_balance
from .journal import list_transactions, payee_matches
from .ledger_builder import build_ledger, build_ledger_from_raw
from .normalization import (
    combine_debit_credit,
    normalize_row,
    parse_amount,
    parse_date,
)
from .validation import validate_balance_sign, warn_unbalanced_transaction

__all__ = [
    "build_ledger",
    "build_ledger_from_raw",
    "PriceResolver",
    "build_price_index",
    "convert_balance",
    "compute_balances",
    "summarize_by_type",
    "list_transactions",
    "payee_matches",
    "normalize_row",
    "parse_amount",
    "parse_date",
    "combine_debit_credit",
    "validate_balance_sign",
    "warn_unbalanced_transaction",
]
