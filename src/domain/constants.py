"""Domain constants for the ledger engine."""

ACCOUNT_KEYS = ("name", "open", "type", "currency", "opening_balance")

TRANSACTION_KEYS = (
    "date",
    "account",
    "amount",
    "offset_account",
    "offset_amount",
    "quantity",
    "payee",
    "note",
)

PRICE_KEYS = ("date", "commodity", "price", "currency")

# Spellings written by earlier versions of the ledger format.
ACCOUNT_TYPE_ALIASES = {
    "Stocks": "Stock",
    "MutualFunds": "MutualFund",
    "Holdings": "Holding",
}

DEFAULT_IMPORT_DATE_FORMAT = "%d/%m/%Y"

CURRENCY_SYMBOLS = "$€£¥"


__all__ = [
    "ACCOUNT_KEYS",
    "TRANSACTION_KEYS",
    "PRICE_KEYS",
    "ACCOUNT_TYPE_ALIASES",
    "DEFAULT_IMPORT_DATE_FORMAT",
    "CURRENCY_SYMBOLS",
]
