"""Domain validation helpers for non-fatal ledger findings."""

from collections.abc import Mapping
from decimal import Decimal
from logging import Logger

from src.domain.models import Account, AccountType, Transaction


ASSET_LIKE_TYPES = frozenset(
    {
        AccountType.ASSETS,
        AccountType.CASH,
        AccountType.STOCK,
        AccountType.MUTUAL_FUND,
        AccountType.HOLDING,
    }
)


def validate_balance_sign(
    account_name: str,
    account_type: AccountType,
    balance: Decimal,
    logger: Logger,
) -> None:
    """Warn when balances violate expected sign conventions.

    Args:
        account_name: Account the balance belongs to.
        account_type: Class of the account.
        balance: Unconverted balance amount.
        logger: Logger used for warnings.
    """
    if account_type in ASSET_LIKE_TYPES and balance < 0:
        logger.warning(
            f"Asset balance is negative for {account_name} "
            f"({account_type}): {balance}"
        )
    if account_type is AccountType.LIABILITIES and balance > 0:
        logger.warning(
            f"Liability balance is positive for {account_name}: {balance}"
        )


def warn_unbalanced_transaction(
    txn: Transaction,
    accounts: Mapping[str, Account],
    logger: Logger,
) -> bool:
    """Warn when a same-currency transaction's legs do not cancel.

    Explicit ``offset_amount`` overrides are legal (fees, spreads), so this
    only reports. Legs in different currencies are never compared.

    Returns:
        bool: True when a warning was emitted.
    """
    currency = accounts[txn.account].currency
    offset_currency = accounts[txn.offset_account].currency
    if currency != offset_currency:
        return False
    if txn.posting_amount + txn.offset_amount == 0:
        return False
    logger.warning(
        f"Transaction on {txn.date} between {txn.account} and "
        f"{txn.offset_account} does not balance: "
        f"{txn.posting_amount} + {txn.offset_amount} {currency}"
    )
    return True


__all__ = [
    "ASSET_LIKE_TYPES",
    "validate_balance_sign",
    "warn_unbalanced_transaction",
]
