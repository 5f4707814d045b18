"""Domain models for transactions, prices, and the ledger aggregate."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.domain.models.accounts import Account, AccountType


@dataclass(frozen=True)
class Transaction:
    """Exchange between exactly two accounts.

    Attributes:
        date: Day the exchange happened.
        account: Primary account name.
        amount: Signed amount in the primary account's currency. For
            commodity accounts it is the per-unit price.
        offset_account: Counterpart account name.
        offset_amount: Signed amount posted to the counterpart. ``None``
            only before the ledger builder resolves defaults.
        quantity: Units of the commodity, ``1`` for plain transfers.
        payee: Optional free-text payee.
        note: Optional free-text note.
    """

    date: date
    account: str
    amount: Decimal
    offset_account: str
    offset_amount: Decimal | None = None
    quantity: Decimal = Decimal("1")
    payee: str | None = None
    note: str | None = None

    @property
    def posting_amount(self) -> Decimal:
        """Amount posted to the primary account."""
        return self.amount * self.quantity

    def touches(self, account_name: str) -> bool:
        return account_name in (self.account, self.offset_account)


@dataclass(frozen=True)
class Price:
    """Value of one unit of ``commodity`` expressed in ``currency``."""

    date: date
    commodity: str
    price: Decimal
    currency: str


@dataclass(frozen=True)
class Ledger:
    """Validated accounts, transactions, and prices for one report run.

    Instances are produced by ``build_ledger``; every transaction references
    declared accounts and none predates its accounts' opening dates.
    """

    accounts: dict[str, Account] = field(default_factory=dict)
    transactions: tuple[Transaction, ...] = ()
    prices: tuple[Price, ...] = ()

    def account(self, name: str) -> Account:
        return self.accounts[name]

    def accounts_of_type(
        self,
        account_types: Iterable[AccountType] | None,
    ) -> list[Account]:
        """Return accounts in declaration order, optionally by class."""
        if account_types is None:
            return list(self.accounts.values())
        wanted = set(account_types)
        return [
            account
            for account in self.accounts.values()
            if account.account_type in wanted
        ]

    def latest_transaction_date(self, year: int | None = None) -> date | None:
        """Return the last transaction date, optionally within ``year``."""
        dates = [
            txn.date
            for txn in self.transactions
            if year is None or txn.date.year == year
        ]
        return max(dates) if dates else None


__all__ = ["Transaction", "Price", "Ledger"]
