"""Domain models for ledger accounts."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from src.domain.constants import ACCOUNT_TYPE_ALIASES
from src.domain.exceptions import UnknownAccountType


class AccountType(Enum):
    """Closed set of account classes, in report order."""

    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EXPENSES = "Expenses"
    INCOME = "Income"
    EQUITY = "Equity"
    STOCK = "Stock"
    MUTUAL_FUND = "MutualFund"
    HOLDING = "Holding"
    CASH = "Cash"

    @classmethod
    def parse(cls, value, account_name: str | None = None) -> "AccountType":
        """Return the account type for a raw declaration value.

        Args:
            value: Raw ``type`` value from the ledger (e.g. ``"Assets"``).
            account_name: Account being declared, for error context.

        Returns:
            AccountType: Matching member.

        Raises:
            UnknownAccountType: If the value is not one of the nine classes.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnknownAccountType(value, account_name)
        cleaned = value.strip()
        cleaned = ACCOUNT_TYPE_ALIASES.get(cleaned, cleaned)
        try:
            return cls(cleaned)
        except ValueError as exc:
            raise UnknownAccountType(value, account_name) from exc

    @property
    def sort_index(self) -> int:
        """Position of the type in balance reports."""
        return _ORDER[self]

    def __str__(self) -> str:
        return self.value


_ORDER = {member: index for index, member in enumerate(AccountType)}


@dataclass(frozen=True)
class Account:
    """Declared ledger account.

    Attributes:
        name: Unique, case-sensitive account name.
        account_type: Account class.
        currency: Commodity symbol the account is denominated in.
        opened: First date a transaction may reference the account.
        opening_balance: Optional seed for the running balance.
    """

    name: str
    account_type: AccountType
    currency: str
    opened: date
    opening_balance: Decimal | None = None

    @property
    def seed(self) -> Decimal:
        """Opening balance, zero when none was declared."""
        if self.opening_balance is None:
            return Decimal("0")
        return self.opening_balance


__all__ = ["AccountType", "Account"]
