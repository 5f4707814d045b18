"""Domain models for balance and journal reports."""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum

from src.domain.models.accounts import AccountType


class GroupBy(Enum):
    """Balance report grouping."""

    ACCOUNT = "account"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


@dataclass(frozen=True, order=True)
class Period:
    """Period bucket derived from a date.

    Attributes:
        year: Calendar year.
        index: Month (1..12), quarter (1..4), or the year itself.
        grouping: Grouping the bucket belongs to.
    """

    year: int
    index: int
    grouping: GroupBy

    @classmethod
    def of(cls, day: date, grouping: GroupBy) -> "Period":
        if grouping is GroupBy.MONTH:
            return cls(day.year, day.month, grouping)
        if grouping is GroupBy.QUARTER:
            return cls(day.year, (day.month - 1) // 3 + 1, grouping)
        if grouping is GroupBy.YEAR:
            return cls(day.year, day.year, grouping)
        raise ValueError(f"Grouping {grouping.value!r} has no periods")

    @property
    def end(self) -> date:
        """Last day of the period."""
        if self.grouping is GroupBy.YEAR:
            return date(self.year, 12, 31)
        last_month = self.index * 3 if self.grouping is GroupBy.QUARTER else self.index
        if last_month == 12:
            return date(self.year, 12, 31)
        return date(self.year, last_month + 1, 1) - timedelta(days=1)

    @property
    def label(self) -> str:
        if self.grouping is GroupBy.YEAR:
            return f"{self.year}"
        if self.grouping is GroupBy.QUARTER:
            return f"{self.year}-Q{self.index}"
        return f"{self.year}-{self.index:02d}"

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class BalanceFilter:
    """Account classes to report and the year to accumulate."""

    account_types: frozenset[AccountType] | None = None
    year: int | None = None


@dataclass(frozen=True)
class BalanceRow:
    """Balance of one account, optionally within one period.

    Attributes:
        account_name: Reported account.
        account_type: Class of the account.
        currency: Target currency when converted, account currency otherwise.
        amount: Aggregated (and possibly converted) balance.
        period: Period bucket for grouped reports.
        conversion_failed: True when a price target was requested but no
            price was available, so ``amount`` is unconverted.
    """

    account_name: str
    account_type: AccountType
    currency: str
    amount: Decimal
    period: Period | None = None
    conversion_failed: bool = False


@dataclass(frozen=True)
class BalanceTypeTotal:
    """Sum of balance rows sharing a class, currency, and period."""

    account_type: AccountType
    currency: str
    amount: Decimal
    period: Period | None = None


class PayeeMatch(Enum):
    """How the journal payee filter compares payees."""

    CONTAINS = "contains"
    EXACT = "exact"


@dataclass(frozen=True)
class JournalFilter:
    """Journal selection; every set criterion must match."""

    year: int | None = None
    account_type: AccountType | None = None
    account_name: str | None = None
    payee: str | None = None
    payee_match: PayeeMatch = PayeeMatch.CONTAINS


@dataclass(frozen=True)
class JournalRow:
    """One leg of a transaction in the journal."""

    date: date
    account_name: str
    amount: Decimal
    payee: str | None = None
    note: str | None = None


__all__ = [
    "GroupBy",
    "Period",
    "BalanceFilter",
    "BalanceRow",
    "BalanceTypeTotal",
    "PayeeMatch",
    "JournalFilter",
    "JournalRow",
]
