"""Domain models for normalizing external transaction records."""

from dataclasses import dataclass, field
from enum import Enum

from src.domain.exceptions import ImportRowError
from src.domain.models.ledger import Transaction


class SignConvention(Enum):
    """How signs in an external export map onto ledger amounts.

    ``AS_IS`` keeps signed amounts and treats debits as negative, credits as
    positive. ``INVERTED`` negates the result, for exports where spending is
    positive (most credit card statements).
    """

    AS_IS = "as_is"
    INVERTED = "inverted"


@dataclass(frozen=True)
class ColumnMapping:
    """Mapping from external column names to transaction fields.

    Attributes:
        date: Column holding the transaction date.
        account: Column holding the primary account name.
        amount: Column holding a signed amount.
        debit: Column holding outgoing amounts, when split.
        credit: Column holding incoming amounts, when split.
        payee: Column holding the payee.
        note: Column holding a memo.
        offset_account: Column holding the counterpart account.
        default_account: Account used when the row names none.
        default_offset_account: Funding account for single-entry exports.
    """

    date: str = "date"
    account: str | None = "account"
    amount: str | None = "amount"
    debit: str | None = None
    credit: str | None = None
    payee: str | None = "payee"
    note: str | None = "note"
    offset_account: str | None = "offset_account"
    default_account: str | None = None
    default_offset_account: str | None = None


@dataclass(frozen=True)
class SkippedRow:
    """External row that could not be normalized."""

    line: int
    error: ImportRowError


@dataclass(frozen=True)
class ImportSummary:
    """Outcome of an import run."""

    imported: list[Transaction] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)
    halted: bool = False

    @property
    def imported_count(self) -> int:
        return len(self.imported)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


__all__ = ["SignConvention", "ColumnMapping", "SkippedRow", "ImportSummary"]
