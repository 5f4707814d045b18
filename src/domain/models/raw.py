"""Raw ledger records as supplied by a parsing collaborator."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


RawRecord = Mapping[str, Any]


@dataclass(frozen=True)
class RawLedger:
    """Untyped account, transaction, and price records.

    Keys follow the ledger file format: accounts carry ``name``, ``open``,
    ``type``, ``currency`` and ``opening_balance``; transactions carry
    ``date``, ``account``, ``amount``, ``offset_account``, ``offset_amount``,
    ``quantity``, ``payee`` and ``note``; prices carry ``date``,
    ``commodity``, ``price`` and ``currency``.
    """

    accounts: list[RawRecord] = field(default_factory=list)
    transactions: list[RawRecord] = field(default_factory=list)
    prices: list[RawRecord] = field(default_factory=list)

    @classmethod
    def merge(cls, *fragments: "RawLedger") -> "RawLedger":
        """Concatenate fragments in the given order."""
        accounts: list[RawRecord] = []
        transactions: list[RawRecord] = []
        prices: list[RawRecord] = []
        for fragment in fragments:
            accounts.extend(fragment.accounts)
            transactions.extend(fragment.transactions)
            prices.extend(fragment.prices)
        return cls(accounts=accounts, transactions=transactions, prices=prices)


__all__ = ["RawRecord", "RawLedger"]
