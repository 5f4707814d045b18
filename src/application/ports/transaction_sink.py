"""Port for persisting imported transactions."""

from collections.abc import Sequence
from typing import Protocol

from src.domain.models import Transaction


class TransactionSinkPort(Protocol):
    """Port appending transactions to ledger storage."""

    def append_transactions(self, transactions: Sequence[Transaction]) -> int:
        """Append transactions and return how many were written."""


__all__ = ["TransactionSinkPort"]
