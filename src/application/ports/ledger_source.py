"""Port for reading raw ledger records."""

from typing import Protocol

from src.domain.models import RawLedger


class LedgerSourcePort(Protocol):
    """Port supplying the merged raw records of a ledger."""

    def load(self) -> RawLedger:
        """Return every account, transaction, and price record."""


__all__ = ["LedgerSourcePort"]
