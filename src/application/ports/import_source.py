"""Port for reading external transaction rows."""

from collections.abc import Iterator
from typing import Protocol


ImportRow = tuple[int, dict[str, str]]


class ImportRowSourcePort(Protocol):
    """Port yielding external rows with their source line numbers."""

    def rows(self) -> Iterator[ImportRow]:
        """Yield ``(line_number, row)`` pairs in file order."""


__all__ = ["ImportRow", "ImportRowSourcePort"]
