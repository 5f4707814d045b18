"""CSV reader for external transaction exports."""

import csv
from collections.abc import Iterator
from pathlib import Path

from src.application.ports.import_source import ImportRow, ImportRowSourcePort
from src.domain.exceptions import LedgerSourceError


def _get_encoding(encoding: str) -> str:
    if encoding.lower() in ("utf-8", "utf8"):
        return "utf-8-sig"
    return encoding


class CsvImportRowSource(ImportRowSourcePort):
    """Stream rows of a CSV file with a header line."""

    def __init__(
        self,
        csv_path: Path | str,
        delimiter: str = ",",
        encoding: str = "utf-8",
    ) -> None:
        self._csv_path = Path(csv_path)
        self._delimiter = delimiter
        self._encoding = _get_encoding(encoding)

    def rows(self) -> Iterator[ImportRow]:
        """Yield ``(line_number, row)`` pairs; line numbers are 1-based.

        Raises:
            LedgerSourceError: If the file cannot be opened, decoded, or parsed.
        """
        try:
            handle = self._csv_path.open("r", encoding=self._encoding, newline="")
        except OSError as exc:
            raise LedgerSourceError(
                f"Cannot read {self._csv_path}: {exc}"
            ) from exc
        with handle:
            reader = csv.DictReader(handle, delimiter=self._delimiter)
            try:
                for row in reader:
                    yield reader.line_num, {
                        key.strip(): value
                        for key, value in row.items()
                        if key is not None
                    }
            except (UnicodeDecodeError, csv.Error) as exc:
                raise LedgerSourceError(
                    f"Cannot read {self._csv_path} after line "
                    f"{reader.line_num}: {exc}"
                ) from exc


__all__ = ["CsvImportRowSource"]
