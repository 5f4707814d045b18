"""Use case to import external transaction rows into the ledger store."""

from collections.abc import Iterable

from src.application.ports.import_source import ImportRow
from src.application.ports.transaction_sink import TransactionSinkPort
from src.domain.constants import DEFAULT_IMPORT_DATE_FORMAT
from src.domain.exceptions import ImportRowError
from src.domain.models import (
    ColumnMapping,
    ImportSummary,
    SignConvention,
    SkippedRow,
    Transaction,
)
from src.domain.services.normalization import normalize_row
from src.infrastructure.logging.logger import get_app_logger


class ImportTransactionsUseCase:
    """Normalize external rows one at a time and append the good ones.

    Rows that fail normalization are skipped and reported; the run
    continues unless ``stop_on_error`` is set. Imported transactions are
    not checked against declared accounts here, that happens when the
    ledger is next loaded.
    """

    def __init__(self, sink: TransactionSinkPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            sink: Port appending transactions to ledger storage.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._sink = sink
        self._logger = logger or get_app_logger()

    def execute(
        self,
        rows: Iterable[ImportRow],
        mapping: ColumnMapping | None = None,
        date_format: str = DEFAULT_IMPORT_DATE_FORMAT,
        sign_convention: SignConvention = SignConvention.AS_IS,
        stop_on_error: bool = False,
    ) -> ImportSummary:
        """Import rows and return what was imported and skipped.

        Args:
            rows: ``(line_number, row)`` pairs from the external file.
            mapping: Column mapping for the export.
            date_format: ``strptime`` format of the date column.
            sign_convention: Sign handling of the export.
            stop_on_error: Halt at the first row that fails.

        Returns:
            ImportSummary: Imported transactions and skipped rows.

        Raises:
            LedgerSourceError: If the rows cannot be read; transactions
                normalized before the failure are appended first.
        """
        imported: list[Transaction] = []
        skipped: list[SkippedRow] = []
        halted = False
        try:
            for line, row in rows:
                try:
                    txn = normalize_row(
                        row, mapping, date_format, sign_convention
                    )
                except ImportRowError as exc:
                    self._logger.warning(f"Skipped row {line}: {exc}")
                    skipped.append(SkippedRow(line=line, error=exc))
                    if stop_on_error:
                        halted = True
                        break
                    continue
                imported.append(txn)
        finally:
            # Rows normalized before a source failure are still written.
            if imported:
                written = self._sink.append_transactions(imported)
                self._logger.info(f"Appended {written} transactions")
        self._logger.info(
            f"Import complete: {len(imported)} imported, "
            f"{len(skipped)} skipped"
        )
        return ImportSummary(imported=imported, skipped=skipped, halted=halted)


__all__ = ["ImportTransactionsUseCase", "ImportSummary"]
