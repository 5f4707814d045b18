"""Use case to load and validate the ledger for one report run."""

from src.application.ports.ledger_source import LedgerSourcePort
from src.domain.models import Ledger
from src.domain.services.ledger_builder import build_ledger_from_raw
from src.infrastructure.logging.logger import get_app_logger


class LoadLedgerUseCase:
    """Read raw ledger records and build the validated model."""

    def __init__(self, ledger_source: LedgerSourcePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_source: Port supplying raw ledger records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_source = ledger_source
        self._logger = logger or get_app_logger()

    def execute(self) -> Ledger:
        """Return the validated ledger.

        Raises:
            LedgerSourceError: If the ledger cannot be read.
            StructuralError: If the records do not form a consistent ledger.
        """
        raw = self._ledger_source.load()
        self._logger.info(
            f"Loaded {len(raw.accounts)} account, "
            f"{len(raw.transactions)} transaction and "
            f"{len(raw.prices)} price records"
        )
        return build_ledger_from_raw(raw, logger=self._logger)


__all__ = ["LoadLedgerUseCase"]
