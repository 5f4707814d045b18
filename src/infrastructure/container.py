"""Composition root for wiring infrastructure adapters."""

from pathlib import Path

from src.application.ports.import_source import ImportRowSourcePort
from src.application.ports.ledger_source import LedgerSourcePort
from src.application.ports.transaction_sink import TransactionSinkPort
from src.application.use_cases.load_ledger import LoadLedgerUseCase
from src.domain.models import Ledger
from src.infrastructure.csv_import_source import CsvImportRowSource
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings
from src.infrastructure.toml_ledger_repository import TomlLedgerRepository


def _resolve_ledger_path(settings: LedgerSettings) -> Path:
    if settings.ledger_path is None:
        raise RuntimeError(
            "No ledger configured. Set LEDGER_PATH or pass --ledger."
        )
    return settings.ledger_path


def build_ledger_repository(
    settings: LedgerSettings | None = None,
) -> TomlLedgerRepository:
    """Return the TOML repository for the configured ledger."""
    resolved = settings or LedgerSettings.from_env()
    return TomlLedgerRepository(
        _resolve_ledger_path(resolved),
        logger=get_app_logger(),
    )


def build_ledger_source(
    settings: LedgerSettings | None = None,
) -> LedgerSourcePort:
    """Return the configured ledger source adapter."""
    return build_ledger_repository(settings)


def build_transaction_sink(
    settings: LedgerSettings | None = None,
) -> TransactionSinkPort:
    """Return the adapter imported transactions are appended to."""
    return build_ledger_repository(settings)


def build_import_source(
    csv_path: Path | str,
    settings: LedgerSettings | None = None,
) -> ImportRowSourcePort:
    """Return a CSV row source for an external export."""
    resolved = settings or LedgerSettings.from_env()
    return CsvImportRowSource(csv_path, delimiter=resolved.csv_delimiter)


def load_ledger(settings: LedgerSettings | None = None) -> Ledger:
    """Load and validate the configured ledger."""
    use_case = LoadLedgerUseCase(
        build_ledger_source(settings),
        logger=get_app_logger(),
    )
    return use_case.execute()


__all__ = [
    "build_ledger_repository",
    "build_ledger_source",
    "build_transaction_sink",
    "build_import_source",
    "load_ledger",
]
