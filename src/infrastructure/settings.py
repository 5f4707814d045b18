"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

from src.domain.constants import DEFAULT_IMPORT_DATE_FORMAT
from src.domain.models import PayeeMatch
from src.infrastructure.logging.logger import get_app_logger
from src.utils.utils import get_project_root


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for locating the ledger and tuning reports and imports.

    Attributes:
        ledger_path: Ledger file or directory of ``*.toml`` files.
        date_format: ``strptime`` format of imported CSV dates.
        default_offset_account: Funding account for single-entry exports.
        price_currency: Default currency to price balances in.
        payee_match: Journal payee comparison mode.
        csv_delimiter: Delimiter of imported CSV files.
    """

    ledger_path: Optional[Path] = None
    date_format: str = DEFAULT_IMPORT_DATE_FORMAT
    default_offset_account: Optional[str] = None
    price_currency: Optional[str] = None
    payee_match: PayeeMatch = PayeeMatch.CONTAINS
    csv_delimiter: str = ","

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        raw_path = os.getenv("LEDGER_PATH")
        if raw_path:
            ledger_path = cls._normalize_path(raw_path, logger=logger)
        else:
            ledger_path = cls._default_ledger_path(logger=logger)
        return cls(
            ledger_path=ledger_path,
            date_format=os.getenv(
                "LEDGER_DATE_FORMAT",
                DEFAULT_IMPORT_DATE_FORMAT,
            ),
            default_offset_account=os.getenv("LEDGER_DEFAULT_OFFSET_ACCOUNT")
            or None,
            price_currency=os.getenv("LEDGER_PRICE_CURRENCY") or None,
            payee_match=cls._parse_payee_match(
                os.getenv("LEDGER_PAYEE_MATCH", ""),
                logger=logger,
            ),
            csv_delimiter=os.getenv("LEDGER_CSV_DELIMITER", ","),
        )

    @staticmethod
    def _normalize_path(raw_path: str, logger) -> Path:
        """Normalize a ledger path or ``file://`` URI.

        Args:
            raw_path: Raw path string.
            logger: Logger used for warnings.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if not path.exists():
            logger.warning(f"Ledger path does not exist at {path}")
        return path

    @staticmethod
    def _default_ledger_path(logger) -> Path | None:
        """Return ``data/`` when it holds ledger files.

        Args:
            logger: Logger used for warnings.

        Returns:
            Path | None: The data directory, or None when it has no ledger.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            return None
        if any(data_dir.glob("*.toml")):
            return data_dir.resolve()
        logger.warning(
            "No .toml files found in data/. Set LEDGER_PATH to choose a ledger."
        )
        return None

    @staticmethod
    def _parse_payee_match(raw_value: str, logger) -> PayeeMatch:
        cleaned = raw_value.strip().lower()
        if not cleaned:
            return PayeeMatch.CONTAINS
        try:
            return PayeeMatch(cleaned)
        except ValueError:
            logger.warning(
                f"Invalid LEDGER_PAYEE_MATCH '{raw_value}'. "
                "Expected 'contains' or 'exact'."
            )
            return PayeeMatch.CONTAINS


__all__ = ["LedgerSettings"]
