"""TOML-file ledger storage.

A ledger is one ``.toml`` file or a directory of them. Each file declares
``[[account]]``, ``[[transaction]]`` and ``[[price]]`` tables::

    [[account]]
    open = 2023-09-30
    name = "Savings Account"
    type = "Assets"
    currency = "USD"
    opening_balance = 1000.00

    [[transaction]]
    date = 2023-10-01
    account = "Dining"
    amount = 25.50
    offset_account = "Savings Account"
    payee = "Corner Bistro"

    [[price]]
    date = 2023-10-02
    commodity = "ARS"
    price = 0.00125
    currency = "USD"
"""

from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path
import tomllib

import tomli_w

from src.application.ports.ledger_source import LedgerSourcePort
from src.application.ports.transaction_sink import TransactionSinkPort
from src.domain.exceptions import LedgerSourceError
from src.domain.models import RawLedger, Transaction
from src.infrastructure.logging.logger import get_app_logger


DEFAULT_IMPORT_FILE = "imported.toml"

_SECTIONS = ("account", "transaction", "price")


class TomlLedgerRepository(LedgerSourcePort, TransactionSinkPort):
    """Read and append ledger records in TOML files."""

    def __init__(
        self,
        ledger_path: Path | str,
        logger=None,
        import_file: str = DEFAULT_IMPORT_FILE,
    ) -> None:
        """Initialize the repository.

        Args:
            ledger_path: Ledger file or directory of ``*.toml`` files.
            logger: Optional logger compatible with logging.Logger-like API.
            import_file: File created inside a ledger directory for imports.
        """
        self._ledger_path = Path(ledger_path)
        self._logger = logger or get_app_logger()
        self._import_file = import_file

    def ledger_files(self) -> list[Path]:
        """Return the ledger files in load order."""
        if self._ledger_path.is_dir():
            return sorted(
                path
                for path in self._ledger_path.glob("*.toml")
                if path.is_file()
            )
        if self._ledger_path.is_file():
            return [self._ledger_path]
        raise LedgerSourceError(f"Ledger not found at {self._ledger_path}")

    def load(self) -> RawLedger:
        """Parse every ledger file and merge the fragments.

        Raises:
            LedgerSourceError: If a file is missing or is not valid TOML.
        """
        files = self.ledger_files()
        if not files:
            self._logger.warning(f"No .toml files in {self._ledger_path}")
        fragments = [self._read_file(path) for path in files]
        return RawLedger.merge(*fragments)

    def append_transactions(self, transactions: Sequence[Transaction]) -> int:
        """Append ``[[transaction]]`` tables to the import target file.

        Returns:
            int: Number of transactions written.
        """
        if not transactions:
            return 0
        target = self.import_target()
        document = tomli_w.dumps(
            {"transaction": [_transaction_record(txn) for txn in transactions]}
        )
        try:
            with target.open("a", encoding="utf-8") as handle:
                handle.write("\n" + document)
        except OSError as exc:
            raise LedgerSourceError(f"Cannot write to {target}: {exc}") from exc
        self._logger.info(f"Wrote {len(transactions)} transactions to {target}")
        return len(transactions)

    def import_target(self) -> Path:
        """Return the file imported transactions are appended to."""
        if self._ledger_path.is_dir():
            return self._ledger_path / self._import_file
        return self._ledger_path

    def _read_file(self, path: Path) -> RawLedger:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LedgerSourceError(f"Cannot read {path}: {exc}") from exc
        try:
            document = tomllib.loads(text, parse_float=Decimal)
        except tomllib.TOMLDecodeError as exc:
            raise LedgerSourceError(f"Invalid TOML in {path}: {exc}") from exc

        sections = {}
        for name in _SECTIONS:
            value = document.get(name, [])
            if isinstance(value, dict):
                value = [value]
            if not isinstance(value, list) or not all(
                isinstance(item, dict) for item in value
            ):
                raise LedgerSourceError(
                    f"'{name}' in {path} must be a list of tables"
                )
            sections[name] = value
        unknown = sorted(set(document) - set(_SECTIONS))
        if unknown:
            self._logger.warning(
                f"Ignoring unknown sections in {path}: {', '.join(unknown)}"
            )
        return RawLedger(
            accounts=sections["account"],
            transactions=sections["transaction"],
            prices=sections["price"],
        )


def _transaction_record(txn: Transaction) -> dict:
    record = {
        "date": txn.date,
        "account": txn.account,
        "payee": txn.payee,
        "amount": txn.amount,
        "offset_account": txn.offset_account,
        "offset_amount": txn.offset_amount,
        "note": txn.note,
    }
    if txn.quantity != 1:
        record["quantity"] = txn.quantity
    return {key: value for key, value in record.items() if value is not None}


__all__ = ["TomlLedgerRepository", "DEFAULT_IMPORT_FILE"]
