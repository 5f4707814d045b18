"""Use case to list the transaction journal."""

from src.domain.models import (
    AccountType,
    JournalFilter,
    JournalRow,
    Ledger,
    PayeeMatch,
)
from src.domain.services.journal import list_transactions
from src.infrastructure.logging.logger import get_app_logger


class GetJournalUseCase:
    """List transaction legs in chronological order."""

    def __init__(
        self,
        ledger: Ledger,
        logger=None,
        payee_match: PayeeMatch = PayeeMatch.CONTAINS,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger: Validated ledger for this run.
            logger: Optional logger compatible with logging.Logger-like API.
            payee_match: Payee comparison used by the payee filter.
        """
        self._ledger = ledger
        self._logger = logger or get_app_logger()
        self._payee_match = payee_match

    def execute(
        self,
        year: int | None = None,
        account_type: AccountType | None = None,
        account_name: str | None = None,
        payee: str | None = None,
    ) -> list[JournalRow]:
        """Return journal rows matching every given criterion."""
        rows = list_transactions(
            self._ledger,
            JournalFilter(
                year=year,
                account_type=account_type,
                account_name=account_name,
                payee=payee,
                payee_match=self._payee_match,
            ),
        )
        self._logger.info(f"Journal lists {len(rows) // 2} transactions")
        return rows


__all__ = ["GetJournalUseCase", "JournalRow"]
