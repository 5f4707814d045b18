"""Use case to compute account balances for reports."""

from collections.abc import Iterable
from datetime import date

from src.domain.models import (
    AccountType,
    BalanceFilter,
    BalanceRow,
    GroupBy,
    Ledger,
)
from src.domain.services.balances import compute_balances
from src.domain.services.fx import PriceResolver
from src.infrastructure.logging.logger import get_app_logger


class GetAccountBalancesUseCase:
    """Compute account balances, optionally priced in a target currency."""

    def __init__(self, ledger: Ledger, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger: Validated ledger for this run.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger = ledger
        self._resolver = PriceResolver(ledger.prices)
        self._logger = logger or get_app_logger()

    def execute(
        self,
        account_types: Iterable[AccountType] | None = None,
        year: int | None = None,
        target_currency: str | None = None,
        group_by: GroupBy = GroupBy.ACCOUNT,
        today: date | None = None,
    ) -> list[BalanceRow]:
        """Return balance rows for the requested report.

        Args:
            account_types: Account classes to report, all when omitted.
            year: Only accumulate postings dated in this year.
            target_currency: Currency to price balances in.
            group_by: Flat per-account rows or period buckets.
            today: Pricing date for reports without a year filter.

        Returns:
            list[BalanceRow]: Balance rows for rendering.
        """
        balance_filter = BalanceFilter(
            account_types=(
                frozenset(account_types) if account_types is not None else None
            ),
            year=year,
        )
        rows = compute_balances(
            self._ledger,
            balance_filter,
            price_target=target_currency,
            group_by=group_by,
            resolver=self._resolver,
            today=today,
            logger=self._logger,
        )
        failed = sum(1 for row in rows if row.conversion_failed)
        if failed:
            self._logger.warning(
                f"{failed} balances could not be priced in {target_currency}"
            )
        self._logger.info(
            f"Computed {len(rows)} balance rows "
            f"(year={year}, group={group_by.value}, price={target_currency})"
        )
        return rows


__all__ = ["GetAccountBalancesUseCase", "BalanceRow"]
