"""Balance accumulation, conversion, and period grouping."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.models import (
    Account,
    BalanceFilter,
    BalanceRow,
    BalanceTypeTotal,
    GroupBy,
    Ledger,
    Period,
    Transaction,
)
from src.domain.services.fx import PriceResolver, convert_balance
from src.domain.services.validation import validate_balance_sign
from src.infrastructure.logging.logger import get_app_logger


_Key = tuple[str, Period | None]


def compute_balances(
    ledger: Ledger,
    balance_filter: BalanceFilter | None = None,
    price_target: str | None = None,
    group_by: GroupBy = GroupBy.ACCOUNT,
    *,
    resolver: PriceResolver | None = None,
    today: date | None = None,
    logger: Logger | None = None,
) -> list[BalanceRow]:
    """Compute account balances for a report.

    Every in-scope transaction accumulates into both of its accounts, even
    when an account's class is filtered out of the report. A year filter
    restricts accumulation to that year. Opening balances always seed the
    running totals, and every declared account passing the class filter is
    reported, at zero when idle.

    When ``price_target`` is set, each row's aggregated amount is converted
    with a single rate. The pricing date is the latest in-scope transaction
    date when a year is given (31 December when the year is empty), and
    ``today`` otherwise. Period rows price at their latest transaction date,
    or the period end when idle. Rows whose rate is missing keep their
    unconverted amount and are flagged ``conversion_failed``.

    Args:
        ledger: Validated ledger.
        balance_filter: Reported account classes and accumulation year.
        price_target: Currency to convert balances into.
        group_by: Flat per-account rows or month/quarter/year buckets.
        resolver: Price resolver, built from the ledger when omitted.
        today: Pricing date for unfiltered flat reports.
        logger: Logger used for warnings, the app logger when omitted.

    Returns:
        list[BalanceRow]: Rows ordered by period, account class, and name.
    """
    balance_filter = balance_filter or BalanceFilter()
    logger = logger or get_app_logger()
    year = balance_filter.year
    grouped = group_by is not GroupBy.ACCOUNT

    in_scope = [
        txn
        for txn in ledger.transactions
        if year is None or txn.date.year == year
    ]
    totals, latest = _accumulate(ledger, in_scope, year, group_by)

    reportable = sorted(
        ledger.accounts_of_type(balance_filter.account_types),
        key=lambda account: (account.account_type.sort_index, account.name),
    )
    if grouped:
        periods: list[Period | None] = sorted(
            {period for _, period in totals if period is not None}
        )
        if not periods:
            periods = [Period.of(_idle_date(year, today), group_by)]
    else:
        periods = [None]

    if price_target and resolver is None:
        resolver = PriceResolver(ledger.prices)

    rows: list[BalanceRow] = []
    for period in periods:
        reference = _reference_date(period, latest, year, today)
        for account in reportable:
            amount = totals.get((account.name, period), Decimal("0"))
            if not grouped:
                validate_balance_sign(
                    account.name, account.account_type, amount, logger
                )
            rows.append(
                _build_row(
                    account,
                    amount,
                    period,
                    price_target,
                    reference,
                    resolver,
                    logger,
                )
            )
    return rows


def summarize_by_type(rows: Iterable[BalanceRow]) -> list[BalanceTypeTotal]:
    """Total balance rows per period, account class, and currency.

    Args:
        rows: Rows from ``compute_balances``.

    Returns:
        list[BalanceTypeTotal]: One total per combination, in row order.
    """
    totals: dict[tuple, Decimal] = {}
    for row in rows:
        key = (row.period, row.account_type, row.currency)
        totals[key] = totals.get(key, Decimal("0")) + row.amount
    return [
        BalanceTypeTotal(
            account_type=account_type,
            currency=currency,
            amount=amount,
            period=period,
        )
        for (period, account_type, currency), amount in totals.items()
    ]


def _accumulate(
    ledger: Ledger,
    transactions: list[Transaction],
    year: int | None,
    group_by: GroupBy,
) -> tuple[dict[_Key, Decimal], dict[Period | None, date]]:
    totals: dict[_Key, Decimal] = {}
    latest: dict[Period | None, date] = {}

    def bucket(day: date) -> Period | None:
        if group_by is GroupBy.ACCOUNT:
            return None
        return Period.of(day, group_by)

    def post(name: str, period: Period | None, amount: Decimal) -> None:
        key = (name, period)
        totals[key] = totals.get(key, Decimal("0")) + amount

    for account in ledger.accounts.values():
        if account.opening_balance is None:
            continue
        seeded_on = account.opened
        if year is not None and seeded_on.year != year:
            seeded_on = date(year, 1, 1)
        post(account.name, bucket(seeded_on), account.opening_balance)

    for txn in transactions:
        period = bucket(txn.date)
        post(txn.account, period, txn.posting_amount)
        post(txn.offset_account, period, txn.offset_amount)
        if period not in latest or txn.date > latest[period]:
            latest[period] = txn.date
    return totals, latest


def _idle_date(year: int | None, today: date | None) -> date:
    if year is not None:
        return date(year, 12, 31)
    return today or date.today()


def _reference_date(
    period: Period | None,
    latest: dict[Period | None, date],
    year: int | None,
    today: date | None,
) -> date:
    if period is not None:
        return latest.get(period, period.end)
    if year is not None:
        return latest.get(None, date(year, 12, 31))
    return today or date.today()


def _build_row(
    account: Account,
    amount: Decimal,
    period: Period | None,
    price_target: str | None,
    reference: date,
    resolver: PriceResolver | None,
    logger: Logger,
) -> BalanceRow:
    if not price_target or account.currency == price_target:
        return BalanceRow(
            account_name=account.name,
            account_type=account.account_type,
            currency=account.currency,
            amount=amount,
            period=period,
        )
    converted = convert_balance(
        amount,
        account.currency,
        reference,
        price_target,
        resolver,
        logger,
    )
    if converted is None:
        return BalanceRow(
            account_name=account.name,
            account_type=account.account_type,
            currency=account.currency,
            amount=amount,
            period=period,
            conversion_failed=True,
        )
    return BalanceRow(
        account_name=account.name,
        account_type=account.account_type,
        currency=price_target,
        amount=converted,
        period=period,
    )


__all__ = ["compute_balances", "summarize_by_type"]
