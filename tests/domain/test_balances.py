"""Tests for the balance engine."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.domain.models import (
    AccountType,
    BalanceFilter,
    GroupBy,
    Period,
)
from src.domain.services import balances as balances_module
from src.domain.services.balances import compute_balances, summarize_by_type
from src.domain.services.ledger_builder import build_ledger
from tests.factories import account_record, transaction_record


def _amounts(rows) -> dict[str, Decimal]:
    return {row.account_name: row.amount for row in rows}


def test_flat_balances_include_opening_balance(household_ledger) -> None:
    rows = compute_balances(household_ledger)

    assert _amounts(rows) == {
        "Savings Account": Decimal("2860.00"),
        "Credit Card": Decimal("-25.50"),
        "Dining": Decimal("65.50"),
        "Salary": Decimal("-2000"),
        "Pesos": Decimal("80000"),
    }


def test_flat_rows_are_ordered_by_type_then_name() -> None:
    ledger = build_ledger(
        [
            account_record("Zoo Tickets", "Expenses"),
            account_record("Wallet", "Cash"),
            account_record("Checking"),
            account_record("Apples", "Expenses"),
            account_record("Broker", "Stock"),
        ],
        [],
    )

    rows = compute_balances(ledger)

    assert [row.account_name for row in rows] == [
        "Checking",
        "Apples",
        "Zoo Tickets",
        "Broker",
        "Wallet",
    ]
    assert all(row.amount == 0 for row in rows)


def test_same_currency_transactions_sum_to_zero() -> None:
    ledger = build_ledger(
        [
            account_record("Checking"),
            account_record("Rent", "Expenses"),
            account_record("Salary", "Income"),
        ],
        [
            transaction_record(date(2023, 1, 1), "Checking", 3000, "Salary"),
            transaction_record(date(2023, 1, 2), "Rent", 1200, "Checking"),
            transaction_record(date(2023, 2, 2), "Rent", 1200, "Checking"),
        ],
    )

    rows = compute_balances(ledger)

    assert sum(row.amount for row in rows) == 0
    assert _amounts(rows)["Checking"] == Decimal("600")


def test_year_filter_counts_only_that_year() -> None:
    ledger = build_ledger(
        [account_record("Checking"), account_record("Salary", "Income")],
        [
            transaction_record(date(2022, 12, 31), "Checking", 100, "Salary"),
            transaction_record(date(2023, 1, 1), "Checking", 50, "Salary"),
        ],
    )

    rows = compute_balances(ledger, BalanceFilter(year=2023))

    assert _amounts(rows) == {
        "Checking": Decimal("50"),
        "Salary": Decimal("-50"),
    }


def test_year_filter_keeps_opening_balance_seed() -> None:
    ledger = build_ledger(
        [
            account_record(
                "Savings", opened=date(2022, 1, 1), opening_balance=1000
            ),
            account_record("Salary", "Income"),
        ],
        [
            transaction_record(date(2022, 6, 1), "Savings", 100, "Salary"),
            transaction_record(date(2023, 6, 1), "Savings", 50, "Salary"),
        ],
    )

    rows = compute_balances(ledger, BalanceFilter(year=2023))

    assert _amounts(rows)["Savings"] == Decimal("1050")


def test_year_filter_seeds_household_savings(household_ledger) -> None:
    rows_2022 = compute_balances(household_ledger, BalanceFilter(year=2022))
    rows_2023 = compute_balances(household_ledger, BalanceFilter(year=2023))

    assert _amounts(rows_2022)["Savings Account"] == Decimal("3000.00")
    assert _amounts(rows_2023)["Savings Account"] == Decimal("860.00")


def test_year_filter_lists_accounts_opened_later() -> None:
    ledger = build_ledger(
        [
            account_record("Savings", opened=date(2022, 1, 1)),
            account_record("New", opened=date(2024, 1, 1)),
        ],
        [],
    )

    rows = compute_balances(ledger, BalanceFilter(year=2023))

    assert _amounts(rows) == {"Savings": Decimal("0"), "New": Decimal("0")}


def test_year_filter_lists_household_accounts_at_zero(household_ledger) -> None:
    rows = compute_balances(household_ledger, BalanceFilter(year=2022))

    assert _amounts(rows)["Pesos"] == Decimal("0")
    assert _amounts(rows)["Dining"] == Decimal("0")


def test_class_filter_limits_reporting_not_accumulation(household_ledger) -> None:
    rows = compute_balances(
        household_ledger,
        BalanceFilter(account_types=frozenset({AccountType.ASSETS})),
    )

    assert len(rows) == 1
    assert rows[0].account_name == "Savings Account"
    assert rows[0].amount == Decimal("2860.00")


def test_quantity_scales_primary_leg() -> None:
    ledger = build_ledger(
        [
            account_record("Checking"),
            account_record("ACME", "Stock", currency="ACME"),
        ],
        [
            transaction_record(
                date(2023, 3, 1),
                "ACME",
                Decimal("1"),
                "Checking",
                quantity=Decimal("10"),
                offset_amount=Decimal("-1500"),
            )
        ],
    )

    rows = compute_balances(ledger)

    assert _amounts(rows) == {
        "Checking": Decimal("-1500"),
        "ACME": Decimal("10"),
    }


def test_conversion_with_year_uses_latest_transaction_date(
    household_ledger,
) -> None:
    rows = compute_balances(
        household_ledger, BalanceFilter(year=2023), price_target="USD"
    )

    pesos = next(row for row in rows if row.account_name == "Pesos")
    assert pesos.currency == "USD"
    assert pesos.amount == Decimal("100")
    assert not pesos.conversion_failed


def test_conversion_without_year_uses_today(household_ledger) -> None:
    rows = compute_balances(
        household_ledger, price_target="USD", today=date(2023, 10, 5)
    )

    pesos = next(row for row in rows if row.account_name == "Pesos")
    assert pesos.amount == Decimal("104")
    assert pesos.currency == "USD"


def test_same_currency_rows_are_not_priced(household_ledger) -> None:
    rows = compute_balances(
        household_ledger, price_target="USD", today=date(2023, 10, 5)
    )

    savings = next(row for row in rows if row.account_name == "Savings Account")
    assert savings.amount == Decimal("2860.00")
    assert savings.currency == "USD"


def test_missing_price_flags_row_and_keeps_amount(
    household_ledger, fake_logger
) -> None:
    rows = compute_balances(
        household_ledger,
        price_target="USD",
        today=date(2023, 9, 15),
        logger=fake_logger,
    )

    pesos = next(row for row in rows if row.account_name == "Pesos")
    assert pesos.conversion_failed
    assert pesos.currency == "ARS"
    assert pesos.amount == Decimal("80000")
    assert len(rows) == 5
    warnings = [call.args[0] for call in fake_logger.warning.call_args_list]
    assert any("Missing FX rate" in message for message in warnings)


def _overdrawn_ledger():
    return build_ledger(
        [account_record("Checking"), account_record("Rent", "Expenses")],
        [transaction_record(date(2023, 1, 2), "Rent", 100, "Checking")],
    )


def test_flat_report_warns_on_negative_asset(fake_logger) -> None:
    compute_balances(_overdrawn_ledger(), logger=fake_logger)

    warnings = [call.args[0] for call in fake_logger.warning.call_args_list]
    assert any(
        "Asset balance is negative for Checking" in message
        for message in warnings
    )


def test_warnings_default_to_app_logger(monkeypatch) -> None:
    app_logger = MagicMock()
    monkeypatch.setattr(balances_module, "get_app_logger", lambda: app_logger)

    compute_balances(_overdrawn_ledger())

    app_logger.warning.assert_called_once()


def test_group_by_year_builds_dense_grid(household_ledger) -> None:
    rows = compute_balances(household_ledger, group_by=GroupBy.YEAR)

    assert len(rows) == 10
    periods = [row.period for row in rows]
    assert periods == sorted(periods)
    by_key = {(row.period.label, row.account_name): row.amount for row in rows}
    assert by_key[("2022", "Savings Account")] == Decimal("3000.00")
    assert by_key[("2022", "Dining")] == Decimal("0")
    assert by_key[("2023", "Savings Account")] == Decimal("-140")
    assert by_key[("2023", "Pesos")] == Decimal("80000")


def test_group_by_month_within_year(household_ledger) -> None:
    rows = compute_balances(
        household_ledger, BalanceFilter(year=2023), group_by=GroupBy.MONTH
    )

    assert {row.period for row in rows} == {
        Period(2023, 1, GroupBy.MONTH),
        Period(2023, 2, GroupBy.MONTH),
        Period(2023, 10, GroupBy.MONTH),
    }
    january = [row for row in rows if row.period.index == 1]
    february = [row for row in rows if row.period.index == 2]
    assert [row.account_name for row in february] == [
        "Savings Account",
        "Credit Card",
        "Dining",
        "Salary",
        "Pesos",
    ]
    assert _amounts(january)["Savings Account"] == Decimal("1000.00")
    assert _amounts(february)["Dining"] == Decimal("40")
    assert _amounts(february)["Savings Account"] == Decimal("-40")


def test_grouped_report_without_activity_lists_accounts() -> None:
    ledger = build_ledger(
        [account_record("Checking"), account_record("Rent", "Expenses")],
        [],
    )

    in_year = compute_balances(
        ledger, BalanceFilter(year=2023), group_by=GroupBy.MONTH
    )
    current = compute_balances(
        ledger, group_by=GroupBy.QUARTER, today=date(2024, 5, 3)
    )

    assert [(row.account_name, row.period) for row in in_year] == [
        ("Checking", Period(2023, 12, GroupBy.MONTH)),
        ("Rent", Period(2023, 12, GroupBy.MONTH)),
    ]
    assert {row.period for row in current} == {Period(2024, 2, GroupBy.QUARTER)}
    assert all(row.amount == 0 for row in in_year + current)


def test_group_by_quarter_converts_per_period(household_ledger) -> None:
    rows = compute_balances(
        household_ledger,
        BalanceFilter(year=2023),
        price_target="USD",
        group_by=GroupBy.QUARTER,
    )

    pesos = {row.period.label: row for row in rows if row.account_name == "Pesos"}
    assert pesos["2023-Q4"].amount == Decimal("100")
    assert pesos["2023-Q4"].currency == "USD"
    assert pesos["2023-Q1"].conversion_failed


def test_summarize_by_type_totals_rows(household_ledger) -> None:
    rows = compute_balances(household_ledger)

    totals = summarize_by_type(rows)

    by_type = {total.account_type: total for total in totals}
    assert by_type[AccountType.ASSETS].amount == Decimal("2860.00")
    assert by_type[AccountType.CASH].currency == "ARS"
    assert [total.account_type for total in totals] == [
        AccountType.ASSETS,
        AccountType.LIABILITIES,
        AccountType.EXPENSES,
        AccountType.INCOME,
        AccountType.CASH,
    ]


def test_summarize_by_type_splits_currencies() -> None:
    ledger = build_ledger(
        [
            account_record("Checking"),
            account_record("Euro Savings", currency="EUR", opening_balance=50),
            account_record("Savings", opening_balance=10),
        ],
        [],
    )

    totals = summarize_by_type(compute_balances(ledger))

    assert [(total.currency, total.amount) for total in totals] == [
        ("USD", Decimal("10")),
        ("EUR", Decimal("50")),
    ]
