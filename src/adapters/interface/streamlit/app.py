"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from decimal import Decimal
from pathlib import Path

import streamlit as st
import altair as alt

from src.application.use_cases.get_account_balances import (
    BalanceRow,
    GetAccountBalancesUseCase,
)
from src.application.use_cases.get_accounts import (
    Account,
    GetAccountsUseCase,
)
from src.application.use_cases.get_journal import (
    GetJournalUseCase,
    JournalRow,
)
from src.domain.exceptions import LedgerError
from src.domain.models import AccountType, GroupBy, Ledger, PayeeMatch
from src.domain.services.balances import summarize_by_type
from src.infrastructure.container import load_ledger
from src.infrastructure.logging.logger import get_usage_logger
from src.infrastructure.settings import LedgerSettings


_GROUP_OPTIONS = {
    "Account": GroupBy.ACCOUNT,
    "Month": GroupBy.MONTH,
    "Quarter": GroupBy.QUARTER,
    "Year": GroupBy.YEAR,
}


def _fetch_ledger(ledger_path: str) -> Ledger:
    """Load and validate the ledger at ``ledger_path``."""
    settings = replace(
        LedgerSettings.from_env(),
        ledger_path=Path(ledger_path).expanduser().resolve(),
    )
    return load_ledger(settings)


@st.cache_data(show_spinner=False)
def _load_ledger(ledger_path: str, schema_version: int = 1) -> Ledger:
    """Cached wrapper around _fetch_ledger for Streamlit sessions."""
    _ = schema_version
    return _fetch_ledger(ledger_path)


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    return f"{value:,.2f} {currency_code}"


def _available_years(ledger: Ledger) -> list[int]:
    """Return transaction years, most recent first."""
    return sorted({txn.date.year for txn in ledger.transactions}, reverse=True)


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that Altair's numpy/pandas imports are usable.

    Returns:
        tuple[bool, str | None]: Whether charts can render, and why not.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Charts unavailable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "Charts unavailable: numpy is missing ndarray."
    if not hasattr(pandas, "Timestamp"):
        return False, "Charts unavailable: pandas is missing Timestamp."
    return True, None


def _balance_table(rows: Sequence[BalanceRow]) -> list[dict]:
    """Convert balance rows into dataframe records."""
    return [
        {
            "Type": row.account_type.value,
            "Account": row.account_name,
            "Period": str(row.period) if row.period else "",
            "Balance": float(row.amount),
            "Currency": row.currency,
            "Converted": "no price" if row.conversion_failed else "",
        }
        for row in rows
    ]


def _journal_table(rows: Sequence[JournalRow]) -> list[dict]:
    """Convert journal rows into dataframe records."""
    return [
        {
            "Date": row.date.isoformat(),
            "Account": row.account_name,
            "Amount": float(row.amount),
            "Payee": row.payee or "",
            "Note": row.note or "",
        }
        for row in rows
    ]


def _render_type_chart(rows: Sequence[BalanceRow]) -> None:
    """Render a bar chart of balances per account type and currency."""
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return
    totals = summarize_by_type(rows)
    if not totals:
        st.info("No balances available for the chart.")
        return
    data = [
        {
            "account_type": total.account_type.value,
            "currency": total.currency,
            "amount": float(total.amount),
            "amount_label": _format_currency(total.amount, total.currency),
        }
        for total in totals
    ]
    chart = alt.Chart(alt.Data(values=data)).mark_bar().encode(
        x=alt.X("account_type:N", title="Account type", sort=None),
        y=alt.Y("amount:Q", title="Balance"),
        color=alt.Color("currency:N", title="Currency"),
        tooltip=[
            alt.Tooltip("account_type:N"),
            alt.Tooltip("amount_label:N"),
        ],
    )
    st.subheader("Balances by Account Type")
    st.altair_chart(chart, width="stretch")


def _render_balances(ledger: Ledger, years: Sequence[int]) -> None:
    """Render the balances page."""
    year_choice = st.sidebar.selectbox("Year", ["All"] + list(years))
    group_choice = st.sidebar.selectbox("Group by", list(_GROUP_OPTIONS))
    classes = st.sidebar.multiselect(
        "Account types",
        [account_type.value for account_type in AccountType],
    )
    price = st.sidebar.text_input("Price in currency", value="").strip()

    use_case = GetAccountBalancesUseCase(ledger)
    rows = use_case.execute(
        account_types=[AccountType.parse(value) for value in classes] or None,
        year=None if year_choice == "All" else int(year_choice),
        target_currency=price or None,
        group_by=_GROUP_OPTIONS[group_choice],
        today=date.today(),
    )
    st.subheader("Balances")
    if any(row.conversion_failed for row in rows):
        st.warning(
            f"Some balances have no price in {price}; they are shown "
            "in their own currency."
        )
    st.dataframe(_balance_table(rows), width="stretch", hide_index=True)
    if group_choice == "Account":
        _render_type_chart(rows)


def _render_journal(
    ledger: Ledger,
    years: Sequence[int],
    payee_match: PayeeMatch = PayeeMatch.CONTAINS,
) -> None:
    """Render the journal page."""
    year_choice = st.sidebar.selectbox("Year", ["All"] + list(years))
    class_choice = st.sidebar.selectbox(
        "Account type",
        ["All"] + [account_type.value for account_type in AccountType],
    )
    account_choice = st.sidebar.selectbox(
        "Account",
        ["All"] + sorted(ledger.accounts),
    )
    payee_label = (
        "Payee" if payee_match is PayeeMatch.EXACT else "Payee contains"
    )
    payee = st.text_input(payee_label, placeholder="Type to filter")

    rows = GetJournalUseCase(ledger, payee_match=payee_match).execute(
        year=None if year_choice == "All" else int(year_choice),
        account_type=(
            None if class_choice == "All" else AccountType.parse(class_choice)
        ),
        account_name=None if account_choice == "All" else account_choice,
        payee=payee.strip() or None,
    )
    st.caption(f"{len(rows) // 2} transactions shown")
    st.dataframe(_journal_table(rows), width="stretch", hide_index=True)


def _render_accounts(accounts: Sequence[Account]) -> None:
    """Render the accounts table."""
    st.subheader("Accounts")
    data = [
        {
            "Opened": account.opened.isoformat(),
            "Name": account.name,
            "Type": account.account_type.value,
            "Currency": account.currency,
            "Opening balance": (
                float(account.opening_balance)
                if account.opening_balance is not None
                else None
            ),
        }
        for account in accounts
    ]
    st.dataframe(data, width="stretch", hide_index=True, height=420)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Ledger Dashboard", layout="wide")
    st.title("Ledger Dashboard")

    settings = LedgerSettings.from_env()
    default_path = str(settings.ledger_path) if settings.ledger_path else ""
    ledger_path = st.sidebar.text_input("Ledger path", value=default_path)
    if not ledger_path.strip():
        st.warning("Set LEDGER_PATH or enter a ledger path.")
        return
    try:
        ledger = _load_ledger(ledger_path.strip())
    except (LedgerError, RuntimeError) as exc:
        st.error(str(exc))
        return

    page = st.sidebar.selectbox("Page", ["Balances", "Journal", "Accounts"])
    get_usage_logger().info(f"dashboard page={page}")
    years = _available_years(ledger)
    if page == "Balances":
        _render_balances(ledger, years)
    elif page == "Journal":
        _render_journal(ledger, years, settings.payee_match)
    else:
        accounts = GetAccountsUseCase(ledger).execute()
        st.caption(f"{len(accounts)} accounts declared")
        if not accounts:
            st.warning("No accounts declared in the ledger.")
            return
        _render_accounts(accounts)


if __name__ == "__main__":  # pragma: no cover
    main()
