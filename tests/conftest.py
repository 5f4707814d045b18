"""Shared fixtures for ledger tests."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.services.ledger_builder import build_ledger
from tests.factories import account_record, price_record, transaction_record


@pytest.fixture
def household_ledger():
    """Small multi-year, multi-currency ledger."""
    accounts = [
        account_record(
            "Savings Account", opening_balance=Decimal("1000.00")
        ),
        account_record("Dining", "Expenses"),
        account_record("Salary", "Income"),
        account_record(
            "Credit Card", "Liabilities", opened=date(2022, 6, 1)
        ),
        account_record(
            "Pesos", "Cash", currency="ARS", opened=date(2023, 9, 1)
        ),
    ]
    transactions = [
        transaction_record(
            date(2022, 3, 15), "Savings Account", Decimal("2000"), "Salary",
            payee="Acme Corp",
        ),
        transaction_record(
            date(2023, 10, 1), "Dining", Decimal("25.50"), "Credit Card",
            payee="Corner Bistro", note="lunch",
        ),
        transaction_record(
            date(2023, 2, 10), "Dining", Decimal("40"), "Savings Account",
            payee="Pizza Place",
        ),
        transaction_record(
            date(2023, 10, 1), "Pesos", Decimal("80000"), "Savings Account",
            offset_amount=Decimal("-100"),
            note="exchange",
        ),
    ]
    prices = [
        price_record(date(2023, 9, 30), "ARS", Decimal("0.00125"), "USD"),
        price_record(date(2023, 10, 2), "ARS", Decimal("0.0013"), "USD"),
    ]
    return build_ledger(accounts, transactions, prices)


@pytest.fixture
def fake_logger() -> MagicMock:
    return MagicMock()
