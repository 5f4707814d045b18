"""Tests for the ledger CLI adapter."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.adapters import ledger_cli
from src.domain.exceptions import DateParseError, UnknownAccount
from src.domain.models import (
    AccountType,
    BalanceRow,
    GroupBy,
    ImportSummary,
    JournalRow,
    Period,
    SkippedRow,
)
from src.infrastructure import container
from src.infrastructure.settings import LedgerSettings


@pytest.fixture
def quiet_loggers(monkeypatch) -> MagicMock:
    logger = MagicMock()
    monkeypatch.setattr(ledger_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(ledger_cli, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(container, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        LedgerSettings, "from_env", classmethod(lambda cls: cls())
    )
    return logger


@pytest.fixture
def loaded(monkeypatch, household_ledger, quiet_loggers):
    seen = {}

    def _fake_load(settings):
        seen["settings"] = settings
        return household_ledger

    monkeypatch.setattr(ledger_cli, "load_ledger", _fake_load)
    return seen


def test_accounts_command_lists_accounts(loaded, capsys, tmp_path) -> None:
    """The accounts command should print one line per account."""
    status = ledger_cli.main(["-l", str(tmp_path), "accounts", "-c", "Expenses"])

    assert status == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["| 2022-01-01 | Expenses    | Dining | USD"]
    assert loaded["settings"].ledger_path == tmp_path.resolve()


def test_balances_command_prints_sections(loaded, capsys) -> None:
    status = ledger_cli.main(["balances", "-y", "2023", "-p", "USD"])

    assert status == 0
    out = capsys.readouterr().out
    assert "Assets" in out
    assert "Savings Account" in out
    assert "100.00 USD" in out
    assert "*" not in out


def test_balances_command_flags_unpriced_rows(loaded, capsys) -> None:
    status = ledger_cli.main(["balances", "-p", "EUR", "-s"])

    assert status == 0
    out = capsys.readouterr().out
    assert "* no price available" in out
    assert "80,000.00 ARS" in out


def test_balances_command_groups_by_quarter(loaded, capsys) -> None:
    ledger_cli.main(["balances", "-y", "2023", "-g", "Q"])

    header = capsys.readouterr().out.splitlines()[0]
    assert "2023-Q1" in header and "2023-Q4" in header


def test_journal_command_filters(loaded, capsys) -> None:
    status = ledger_cli.main(["journal", "-a", "Dining", "-p", "bistro"])

    assert status == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    assert "Corner Bistro (lunch)" in out[0]
    assert out[1].startswith("2023-10-01 | Credit Card")


def test_journal_command_exact_payee(loaded, capsys) -> None:
    ledger_cli.main(["journal", "-p", "bistro", "--exact-payee"])

    assert capsys.readouterr().out.strip() == "No transactions match."


def test_ledger_errors_exit_with_status_one(
    monkeypatch, quiet_loggers, capsys
) -> None:
    def _fail(settings):
        raise UnknownAccount("Groceries", date(2023, 1, 1))

    monkeypatch.setattr(ledger_cli, "load_ledger", _fail)

    status = ledger_cli.main(["accounts"])

    assert status == 1
    assert "Groceries" in capsys.readouterr().err
    quiet_loggers.error.assert_called_once()


def test_missing_ledger_path_exits_with_status_one(quiet_loggers, capsys) -> None:
    status = ledger_cli.main(["accounts"])

    assert status == 1
    assert "LEDGER_PATH" in capsys.readouterr().err


def test_invalid_class_is_rejected_by_parser(quiet_loggers) -> None:
    with pytest.raises(SystemExit):
        ledger_cli.main(["balances", "-c", "Savings"])


def test_import_command_appends_to_ledger(tmp_path, quiet_loggers, capsys) -> None:
    ledger_dir = tmp_path / "books"
    ledger_dir.mkdir()
    csv_path = tmp_path / "card.csv"
    csv_path.write_text(
        "date,Amount,payee\n"
        "2023-11-02,18.20,Cafe\n"
        "yesterday,3.00,Kiosk\n",
        encoding="utf-8",
    )

    status = ledger_cli.main(
        [
            "-l",
            str(ledger_dir),
            "import",
            "--csv",
            str(csv_path),
            "-f",
            "%Y-%m-%d",
            "--account",
            "Credit Card",
            "--offset-account",
            "Dining",
            "--amount-column",
            "Amount",
            "--invert",
        ]
    )

    assert status == 0
    out = capsys.readouterr().out
    assert "Imported 1 transactions, skipped 1 rows." in out
    assert "line 3:" in out
    written = (ledger_dir / "imported.toml").read_text(encoding="utf-8")
    assert 'account = "Credit Card"' in written
    assert "amount = -18.20" in written


def test_import_command_stop_on_error_fails(tmp_path, quiet_loggers, capsys) -> None:
    csv_path = tmp_path / "bank.csv"
    csv_path.write_text("date,amount\nbad,1\n", encoding="utf-8")

    status = ledger_cli.main(
        [
            "-l",
            str(tmp_path),
            "import",
            "--csv",
            str(csv_path),
            "--account",
            "Checking",
            "--offset-account",
            "Uncategorized",
            "--stop-on-error",
        ]
    )

    assert status == 1
    assert "Import stopped" in capsys.readouterr().out
    assert not (tmp_path / "imported.toml").exists()


def test_format_balances_pivots_periods() -> None:
    q1 = Period(2023, 1, GroupBy.QUARTER)
    q2 = Period(2023, 2, GroupBy.QUARTER)
    rows = [
        BalanceRow("Checking", AccountType.ASSETS, "USD", Decimal("10"), q1),
        BalanceRow("Rent", AccountType.EXPENSES, "USD", Decimal("1200"), q1),
        BalanceRow("Checking", AccountType.ASSETS, "USD", Decimal("-5"), q2),
        BalanceRow("Rent", AccountType.EXPENSES, "USD", Decimal("0"), q2),
    ]

    lines = ledger_cli.format_balances(rows)

    assert lines[0].split() == ["Accounts", "2023-Q1", "2023-Q2"]
    assert lines[1] == "Assets"
    assert lines[2].split() == ["Checking", "10.00", "USD", "-5.00", "USD"]
    assert lines[3] == "Expenses"
    assert lines[4].split() == ["Rent", "1,200.00", "USD", "0.00", "USD"]


def test_format_balances_summary_lists_type_totals() -> None:
    rows = [
        BalanceRow("Checking", AccountType.ASSETS, "USD", Decimal("10")),
        BalanceRow("Savings", AccountType.ASSETS, "USD", Decimal("15.5")),
    ]

    lines = ledger_cli.format_balances(rows, summary=True)

    assert lines[-1].split() == ["Assets", "25.50", "USD"]


def test_format_empty_reports() -> None:
    assert ledger_cli.format_balances([]) == ["No balances to report."]
    assert ledger_cli.format_journal([]) == ["No transactions match."]
    assert ledger_cli.format_accounts([]) == ["No accounts declared."]


def test_format_journal_offset_leg_has_no_payee() -> None:
    rows = [
        JournalRow(date(2023, 1, 2), "Rent", Decimal("1200"), payee="Landlord"),
        JournalRow(date(2023, 1, 2), "Checking", Decimal("-1200")),
    ]

    lines = ledger_cli.format_journal(rows)

    assert lines[0] == "2023-01-02 | Rent     |    1,200.00 | Landlord"
    assert lines[1] == "2023-01-02 | Checking |   -1,200.00 |"


def test_format_import_summary_lists_skipped_rows() -> None:
    summary = ImportSummary(
        skipped=[SkippedRow(line=4, error=DateParseError("x", "%d/%m/%Y"))],
        halted=True,
    )

    lines = ledger_cli.format_import_summary(summary)

    assert lines[0] == "Imported 0 transactions, skipped 1 rows."
    assert lines[1].startswith("  line 4: Date 'x'")
    assert lines[2] == "Import stopped at the first failing row."


def test_import_command_reports_unreadable_csv(tmp_path, quiet_loggers, capsys) -> None:
    csv_path = tmp_path / "bank.csv"
    csv_path.write_bytes(b"date,amount\n01/03/2023,1\xff\n")

    status = ledger_cli.main(
        [
            "-l",
            str(tmp_path),
            "import",
            "--csv",
            str(csv_path),
            "--account",
            "Checking",
            "--offset-account",
            "Uncategorized",
        ]
    )

    assert status == 1
    assert "Cannot read" in capsys.readouterr().err
    assert not (tmp_path / "imported.toml").exists()
