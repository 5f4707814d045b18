"""CLI adapter for ledger reports and CSV imports.

Subcommands mirror the report surface of the ledger::

    ledger -l books/ accounts
    ledger -l books/ balances --class Assets Liabilities --year 2023 --price USD
    ledger -l books/ balances --group Q
    ledger -l books/ journal --account Dining --payee bistro
    ledger -l books/ import --csv bank.csv --format %m/%d/%Y
"""

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from src.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from src.application.use_cases.get_accounts import GetAccountsUseCase
from src.application.use_cases.get_journal import GetJournalUseCase
from src.application.use_cases.import_transactions import (
    ImportTransactionsUseCase,
)
from src.domain.exceptions import LedgerError
from src.domain.models import (
    Account,
    AccountType,
    BalanceRow,
    ColumnMapping,
    GroupBy,
    ImportSummary,
    JournalRow,
    PayeeMatch,
    SignConvention,
)
from src.domain.services.balances import summarize_by_type
from src.infrastructure.container import (
    build_import_source,
    build_transaction_sink,
    load_ledger,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import LedgerSettings


_GROUPS = {
    "M": GroupBy.MONTH,
    "Q": GroupBy.QUARTER,
    "Y": GroupBy.YEAR,
    "month": GroupBy.MONTH,
    "quarter": GroupBy.QUARTER,
    "year": GroupBy.YEAR,
}


def _account_type(value: str) -> AccountType:
    try:
        return AccountType.parse(value)
    except LedgerError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _group(value: str) -> GroupBy:
    try:
        return _GROUPS[value]
    except KeyError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid group {value!r}. Expected M, Q or Y."
        ) from exc


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for every subcommand."""
    parser = argparse.ArgumentParser(
        prog="ledger",
        description="Plain-text accounting reports over TOML ledgers.",
    )
    parser.add_argument(
        "-l",
        "--ledger",
        type=Path,
        help="Ledger file or directory (defaults to LEDGER_PATH)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    accounts = commands.add_parser("accounts", help="List accounts")
    accounts.add_argument(
        "-c", "--class", dest="classes", nargs="*", type=_account_type
    )

    balances = commands.add_parser(
        "balances", help="Print account balance sheet report"
    )
    balances.add_argument(
        "-c",
        "--class",
        dest="classes",
        nargs="*",
        type=_account_type,
        help="Filter accounts by account type",
    )
    balances.add_argument(
        "-y", "--year", type=int, help="Filter transactions by year"
    )
    balances.add_argument(
        "-p", "--price", help="Price balances at specific currency"
    )
    balances.add_argument(
        "-g", "--group", type=_group, help="Group by M(onth), Q(uarter), Y(ear)"
    )
    balances.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print totals per account type",
    )

    journal = commands.add_parser(
        "journal", help="Print transactions journal report"
    )
    journal.add_argument(
        "-y", "--year", type=int, help="Filter transactions by year"
    )
    journal.add_argument(
        "-c",
        "--class",
        dest="account_class",
        type=_account_type,
        help="Filter accounts by account type",
    )
    journal.add_argument(
        "-a", "--account", help="Filter accounts by account name"
    )
    journal.add_argument("-p", "--payee", help="Filter transactions by payee")
    journal.add_argument(
        "--exact-payee",
        action="store_true",
        help="Match the payee exactly instead of by substring",
    )

    importer = commands.add_parser(
        "import", help="Import transactions from csv"
    )
    importer.add_argument(
        "--csv", required=True, type=Path, help="CSV file to import"
    )
    importer.add_argument("-f", "--format", help="Date format of the CSV")
    importer.add_argument(
        "--account", help="Account used when a row names none"
    )
    importer.add_argument(
        "--offset-account", help="Funding account for single-entry exports"
    )
    importer.add_argument("--amount-column", default="amount")
    importer.add_argument("--debit-column")
    importer.add_argument("--credit-column")
    importer.add_argument(
        "--invert",
        action="store_true",
        help="Negate amounts (exports where spending is positive)",
    )
    importer.add_argument("--delimiter", help="CSV delimiter")
    importer.add_argument(
        "--stop-on-error",
        action="store_true",
        help="Stop at the first row that cannot be imported",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)
    get_usage_logger().info(f"ledger {args.command} {vars(args)}")
    logger = get_app_logger()

    settings = LedgerSettings.from_env()
    if args.ledger is not None:
        settings = replace(settings, ledger_path=args.ledger.resolve())

    try:
        if args.command == "import":
            summary = _run_import(args, settings, logger)
            _print_lines(format_import_summary(summary))
            return 1 if summary.halted else 0

        ledger = load_ledger(settings)
        if args.command == "accounts":
            accounts = GetAccountsUseCase(ledger).execute(args.classes or None)
            _print_lines(format_accounts(accounts))
        elif args.command == "balances":
            rows = GetAccountBalancesUseCase(ledger, logger=logger).execute(
                account_types=args.classes or None,
                year=args.year,
                target_currency=args.price or settings.price_currency,
                group_by=args.group or GroupBy.ACCOUNT,
            )
            _print_lines(format_balances(rows, summary=args.summary))
        elif args.command == "journal":
            payee_match = (
                PayeeMatch.EXACT if args.exact_payee else settings.payee_match
            )
            rows = GetJournalUseCase(
                ledger,
                logger=logger,
                payee_match=payee_match,
            ).execute(
                year=args.year,
                account_type=args.account_class,
                account_name=args.account,
                payee=args.payee,
            )
            _print_lines(format_journal(rows))
    except (LedgerError, RuntimeError) as exc:
        logger.error(str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def _run_import(args, settings: LedgerSettings, logger) -> ImportSummary:
    if args.delimiter:
        settings = replace(settings, csv_delimiter=args.delimiter)
    split_columns = bool(args.debit_column or args.credit_column)
    mapping = ColumnMapping(
        amount=None if split_columns else args.amount_column,
        debit=args.debit_column,
        credit=args.credit_column,
        default_account=args.account,
        default_offset_account=args.offset_account
        or settings.default_offset_account,
    )
    use_case = ImportTransactionsUseCase(
        build_transaction_sink(settings),
        logger=logger,
    )
    return use_case.execute(
        build_import_source(args.csv, settings).rows(),
        mapping=mapping,
        date_format=args.format or settings.date_format,
        sign_convention=(
            SignConvention.INVERTED if args.invert else SignConvention.AS_IS
        ),
        stop_on_error=args.stop_on_error,
    )


def format_accounts(accounts: Sequence[Account]) -> list[str]:
    """Render the account list."""
    if not accounts:
        return ["No accounts declared."]
    width = max(len(account.name) for account in accounts)
    return [
        f"| {account.opened} | {account.account_type.value:<11} | "
        f"{account.name:<{width}} | {account.currency}"
        for account in accounts
    ]


def format_balances(
    rows: Sequence[BalanceRow],
    summary: bool = False,
) -> list[str]:
    """Render balance rows as one column per period.

    Converted amounts that fell back to the account currency are marked
    with ``*``.
    """
    if not rows:
        return ["No balances to report."]
    periods = list(dict.fromkeys(row.period for row in rows))
    width = max(len("Accounts"), *(len(row.account_name) for row in rows))
    header = f"{'Accounts':<{width}}" + "".join(
        f"{str(period) if period else 'Balance':>22}" for period in periods
    )
    cells: dict[str, dict] = {}
    types: dict[str, AccountType] = {}
    for row in rows:
        cells.setdefault(row.account_name, {})[row.period] = row
        types[row.account_name] = row.account_type

    lines = [header]
    ordered = sorted(
        cells,
        key=lambda name: (types[name].sort_index, name),
    )
    current_type = None
    for name in ordered:
        if types[name] is not current_type:
            current_type = types[name]
            lines.append(str(current_type))
        line = f"{name:<{width}}"
        for period in periods:
            row = cells[name].get(period)
            line += _balance_cell(row) if row else f"{'':>22}"
        lines.append(line)

    if any(row.conversion_failed for row in rows):
        lines.append("* no price available, shown unconverted")
    if summary:
        lines.append("")
        for total in summarize_by_type(rows):
            label = f"{total.account_type}"
            if total.period is not None:
                label += f" {total.period}"
            lines.append(
                f"{label:<{width}}{total.amount:>18,.2f} {total.currency}"
            )
    return lines


def format_journal(rows: Sequence[JournalRow]) -> list[str]:
    """Render journal legs, one line each."""
    if not rows:
        return ["No transactions match."]
    width = max(len(row.account_name) for row in rows)
    lines = []
    for row in rows:
        line = (
            f"{row.date} | {row.account_name:<{width}} | {row.amount:>11,.2f} |"
        )
        if row.payee or row.note:
            line += f" {row.payee or ''}"
            if row.note:
                line += f" ({row.note})"
        lines.append(line)
    return lines


def format_import_summary(summary: ImportSummary) -> list[str]:
    """Render the import counts and every skipped row."""
    lines = [
        f"Imported {summary.imported_count} transactions, "
        f"skipped {summary.skipped_count} rows."
    ]
    for skipped in summary.skipped:
        lines.append(f"  line {skipped.line}: {skipped.error}")
    if summary.halted:
        lines.append("Import stopped at the first failing row.")
    return lines


def _balance_cell(row: BalanceRow) -> str:
    flag = "*" if row.conversion_failed else " "
    return f"{row.amount:>14,.2f} {row.currency:<6}{flag}"


def _print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
