"""Chronological transaction journal."""

from src.domain.models import (
    JournalFilter,
    JournalRow,
    Ledger,
    PayeeMatch,
    Transaction,
)


def list_transactions(
    ledger: Ledger,
    journal_filter: JournalFilter | None = None,
) -> list[JournalRow]:
    """Return two journal rows per matching transaction, oldest first.

    The first row carries the primary leg with payee and note, the second the
    offset leg. Transactions on the same day keep their declaration order.

    Args:
        ledger: Validated ledger.
        journal_filter: Optional selection criteria.

    Returns:
        list[JournalRow]: Journal legs in date order.
    """
    journal_filter = journal_filter or JournalFilter()
    matching = [
        txn
        for txn in ledger.transactions
        if _matches(ledger, txn, journal_filter)
    ]
    rows: list[JournalRow] = []
    for txn in sorted(matching, key=lambda txn: txn.date):
        rows.append(
            JournalRow(
                date=txn.date,
                account_name=txn.account,
                amount=txn.amount,
                payee=txn.payee,
                note=txn.note,
            )
        )
        rows.append(
            JournalRow(
                date=txn.date,
                account_name=txn.offset_account,
                amount=txn.offset_amount,
            )
        )
    return rows


def payee_matches(
    payee: str | None,
    wanted: str,
    mode: PayeeMatch = PayeeMatch.CONTAINS,
) -> bool:
    """Compare a transaction payee with the requested one.

    ``CONTAINS`` is a case-insensitive substring test, ``EXACT`` a
    case-sensitive equality test. A transaction without payee never matches.
    """
    if payee is None:
        return False
    if mode is PayeeMatch.EXACT:
        return payee == wanted
    return wanted.casefold() in payee.casefold()


def _matches(ledger: Ledger, txn: Transaction, journal_filter: JournalFilter) -> bool:
    if journal_filter.year is not None and txn.date.year != journal_filter.year:
        return False
    if journal_filter.account_name is not None and not txn.touches(
        journal_filter.account_name
    ):
        return False
    if journal_filter.account_type is not None:
        leg_types = {
            ledger.account(txn.account).account_type,
            ledger.account(txn.offset_account).account_type,
        }
        if journal_filter.account_type not in leg_types:
            return False
    if journal_filter.payee is not None and not payee_matches(
        txn.payee, journal_filter.payee, journal_filter.payee_match
    ):
        return False
    return True


__all__ = ["list_transactions", "payee_matches"]
