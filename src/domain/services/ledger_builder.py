"""Build a validated ``Ledger`` from raw parsed records."""

from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal
from logging import Logger

from src.domain.exceptions import (
    DuplicateAccount,
    DuplicatePrice,
    InvalidField,
    InvalidPrice,
    SelfReferencingTransaction,
    TransactionBeforeAccountOpen,
    UnknownAccount,
)
from src.domain.models import (
    Account,
    AccountType,
    Ledger,
    Price,
    RawLedger,
    RawRecord,
    Transaction,
)
from src.domain.services.validation import warn_unbalanced_transaction
from src.utils.decimal_utils import parse_decimal


def build_ledger(
    raw_accounts: Iterable[RawRecord],
    raw_transactions: Iterable[RawRecord],
    raw_prices: Iterable[RawRecord] = (),
    logger: Logger | None = None,
) -> Ledger:
    """Validate raw records and construct the ledger aggregate.

    Checks run in a fixed order: account name uniqueness, account types,
    transaction account references, self-references, then opening dates.
    Each check covers every record before the next one starts, and the
    first failure aborts the whole build.

    Args:
        raw_accounts: Account declarations.
        raw_transactions: Transaction declarations, in file order.
        raw_prices: Commodity price declarations.
        logger: Optional logger for non-fatal findings.

    Returns:
        Ledger: Fully populated ledger.

    Raises:
        StructuralError: On the first invalid record.
    """
    accounts = _build_accounts(list(raw_accounts))
    transactions = tuple(
        _build_transaction(record, index)
        for index, record in enumerate(raw_transactions)
    )
    _check_transactions(transactions, accounts)
    prices = _build_prices(list(raw_prices))

    if logger is not None:
        for txn in transactions:
            warn_unbalanced_transaction(txn, accounts, logger)
        logger.info(
            f"Ledger built: {len(accounts)} accounts, "
            f"{len(transactions)} transactions, {len(prices)} prices"
        )
    return Ledger(accounts=accounts, transactions=transactions, prices=prices)


def build_ledger_from_raw(raw: RawLedger, logger: Logger | None = None) -> Ledger:
    """Build a ledger from a merged ``RawLedger``."""
    return build_ledger(raw.accounts, raw.transactions, raw.prices, logger=logger)


def _build_accounts(records: list[RawRecord]) -> dict[str, Account]:
    names = [
        _text(record, "account", index, "name")
        for index, record in enumerate(records)
    ]
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise DuplicateAccount(name)
        seen.add(name)

    accounts: dict[str, Account] = {}
    for index, (name, record) in enumerate(zip(names, records)):
        account_type = AccountType.parse(record.get("type"), account_name=name)
        opening_balance = None
        if record.get("opening_balance") is not None:
            opening_balance = _decimal(
                record, "account", index, "opening_balance"
            )
        accounts[name] = Account(
            name=name,
            account_type=account_type,
            currency=_text(record, "account", index, "currency"),
            opened=_date(record, "account", index, "open"),
            opening_balance=opening_balance,
        )
    return accounts


def _build_transaction(record: RawRecord, index: int) -> Transaction:
    txn_date = _date(record, "transaction", index, "date")
    account_name = _text(record, "transaction", index, "account")
    offset_name = _text(record, "transaction", index, "offset_account")
    amount = _decimal(record, "transaction", index, "amount")
    offset_amount = -amount
    if record.get("offset_amount") is not None:
        offset_amount = _decimal(record, "transaction", index, "offset_amount")
    quantity = Decimal("1")
    if record.get("quantity") is not None:
        quantity = _decimal(record, "transaction", index, "quantity")
    return Transaction(
        date=txn_date,
        account=account_name,
        amount=amount,
        offset_account=offset_name,
        offset_amount=offset_amount,
        quantity=quantity,
        payee=_optional_text(record.get("payee")),
        note=_optional_text(record.get("note")),
    )


def _check_transactions(
    transactions: tuple[Transaction, ...],
    accounts: dict[str, Account],
) -> None:
    # Each rule is checked across every transaction before the next one.
    for txn in transactions:
        for name in (txn.account, txn.offset_account):
            if name not in accounts:
                raise UnknownAccount(name, txn.date)
    for txn in transactions:
        if txn.account == txn.offset_account:
            raise SelfReferencingTransaction(txn.account, txn.date)
    for txn in transactions:
        for name in (txn.account, txn.offset_account):
            opened = accounts[name].opened
            if txn.date < opened:
                raise TransactionBeforeAccountOpen(name, opened, txn.date)


def _build_prices(records: list[RawRecord]) -> tuple[Price, ...]:
    prices: list[Price] = []
    seen: set[tuple[str, date, str]] = set()
    for index, record in enumerate(records):
        price = Price(
            date=_date(record, "price", index, "date"),
            commodity=_text(record, "price", index, "commodity"),
            price=_decimal(record, "price", index, "price"),
            currency=_text(record, "price", index, "currency"),
        )
        if price.price <= 0:
            raise InvalidPrice(price.commodity, price.date, price.price)
        key = (price.commodity, price.date, price.currency)
        if key in seen:
            raise DuplicatePrice(*key)
        seen.add(key)
        prices.append(price)
    return tuple(prices)


def _text(record: RawRecord, kind: str, index: int, field: str) -> str:
    value = record.get(field)
    if not isinstance(value, str) or not value.strip():
        raise InvalidField(kind, index, field, value)
    return value.strip()


def _optional_text(value) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def _decimal(record: RawRecord, kind: str, index: int, field: str) -> Decimal:
    value = record.get(field)
    try:
        return parse_decimal(value)
    except ValueError as exc:
        raise InvalidField(kind, index, field, value) from exc


def _date(record: RawRecord, kind: str, index: int, field: str) -> date:
    value = record.get(field)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidField(kind, index, field, value) from exc
    raise InvalidField(kind, index, field, value)


__all__ = ["build_ledger", "build_ledger_from_raw"]
