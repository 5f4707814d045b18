"""Commodity price lookup and balance conversion."""

from bisect import bisect_right
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from logging import Logger

from src.domain.exceptions import NoPriceAvailable
from src.domain.models import Price


PriceIndex = dict[tuple[str, str], tuple[list[date], list[Decimal]]]


def build_price_index(prices: Iterable[Price]) -> PriceIndex:
    """Index prices by (commodity, currency), dates ascending.

    Args:
        prices: Price declarations in any order.

    Returns:
        PriceIndex: Parallel date and value lists per commodity/currency pair.
    """
    grouped: dict[tuple[str, str], list[Price]] = {}
    for price in prices:
        grouped.setdefault((price.commodity, price.currency), []).append(price)

    index: PriceIndex = {}
    for key, entries in grouped.items():
        entries.sort(key=lambda entry: entry.date)
        index[key] = (
            [entry.date for entry in entries],
            [entry.price for entry in entries],
        )
    return index


class PriceResolver:
    """Answer "what is one unit of X worth in C on day D"."""

    def __init__(self, prices: Iterable[Price]) -> None:
        self._index = build_price_index(prices)

    def price_of(
        self,
        commodity: str,
        on: date,
        target_currency: str,
    ) -> Decimal:
        """Return the most recent price not after ``on``.

        Args:
            commodity: Symbol being priced.
            on: Query date.
            target_currency: Currency the price must be expressed in.

        Returns:
            Decimal: Unit price, ``1`` when the commodity is the target.

        Raises:
            NoPriceAvailable: If no matching price exists on or before ``on``.
        """
        if commodity == target_currency:
            return Decimal("1")
        entry = self._index.get((commodity, target_currency))
        if entry is None:
            raise NoPriceAvailable(commodity, target_currency, on)
        dates, values = entry
        position = bisect_right(dates, on)
        if position == 0:
            raise NoPriceAvailable(commodity, target_currency, on)
        return values[position - 1]

    def convert(
        self,
        amount: Decimal,
        commodity: str,
        on: date,
        target_currency: str,
    ) -> Decimal:
        """Return ``amount`` of ``commodity`` expressed in the target."""
        return amount * self.price_of(commodity, on, target_currency)


def convert_balance(
    balance: Decimal,
    commodity: str,
    on: date,
    target_currency: str,
    resolver: PriceResolver,
    logger: Logger,
) -> Decimal | None:
    """Convert a balance into the target currency.

    Args:
        balance: Balance in the source commodity.
        commodity: Source commodity symbol.
        on: Pricing reference date.
        target_currency: Target currency symbol.
        resolver: Price resolver for the ledger.
        logger: Logger used for warnings.

    Returns:
        Decimal | None: Converted balance or None when conversion is not possible.
    """
    try:
        return resolver.convert(balance, commodity, on, target_currency)
    except NoPriceAvailable as exc:
        logger.warning(f"Missing FX rate: {exc}")
        return None


__all__ = ["PriceIndex", "build_price_index", "PriceResolver", "convert_balance"]
