"""Valuation: express a recorded amount in the reference unit.

Rates are ``Decimal`` and amounts are integer minor units, so conversion is
exact up to a single rounding step back to whole minor units. That step uses
ROUND_HALF_EVEN everywhere (``1005 * 1.5 -> 1508``, ``15 * 0.5 -> 8``,
``25 * 0.5 -> 12``).
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from decimal import ROUND_HALF_EVEN, Decimal, localcontext

from .logging_setup import get_logger
from .models import PriceEntry

_logger = get_logger("ledger_report.valuation")

_ONE = Decimal(1)


def apply_rate(amount: int, rate: Decimal) -> int:
    """Multiply minor units by ``rate`` and round half-to-even to an integer."""

    rate_digits = rate.as_tuple()
    with localcontext() as ctx:
        # Enough digits to hold the exact product, however large the amount.
        ctx.prec = len(str(abs(amount))) + len(rate_digits.digits) + max(rate_digits.exponent, 0) + 2
        return int((Decimal(amount) * rate).quantize(_ONE, rounding=ROUND_HALF_EVEN))


def _lookup(
    prices: Mapping[str, PriceEntry], commodity: str, target_unit: str, on: dt.date | None
) -> PriceEntry | None:
    rate_for = getattr(prices, "rate_for", None)
    if rate_for is not None:
        return rate_for(commodity, on, unit=target_unit)
    return prices.get(commodity)


def convert(
    amount: int,
    commodity: str | None,
    target_unit: str,
    prices: Mapping[str, PriceEntry],
    *,
    on: dt.date | None = None,
) -> int:
    """Return ``amount`` expressed in ``target_unit``.

    The amount is returned unchanged when it has no commodity, is already in
    ``target_unit``, or has no price entry quoted in ``target_unit`` (or in no
    explicit unit). ``on`` switches to date-aware lookup when ``prices``
    supports it (see
    :meth:`~ledger_report.ingest.price_parser.PriceDatabase.rate_for`).
    """

    if commodity is None or commodity == target_unit:
        return amount
    entry = _lookup(prices, commodity, target_unit, on)
    if entry is None:
        _logger.debug("no price for %s; leaving %d unconverted", commodity, amount)
        return amount
    if entry.unit is not None and entry.unit != target_unit:
        _logger.debug(
            "price for %s is quoted in %s, not %s; leaving unconverted",
            commodity,
            entry.unit,
            target_unit,
        )
        return amount
    return apply_rate(amount, entry.rate)


__all__ = ["apply_rate", "convert"]
