"""Report generators: balance, register and print.

Each generator takes the parsed transactions and price mapping, valuates
every amount through :func:`~ledger_report.valuation.convert`, and returns
the report body as a list of lines. :func:`render_report` picks the
generator for a :class:`~ledger_report.models.ReportKind` and prepends the
report title.

Column layout::

    balance   "  {account:<30} {total:>10}"
    register  "{date} {payee:<20} {account:<30} {amount:>10} {note}"
    print     "{date} {payee:<20} {amount:>10} {note}"

Columns are padded, never truncated. Trailing whitespace is stripped so an
empty note leaves no dangling space.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence

from .models import REFERENCE_UNIT, PriceEntry, ReportKind, Transaction
from .valuation import convert

Prices = Mapping[str, PriceEntry]


def _valuate(t: Transaction, prices: Prices, unit: str, by_date: bool) -> int:
    return convert(t.amount, t.commodity, unit, prices, on=t.on if by_date else None)


def account_totals(
    transactions: Iterable[Transaction],
    prices: Prices,
    *,
    unit: str = REFERENCE_UNIT,
    by_date: bool = False,
) -> dict[str, int]:
    """Sum valuated amounts per account, keyed in first-seen order."""

    totals: dict[str, int] = {}
    for t in transactions:
        totals[t.account] = totals.get(t.account, 0) + _valuate(t, prices, unit, by_date)
    return totals


def balance_lines(
    transactions: Iterable[Transaction],
    prices: Prices,
    *,
    sort: bool = False,
    unit: str = REFERENCE_UNIT,
    by_date: bool = False,
) -> list[str]:
    totals = account_totals(transactions, prices, unit=unit, by_date=by_date)
    accounts = sorted(totals) if sort else list(totals)
    return [f"  {account:<30} {totals[account]:>10}" for account in accounts]


def register_lines(
    transactions: Iterable[Transaction],
    prices: Prices,
    *,
    unit: str = REFERENCE_UNIT,
    by_date: bool = False,
) -> list[str]:
    return [
        f"{t.date} {t.payee:<20} {t.account:<30} {_valuate(t, prices, unit, by_date):>10} {t.note}".rstrip()
        for t in transactions
    ]


def print_lines(
    transactions: Iterable[Transaction],
    prices: Prices,
    *,
    unit: str = REFERENCE_UNIT,
    by_date: bool = False,
) -> list[str]:
    return [
        f"{t.date} {t.payee:<20} {_valuate(t, prices, unit, by_date):>10} {t.note}".rstrip()
        for t in transactions
    ]


def render_report(
    kind: ReportKind,
    transactions: Sequence[Transaction],
    prices: Prices,
    *,
    sort: bool = False,
    unit: str = REFERENCE_UNIT,
    by_date: bool = False,
) -> str:
    """Render a full report (title line plus body) as one string.

    ``sort`` only affects the balance report.
    """

    generators: dict[ReportKind, Callable[[], list[str]]] = {
        ReportKind.BALANCE: lambda: balance_lines(
            transactions, prices, sort=sort, unit=unit, by_date=by_date
        ),
        ReportKind.REGISTER: lambda: register_lines(
            transactions, prices, unit=unit, by_date=by_date
        ),
        ReportKind.PRINT: lambda: print_lines(transactions, prices, unit=unit, by_date=by_date),
    }
    body = generators[kind]()
    return "\n".join([kind.title, *body]) + "\n"


__all__ = [
    "account_totals",
    "balance_lines",
    "print_lines",
    "register_lines",
    "render_report",
]
