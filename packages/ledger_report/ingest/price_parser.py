"""Price database parser.

Accepted line forms::

    EUR 1.10                    # rate into the reference unit
    EUR 1.10 USD                # rate into an explicit unit
    P 2024-01-01 EUR 1.10 USD   # dated (Ledger-style); unit optional

The result is a :class:`PriceDatabase`, a read-only mapping from commodity
code to the last :class:`~ledger_report.models.PriceEntry` declared for it.
Earlier entries are kept in per-commodity history so callers can opt in to
date-aware lookups with :meth:`PriceDatabase.rate_for`.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Iterator, Mapping, Sequence

from ..errors import MalformedRecordError
from ..logging_setup import get_logger
from ..models import PriceEntry
from .tokens import is_blank_or_comment, parse_commodity, parse_date, parse_rate, split_note

_logger = get_logger("ledger_report.ingest.price_parser")


class PriceDatabase(Mapping[str, PriceEntry]):
    """Commodity code -> active price entry (last declaration wins)."""

    __slots__ = ("_history", "_latest")

    def __init__(self, entries: Iterable[PriceEntry] = ()) -> None:
        self._history: dict[str, list[PriceEntry]] = {}
        self._latest: dict[str, PriceEntry] = {}
        for entry in entries:
            self._history.setdefault(entry.commodity, []).append(entry)
            self._latest[entry.commodity] = entry

    def __getitem__(self, commodity: str) -> PriceEntry:
        return self._latest[commodity]

    def __iter__(self) -> Iterator[str]:
        return iter(self._latest)

    def __len__(self) -> int:
        return len(self._latest)

    def __repr__(self) -> str:
        return f"PriceDatabase({len(self)} commodities)"

    def history(self, commodity: str) -> Sequence[PriceEntry]:
        """All entries for ``commodity`` in file order (empty when unknown)."""

        return tuple(self._history.get(commodity, ()))

    def rate_for(
        self, commodity: str, on: dt.date | None = None, *, unit: str | None = None
    ) -> PriceEntry | None:
        """Return the entry to apply for ``commodity``.

        ``unit`` restricts the candidates to entries quoted in that unit or in
        no explicit unit, so a quote into another unit never hides one into
        ``unit``. Without ``on`` the last candidate in file order wins. With
        ``on`` it is the latest candidate dated on or before ``on``; undated
        entries count as older than any dated one, and ties keep file order
        (last wins). ``None`` when no entry applies.
        """

        if on is None and unit is None:
            return self._latest.get(commodity)
        chosen: PriceEntry | None = None
        chosen_key = dt.date.min
        for entry in self._history.get(commodity, ()):
            if unit is not None and entry.unit not in (None, unit):
                continue
            key = entry.date or dt.date.min
            if on is not None and key > on:
                continue
            if chosen is None or on is None or key >= chosen_key:
                chosen, chosen_key = entry, key
        return chosen


def _parse_price_line(body: str, line_no: int) -> PriceEntry:
    fields = body.split()
    price_date: dt.date | None = None
    if fields and fields[0] == "P":
        if len(fields) < 2:
            raise ValueError("dated price is missing its date")
        price_date = parse_date(fields[1])
        fields = fields[2:]
    if len(fields) not in (2, 3):
        raise ValueError("expected '<commodity> <rate> [unit]'")
    commodity = parse_commodity(fields[0])
    rate = parse_rate(fields[1])
    unit = parse_commodity(fields[2]) if len(fields) == 3 else None
    return PriceEntry(commodity=commodity, rate=rate, unit=unit, date=price_date, line=line_no)


def iter_prices(
    lines: Iterable[str], *, strict: bool = False, source: str = "<prices>"
) -> Iterator[PriceEntry]:
    for line_no, raw in enumerate(lines, start=1):
        text = raw.rstrip("\r\n")
        if is_blank_or_comment(text):
            continue
        body, _note = split_note(text)
        try:
            yield _parse_price_line(body, line_no)
        except ValueError as exc:
            err = MalformedRecordError(source, line_no, text, str(exc))
            if strict:
                raise err from exc
            _logger.warning("%s; skipping", err)


def parse_prices(
    lines: Iterable[str], *, strict: bool = False, source: str = "<prices>"
) -> PriceDatabase:
    """Parse price text into a :class:`PriceDatabase` (duplicates: last wins)."""

    db = PriceDatabase(iter_prices(lines, strict=strict, source=source))
    for commodity in db:
        n = len(db.history(commodity))
        if n > 1:
            _logger.debug("%s: %s declared %d times; using line %d", source, commodity, n, db[commodity].line)
    return db


__all__ = ["PriceDatabase", "iter_prices", "parse_prices"]
