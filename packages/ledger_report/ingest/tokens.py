"""Token-level helpers shared by the ledger and price parsers.

All helpers raise ``ValueError`` with a short reason on bad input; the
parsers wrap that into :class:`~ledger_report.errors.MalformedRecordError`
together with the source line.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

COMMENT_PREFIXES = (";", "#", "*")
NOTE_MARKER = ";"

_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d")

# A commodity is any run of characters that cannot start or be part of a
# number: letters, currency symbols, underscores ("EUR", "$", "AAPL").
_COMMODITY = r"[^\s\d;+\-.,]+"
_AMOUNT_RE = re.compile(
    rf"^(?:(?P<pre>{_COMMODITY})\s*)?(?P<qty>[+-]?\d+)(?:\s*(?P<post>{_COMMODITY}))?$"
)
_COMMODITY_RE = re.compile(rf"^{_COMMODITY}$")


def is_blank_or_comment(line: str) -> bool:
    s = line.strip()
    return not s or s.startswith(COMMENT_PREFIXES)


def split_note(text: str) -> tuple[str, str]:
    """Split ``"body ; note"`` into ``("body", "note")``; note may be empty."""

    body, sep, note = text.partition(NOTE_MARKER)
    return body.rstrip(), note.strip() if sep else ""


def parse_date(text: str) -> date:
    s = text.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"invalid date {text!r} (expected YYYY-MM-DD or YYYY/MM/DD)")


def parse_amount(text: str) -> tuple[str | None, int]:
    """Parse ``"EUR 1000"``, ``"1000 EUR"``, ``"-250"`` into ``(commodity, minor_units)``.

    Quantities are plain signed integers in minor units; decimal points and
    thousands separators are rejected rather than guessed at.
    """

    s = text.strip()
    if not s:
        raise ValueError("missing amount")
    m = _AMOUNT_RE.match(s)
    if m is None:
        raise ValueError(f"invalid amount {text.strip()!r} (expected integer minor units)")
    pre, post = m.group("pre"), m.group("post")
    if pre and post:
        raise ValueError("commodity given on both sides of the amount")
    return (pre or post or None), int(m.group("qty"))


def parse_commodity(text: str) -> str:
    s = text.strip()
    if not _COMMODITY_RE.match(s):
        raise ValueError(f"invalid commodity code {text!r}")
    return s


def parse_rate(text: str) -> Decimal:
    try:
        d = Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"invalid rate {text!r}") from exc
    if not d.is_finite() or d <= 0:
        raise ValueError(f"rate must be a positive number, got {text!r}")
    return d


__all__ = [
    "is_blank_or_comment",
    "parse_amount",
    "parse_commodity",
    "parse_date",
    "parse_rate",
    "split_note",
]
