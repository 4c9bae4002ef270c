"""Transaction parser: ledger text to :class:`~ledger_report.models.Transaction` rows.

Layout (one transaction = a header line followed by indented postings)::

    ; comment lines start with ';', '#' or '*'
    2024-01-01 Store                 ; optional header note
        Expenses:Food    EUR 1000    ; lunch
        Assets:Cash      -1100

Header: date at column 0, optional payee, optional ``; note``.
Posting: indented; the account, then two or more spaces (or a tab), then an
integer amount in minor units with an optional commodity code before or after
it, then an optional ``; note``. A posting's own note wins over the header's.

Every posting becomes one ``Transaction`` carrying its header's date and
payee. Output order equals file order.

Malformed lines are logged and skipped unless ``strict=True``, in which case
the first one raises :class:`~ledger_report.errors.MalformedRecordError`.
Postings under a rejected header are dropped with it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..errors import MalformedRecordError
from ..logging_setup import get_logger
from ..models import Transaction
from .tokens import is_blank_or_comment, parse_amount, parse_date, split_note

_logger = get_logger("ledger_report.ingest.ledger_parser")

_ACCOUNT_SEPARATOR = re.compile(r"\s{2,}|\t")


@dataclass(slots=True)
class _Header:
    line_no: int
    text: str
    date: str
    payee: str
    note: str
    # Posting lines seen, rejected ones included.
    postings: int = 0


def _reject(err: MalformedRecordError, *, strict: bool) -> None:
    if strict:
        raise err
    _logger.warning("%s; skipping", err)


def _parse_header(body: str, note: str, line_no: int, text: str) -> _Header:
    fields = body.split(None, 1)
    date_token = fields[0]
    payee = fields[1].strip() if len(fields) > 1 else ""
    parse_date(date_token)
    return _Header(line_no=line_no, text=text, date=date_token, payee=payee, note=note)


def _parse_posting(header: _Header, body: str, note: str, line_no: int) -> Transaction:
    parts = _ACCOUNT_SEPARATOR.split(body.strip(), maxsplit=1)
    account = parts[0].strip()
    if not account:
        raise ValueError("missing account")
    if len(parts) < 2:
        raise ValueError("missing amount (separate it from the account by two spaces or a tab)")
    commodity, amount = parse_amount(parts[1])
    return Transaction(
        date=header.date,
        payee=header.payee,
        account=account,
        commodity=commodity,
        amount=amount,
        note=note or header.note,
        line=line_no,
    )


def iter_ledger(
    lines: Iterable[str], *, strict: bool = False, source: str = "<ledger>"
) -> Iterator[Transaction]:
    """Yield one ``Transaction`` per posting, in input order."""

    header: _Header | None = None
    orphaned = False

    def close_header() -> None:
        if header is not None and header.postings == 0:
            _reject(
                MalformedRecordError(source, header.line_no, header.text, "transaction has no postings"),
                strict=strict,
            )

    for line_no, raw in enumerate(lines, start=1):
        text = raw.rstrip("\r\n")
        if is_blank_or_comment(text):
            continue
        body, note = split_note(text)

        if text[0].isspace():
            if header is None:
                if orphaned:
                    _logger.debug("%s:%d: posting under rejected header dropped", source, line_no)
                else:
                    _reject(
                        MalformedRecordError(source, line_no, text, "posting outside a transaction"),
                        strict=strict,
                    )
                continue
            header.postings += 1
            try:
                txn = _parse_posting(header, body, note, line_no)
            except ValueError as exc:
                _reject(MalformedRecordError(source, line_no, text, str(exc)), strict=strict)
                continue
            yield txn
            continue

        close_header()
        header = None
        try:
            header = _parse_header(body, note, line_no, text)
            orphaned = False
        except ValueError as exc:
            orphaned = True
            _reject(MalformedRecordError(source, line_no, text, str(exc)), strict=strict)

    close_header()


def parse_ledger(
    lines: Iterable[str], *, strict: bool = False, source: str = "<ledger>"
) -> list[Transaction]:
    """Parse ledger text (any iterable of lines, e.g. an open file) into a list."""

    transactions = list(iter_ledger(lines, strict=strict, source=source))
    _logger.debug("%s: parsed %d transactions", source, len(transactions))
    return transactions


__all__ = ["iter_ledger", "parse_ledger"]
