"""Public API for the ``ledger_report`` package.

:func:`generate_report` is the single orchestration point used by the CLI:
parse the ledger once, parse the price database once, run exactly one
report, and hand back the finished text. Errors raised here
(:class:`~ledger_report.errors.MissingFileError`, and
:class:`~ledger_report.errors.MalformedRecordError` in strict mode) happen
before any report text exists, so callers never print a partial report.
"""

from __future__ import annotations

from .ingest.utils import load_ledger, load_price_db
from .logging_setup import get_logger
from .models import ReportConfig
from .reports import render_report

_logger = get_logger("ledger_report.api")


def generate_report(config: ReportConfig) -> str:
    """Run the report described by ``config`` and return its text."""

    transactions = load_ledger(config.ledger_path, strict=config.strict)
    prices = load_price_db(config.price_db_path, strict=config.strict)
    _logger.info(
        "%s report over %d transactions with %d prices (unit=%s, sort=%s, by_date=%s)",
        config.command.value,
        len(transactions),
        len(prices),
        config.unit,
        config.sort,
        config.price_by_date,
    )
    return render_report(
        config.command,
        transactions,
        prices,
        sort=config.sort,
        unit=config.unit,
        by_date=config.price_by_date,
    )


__all__ = ["generate_report"]
