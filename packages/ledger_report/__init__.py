"""Public interface for the ``ledger_report`` package.

Symbol re-exports only: the parsers, valuation, report generators and the
``generate_report`` orchestration entry point.
"""

from .api import generate_report
from .config import build_config
from .errors import (
    LedgerReportError,
    MalformedRecordError,
    MissingFileError,
    UnknownCommandError,
    UnrecognizedArgumentError,
)
from .ingest.ledger_parser import parse_ledger
from .ingest.price_parser import PriceDatabase, parse_prices
from .ingest.utils import load_ledger, load_price_db
from .models import REFERENCE_UNIT, PriceEntry, ReportConfig, ReportKind, Transaction
from .reports import balance_lines, print_lines, register_lines, render_report
from .valuation import convert

__all__ = [
    # API
    "generate_report",
    "build_config",
    "parse_ledger",
    "parse_prices",
    "load_ledger",
    "load_price_db",
    "convert",
    "balance_lines",
    "register_lines",
    "print_lines",
    "render_report",
    # Models / types
    "REFERENCE_UNIT",
    "PriceDatabase",
    "PriceEntry",
    "ReportConfig",
    "ReportKind",
    "Transaction",
    # Errors
    "LedgerReportError",
    "MalformedRecordError",
    "MissingFileError",
    "UnknownCommandError",
    "UnrecognizedArgumentError",
]
