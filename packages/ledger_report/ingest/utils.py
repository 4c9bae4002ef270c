"""Ingest utilities shared by the API and the CLI.

Opens the ledger and price files by path and hands their lines to the
parsers. The two files have different failure policies: a missing ledger is
fatal (:class:`~ledger_report.errors.MissingFileError`), a missing price
database yields an empty :class:`PriceDatabase`.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from ..errors import MissingFileError
from ..logging_setup import get_logger
from ..models import Transaction
from .ledger_parser import parse_ledger
from .price_parser import PriceDatabase, parse_prices

_logger = get_logger("ledger_report.ingest.utils")


def load_ledger(path: str | PathLike[str], *, strict: bool = False) -> list[Transaction]:
    """Read and parse the ledger at ``path``."""

    p = Path(path)
    try:
        with p.open(encoding="utf-8") as f:
            return parse_ledger(f, strict=strict, source=str(p))
    except (FileNotFoundError, IsADirectoryError, PermissionError) as exc:
        raise MissingFileError(p, role="ledger") from exc
    except UnicodeDecodeError as exc:
        raise MissingFileError(p, role="ledger", reason="is not valid UTF-8") from exc


def load_price_db(
    path: str | PathLike[str] | None, *, strict: bool = False
) -> PriceDatabase:
    """Read and parse the price database at ``path``; empty when absent or unreadable."""

    if path is None:
        return PriceDatabase()
    p = Path(path)
    try:
        with p.open(encoding="utf-8") as f:
            return parse_prices(f, strict=strict, source=str(p))
    except (FileNotFoundError, IsADirectoryError, PermissionError):
        _logger.info("price database %s not available; amounts stay unconverted", p)
        return PriceDatabase()
    except UnicodeDecodeError as exc:
        _logger.warning("price database %s is not valid UTF-8 (%s); amounts stay unconverted", p, exc.reason)
        return PriceDatabase()


__all__ = ["load_ledger", "load_price_db"]
