"""Data models for ``ledger_report``.

Parsed records (:class:`Transaction`, :class:`PriceEntry`) are frozen
``dataclass`` instances: they are built once by the parsers and only read
afterwards. :class:`ReportConfig` is a frozen pydantic model carrying the
resolved command line (command, file paths, flags) by value into
:func:`ledger_report.api.generate_report`.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import UnknownCommandError
from .ingest.tokens import parse_date

# Default reference unit when neither ``--unit`` nor the environment names one.
REFERENCE_UNIT = "USD"


# ---------------------------------------------------------------------------
# Parsed records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single posting with its transaction header folded in.

    ``amount`` is a signed integer in minor units of ``commodity`` (or of the
    reference unit when ``commodity`` is ``None``). ``date`` keeps the text
    exactly as written in the ledger; :attr:`on` gives the parsed value.
    """

    date: str
    payee: str
    account: str
    commodity: str | None
    amount: int
    note: str = ""
    line: int = 0

    @property
    def on(self) -> dt.date:
        return parse_date(self.date)


@dataclass(frozen=True, slots=True)
class PriceEntry:
    """One declared rate: ``1 commodity == rate unit`` (minor per minor).

    ``unit`` is ``None`` when the price line does not name a target, meaning
    the reference unit. ``date`` is only set for ``P``-style dated lines.
    """

    commodity: str
    rate: Decimal
    unit: str | None = None
    date: dt.date | None = None
    line: int = 0


# ---------------------------------------------------------------------------
# Report selection and configuration
# ---------------------------------------------------------------------------


class ReportKind(Enum):
    BALANCE = "balance"
    REGISTER = "register"
    PRINT = "print"

    @classmethod
    def parse(cls, name: str) -> ReportKind:
        """Resolve a command word (including short aliases) to a report kind."""

        kind = _COMMAND_ALIASES.get(name.strip().lower())
        if kind is None:
            raise UnknownCommandError(name)
        return kind

    @property
    def title(self) -> str:
        return _TITLES[self]


_COMMAND_ALIASES: dict[str, ReportKind] = {
    "balance": ReportKind.BALANCE,
    "bal": ReportKind.BALANCE,
    "register": ReportKind.REGISTER,
    "reg": ReportKind.REGISTER,
    "print": ReportKind.PRINT,
}

_TITLES: dict[ReportKind, str] = {
    ReportKind.BALANCE: "Balance:",
    ReportKind.REGISTER: "Register:",
    ReportKind.PRINT: "Transactions:",
}


class ReportConfig(BaseModel):
    """Everything one report run needs, resolved at the CLI boundary."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    command: ReportKind
    ledger_path: Path
    price_db_path: Path | None = None
    sort: bool = False
    strict: bool = False
    unit: str = REFERENCE_UNIT
    price_by_date: bool = False

    @field_validator("unit")
    @classmethod
    def _unit_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("unit must be non-empty")
        return v


__all__ = [
    "REFERENCE_UNIT",
    "PriceEntry",
    "ReportConfig",
    "ReportKind",
    "Transaction",
]
