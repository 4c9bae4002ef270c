"""Resolution of file locations and defaults into a :class:`ReportConfig`.

Precedence for each setting: explicit CLI value, then environment variable
(a local ``.env`` is loaded by the CLI beforehand), then built-in default.

- ledger:  ``--file`` -> ``LEDGER_FILE`` -> ``~/.ledger`` if it exists -> ``./ledger.dat``
- prices:  ``--price-db`` -> ``LEDGER_PRICE_DB`` -> ``~/.pricedb``
- unit:    ``--unit`` -> ``LEDGER_REPORT_UNIT`` -> ``USD``
"""

from __future__ import annotations

import os
from pathlib import Path

from .models import REFERENCE_UNIT, ReportConfig, ReportKind

LEDGER_FILE_ENV = "LEDGER_FILE"
PRICE_DB_ENV = "LEDGER_PRICE_DB"
UNIT_ENV = "LEDGER_REPORT_UNIT"

DEFAULT_LEDGER_NAME = ".ledger"
FALLBACK_LEDGER_NAME = "ledger.dat"
DEFAULT_PRICE_DB_NAME = ".pricedb"


def _env_path(name: str) -> Path | None:
    val = os.getenv(name)
    if val and val.strip():
        return Path(val.strip()).expanduser()
    return None


def resolve_ledger_path(explicit: str | Path | None = None) -> Path:
    if explicit is not None:
        return Path(explicit).expanduser()
    from_env = _env_path(LEDGER_FILE_ENV)
    if from_env is not None:
        return from_env
    home_ledger = Path.home() / DEFAULT_LEDGER_NAME
    if home_ledger.exists():
        return home_ledger
    return Path(FALLBACK_LEDGER_NAME)


def resolve_price_db_path(explicit: str | Path | None = None) -> Path:
    if explicit is not None:
        return Path(explicit).expanduser()
    from_env = _env_path(PRICE_DB_ENV)
    if from_env is not None:
        return from_env
    return Path.home() / DEFAULT_PRICE_DB_NAME


def resolve_unit(explicit: str | None = None) -> str:
    if explicit and explicit.strip():
        return explicit.strip()
    from_env = os.getenv(UNIT_ENV)
    if from_env and from_env.strip():
        return from_env.strip()
    return REFERENCE_UNIT


def build_config(
    command: str | ReportKind,
    *,
    ledger_path: str | Path | None = None,
    price_db_path: str | Path | None = None,
    sort: bool = False,
    strict: bool = False,
    unit: str | None = None,
    price_by_date: bool = False,
) -> ReportConfig:
    """Resolve ``command`` and all paths/defaults into a frozen config.

    Raises :class:`~ledger_report.errors.UnknownCommandError` for an
    unrecognized command word.
    """

    kind = command if isinstance(command, ReportKind) else ReportKind.parse(command)
    return ReportConfig(
        command=kind,
        ledger_path=resolve_ledger_path(ledger_path),
        price_db_path=resolve_price_db_path(price_db_path),
        sort=sort,
        strict=strict,
        unit=resolve_unit(unit),
        price_by_date=price_by_date,
    )


__all__ = [
    "build_config",
    "resolve_ledger_path",
    "resolve_price_db_path",
    "resolve_unit",
]
