"""CLI for the ``ledger_report`` package.

Typer-based console interface (``ledger-report``)::

    ledger-report [--file=PATH] [--price-db=PATH] [--sort] [--strict]
                  [--unit=CODE] [--price-by-date] COMMAND

``COMMAND`` is one of ``balance``/``bal``, ``register``/``reg`` or ``print``.
A local ``.env`` is loaded (without overriding the environment) before the
file locations are resolved. Business logic lives in ``ledger_report.api``;
:func:`cmd_report` is the plain handler and returns the exit status.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .logging_setup import configure_logging


def cmd_report(
    args: list[str],
    *,
    ledger_file: Path | None = None,
    price_db: Path | None = None,
    sort: bool = False,
    strict: bool = False,
    unit: str | None = None,
    price_by_date: bool = False,
) -> int:
    """Resolve the command, run one report and write it to stdout.

    Nothing is written to stdout unless the whole report was produced. Fatal
    problems (no command, unknown command, extra argument, missing ledger,
    malformed line under ``--strict``) print ``Error: ...`` to stderr and
    return ``1``. On success, returns ``0``.
    """

    from .api import generate_report
    from .config import build_config
    from .errors import LedgerReportError, UnrecognizedArgumentError

    if not args:
        typer.echo("Error: No command specified", err=True)
        return 1

    command, *extra = args
    try:
        if extra:
            raise UnrecognizedArgumentError(extra[0])
        config = build_config(
            command,
            ledger_path=ledger_file,
            price_db_path=price_db,
            sort=sort,
            strict=strict,
            unit=unit,
            price_by_date=price_by_date,
        )
        text = generate_report(config)
    except LedgerReportError as e:
        typer.echo(f"Error: {e}", err=True)
        return 1

    typer.echo(text, nl=False)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    add_completion=False,
    help=(
        "Report on a plain-text ledger: account balances, a chronological "
        "register, or a plain transaction listing, with amounts converted "
        "through a price database."
    ),
)


@app.command()
def report(
    args: Annotated[
        list[str] | None,
        typer.Argument(
            metavar="COMMAND",
            help="balance (bal), register (reg) or print.",
            show_default=False,
        ),
    ] = None,
    *,
    ledger_file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Ledger file (falls back to LEDGER_FILE, ~/.ledger, ./ledger.dat).",
            dir_okay=False,
        ),
    ] = None,
    price_db: Annotated[
        Path | None,
        typer.Option(
            "--price-db",
            help="Price database (falls back to LEDGER_PRICE_DB, ~/.pricedb).",
            dir_okay=False,
        ),
    ] = None,
    sort: Annotated[
        bool, typer.Option("--sort", help="Sort balance accounts by name.")
    ] = False,
    strict: Annotated[
        bool, typer.Option("--strict", help="Abort on the first malformed line.")
    ] = False,
    unit: Annotated[
        str | None,
        typer.Option("--unit", help="Reference unit (falls back to LEDGER_REPORT_UNIT, USD)."),
    ] = None,
    price_by_date: Annotated[
        bool,
        typer.Option(
            "--price-by-date",
            help="Use the latest price dated on or before each transaction.",
        ),
    ] = False,
) -> None:
    """Run one report over the ledger."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()

    code = cmd_report(
        list(args or []),
        ledger_file=ledger_file,
        price_db=price_db,
        sort=sort,
        strict=strict,
        unit=unit,
        price_by_date=price_by_date,
    )
    if code:
        raise typer.Exit(code)


if __name__ == "__main__":  # pragma: no cover
    app()
