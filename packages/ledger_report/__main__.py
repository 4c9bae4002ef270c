"""Running as a module: ``python -m ledger_report``."""

from .cli import app

app(prog_name="ledger-report")
