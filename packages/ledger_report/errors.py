"""Error hierarchy for ``ledger_report``.

File-level and command-level errors are fatal and surface at the CLI as a
one-line diagnostic with a non-zero exit. ``MalformedRecordError`` is raised
per line by the parsers; outside strict mode the parsers log it and move on.
"""

from __future__ import annotations

from pathlib import Path


class LedgerReportError(Exception):
    """Base class for all errors raised by this package."""


class MissingFileError(LedgerReportError):
    """A ledger or price file could not be found or read."""

    def __init__(self, path: str | Path, role: str = "ledger", reason: str = "not found") -> None:
        self.path = Path(path)
        self.role = role
        self.reason = reason
        super().__init__(f"{role} file {reason}: {self.path}")


class MalformedRecordError(LedgerReportError):
    """A single line of input could not be parsed."""

    def __init__(self, source: str, line_no: int, text: str, reason: str) -> None:
        self.source = source
        self.line_no = line_no
        self.text = text
        self.reason = reason
        super().__init__(f"{source}:{line_no}: {reason}: {text.strip()!r}")


class UnknownCommandError(LedgerReportError):
    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"Unrecognized command: {command}")


class UnrecognizedArgumentError(LedgerReportError):
    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Unrecognized argument: {argument}")


__all__ = [
    "LedgerReportError",
    "MalformedRecordError",
    "MissingFileError",
    "UnknownCommandError",
    "UnrecognizedArgumentError",
]
