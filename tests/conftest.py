"""Pytest configuration for test isolation.

Path resolution reads ``LEDGER_FILE``, ``LEDGER_PRICE_DB`` and
``LEDGER_REPORT_UNIT`` and falls back to files under the home directory, so
a developer's real ``~/.ledger`` could leak into results. An autouse fixture
clears those variables and points ``HOME`` at the test's temporary directory.

The CLI calls ``configure_logging()``, which binds a handler to whatever
``sys.stderr`` is current. Under ``CliRunner`` that stream is replaced per
invocation, so the fixture marks logging as already configured; records then
propagate to the root logger where ``caplog`` can see them.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `ledger_report` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

import ledger_report.logging_setup as logging_setup  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for name in ("LEDGER_FILE", "LEDGER_PRICE_DB", "LEDGER_REPORT_UNIT", "LEDGER_REPORT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(logging_setup, "_CONFIGURED", True)
