from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ledger_report.cli import app
from tests.helpers.ledger import SAMPLE_LEDGER, SAMPLE_PRICES, write_text

runner = CliRunner()


@pytest.fixture()
def books(tmp_path: Path) -> tuple[Path, Path]:
    return (
        write_text(tmp_path / "book.ledger", SAMPLE_LEDGER),
        write_text(tmp_path / "prices.db", SAMPLE_PRICES),
    )


def _body(output: str, title: str) -> list[str]:
    lines = output.splitlines()
    assert lines[0] == title
    return lines[1:]


def test_balance_end_to_end(books):
    ledger, prices = books
    result = runner.invoke(app, [f"--file={ledger}", f"--price-db={prices}", "balance"])

    assert result.exit_code == 0, result.output
    body = _body(result.output, "Balance:")
    assert [line.split() for line in body] == [
        ["Expenses:Food", "1595"],
        ["Assets:Cash", "-1595"],
        ["Assets:Bank", "250000"],
        ["Income:Salary", "-250000"],
    ]


def test_sort_flag_orders_balance_accounts(books):
    ledger, prices = books
    result = runner.invoke(app, ["bal", "--sort", "--file", str(ledger), "--price-db", str(prices)])

    assert result.exit_code == 0, result.output
    accounts = [line.split()[0] for line in _body(result.output, "Balance:")]
    assert accounts == sorted(accounts)


@pytest.mark.parametrize(("command", "title"), [("register", "Register:"), ("reg", "Register:"), ("print", "Transactions:")])
def test_listing_reports_emit_one_line_per_posting(books, command, title):
    ledger, prices = books
    result = runner.invoke(app, ["--file", str(ledger), "--price-db", str(prices), command])

    assert result.exit_code == 0, result.output
    body = _body(result.output, title)
    assert len(body) == 6
    assert "1100" in body[0]
    assert body[0].endswith("lunch")


def test_missing_ledger_exits_non_zero_without_report(tmp_path):
    result = runner.invoke(app, ["--file", str(tmp_path / "nope.ledger"), "balance"])

    assert result.exit_code == 1
    assert "Error: ledger file not found" in result.output
    assert "Balance:" not in result.output


def test_missing_price_db_still_succeeds_unconverted(books, tmp_path):
    ledger, _prices = books
    result = runner.invoke(app, ["--file", str(ledger), "--price-db", str(tmp_path / "nope.db"), "print"])

    assert result.exit_code == 0, result.output
    amounts = [int(line.split()[2]) for line in _body(result.output, "Transactions:")]
    assert amounts == [1000, -1100, 250000, -250000, 450, -495]


def test_ledger_that_is_not_utf8_exits_non_zero_without_report(tmp_path):
    ledger = tmp_path / "binary.ledger"
    ledger.write_bytes(b"\xff\xfe\x00")
    result = runner.invoke(app, ["--file", str(ledger), "balance"])

    assert result.exit_code == 1
    assert "Error: ledger file is not valid UTF-8" in result.output
    assert "Balance:" not in result.output


def test_unknown_command(books):
    ledger, _ = books
    result = runner.invoke(app, ["--file", str(ledger), "equity"])

    assert result.exit_code == 1
    assert "Unrecognized command: equity" in result.output


def test_no_command():
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "No command specified" in result.output


def test_extra_argument_is_rejected(books):
    ledger, _ = books
    result = runner.invoke(app, ["--file", str(ledger), "balance", "extra"])

    assert result.exit_code == 1
    assert "Unrecognized argument: extra" in result.output
    assert "Balance:" not in result.output


def test_unknown_option_is_a_usage_error(books):
    ledger, _ = books
    result = runner.invoke(app, ["--file", str(ledger), "--bogus", "balance"])
    assert result.exit_code != 0


def test_strict_flag_turns_malformed_lines_fatal(tmp_path):
    ledger = write_text(tmp_path / "book.ledger", "2024-01-01 Shop\n    Food    ten\n    Cash    -10\n")

    lenient = runner.invoke(app, ["--file", str(ledger), "balance"])
    strict = runner.invoke(app, ["--file", str(ledger), "--strict", "balance"])

    assert lenient.exit_code == 0, lenient.output
    assert _body(lenient.output, "Balance:")[0].split() == ["Cash", "-10"]
    assert strict.exit_code == 1
    assert "Balance:" not in strict.output


def test_unit_and_price_by_date_flags(tmp_path):
    ledger = write_text(
        tmp_path / "book.ledger",
        """
        2024-01-10 Hotel
            Expenses:Travel    EUR 1000
        2024-03-10 Hotel
            Expenses:Travel    EUR 1000
        """,
    )
    prices = write_text(tmp_path / "prices.db", "P 2024-01-01 EUR 1.10\nP 2024-03-01 EUR 1.20\n")

    latest = runner.invoke(app, ["--file", str(ledger), "--price-db", str(prices), "bal"])
    by_date = runner.invoke(app, ["--file", str(ledger), "--price-db", str(prices), "--price-by-date", "bal"])
    other_unit = runner.invoke(app, ["--file", str(ledger), "--price-db", str(prices), "--unit", "EUR", "bal"])

    assert _body(latest.output, "Balance:")[0].split() == ["Expenses:Travel", "2400"]
    assert _body(by_date.output, "Balance:")[0].split() == ["Expenses:Travel", "2300"]
    assert _body(other_unit.output, "Balance:")[0].split() == ["Expenses:Travel", "2000"]


def test_environment_supplies_file_locations(books, monkeypatch):
    ledger, prices = books
    monkeypatch.setenv("LEDGER_FILE", str(ledger))
    monkeypatch.setenv("LEDGER_PRICE_DB", str(prices))

    result = runner.invoke(app, ["balance"])

    assert result.exit_code == 0, result.output
    assert _body(result.output, "Balance:")[0].split() == ["Expenses:Food", "1595"]


def test_dotenv_in_working_directory_is_loaded(books, tmp_path, monkeypatch):
    ledger, _ = books
    (tmp_path / ".env").write_text(f"LEDGER_FILE={ledger}\n", encoding="utf-8")
    # Register the variable so teardown removes whatever load_dotenv sets.
    monkeypatch.setenv("LEDGER_FILE", "")
    monkeypatch.delenv("LEDGER_FILE")

    result = runner.invoke(app, ["print"])

    assert result.exit_code == 0, result.output
    assert len(_body(result.output, "Transactions:")) == 6
