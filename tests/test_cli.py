from __future__ import annotations

from pathlib import Path

import pytest
from db.client import get_engine
from sqlalchemy import inspect
from typer.testing import CliRunner

from ledger_import.cli import app
from tests.helpers.db import seed_categories

runner = CliRunner()


@pytest.fixture(autouse=True)
def _cwd_without_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def _tab_lines(output: str) -> list[list[str]]:
    return [line.split("\t") for line in output.splitlines() if "\t" in line]


def test_init_db_creates_tables(tmp_path):
    url = f"sqlite+pysqlite:///{tmp_path / 'cli.db'}"

    result = runner.invoke(app, ["init-db", "--database-url", url])

    assert result.exit_code == 0, result.output
    engine = get_engine(database_url=url)
    assert {"ledger_categories", "ledger_transactions"} <= set(inspect(engine).get_table_names())


def test_import_prints_created_transactions(db_url, write_csv):
    path = write_csv(["Lunch,outcome,45.00,Food", ",income,10,Pay", "Salary,income,5000,Salary"])

    result = runner.invoke(
        app, ["import-transactions", "--csv-path", str(path), "--database-url", db_url]
    )

    assert result.exit_code == 0, result.output
    lines = _tab_lines(result.stdout)
    assert [(row[1], row[2], row[3], row[4]) for row in lines] == [
        ("Lunch", "outcome", "45.00", "Food"),
        ("Salary", "income", "5000.00", "Salary"),
    ]
    assert not path.exists()


def test_keep_file_flag_leaves_csv_in_place(db_url, write_csv):
    path = write_csv(["Lunch,outcome,45,Food"])

    result = runner.invoke(
        app,
        ["import-transactions", "--csv-path", str(path), "--database-url", db_url, "--keep-file"],
    )

    assert result.exit_code == 0, result.output
    assert path.exists()


def test_keep_source_env_var_is_honored(db_url, write_csv, monkeypatch):
    monkeypatch.setenv("LEDGER_IMPORT_KEEP_SOURCE", "yes")
    path = write_csv(["Lunch,outcome,45,Food"])

    result = runner.invoke(
        app, ["import-transactions", "--csv-path", str(path), "--database-url", db_url]
    )

    assert result.exit_code == 0, result.output
    assert path.exists()


def test_missing_file_exits_with_error(db_url, tmp_path):
    result = runner.invoke(
        app,
        ["import-transactions", "--csv-path", str(tmp_path / "missing.csv"), "--database-url", db_url],
    )

    assert result.exit_code == 1
    assert "Error: File not found" in result.output


def test_malformed_csv_exits_with_error_and_keeps_file(db_url, write_csv):
    path = write_csv(["Lunch,outcome"])

    result = runner.invoke(
        app, ["import-transactions", "--csv-path", str(path), "--database-url", db_url]
    )

    assert result.exit_code == 1
    assert "Failed to parse CSV" in result.output
    assert path.exists()


def test_persistence_error_exits_with_error_and_keeps_file(db_url, write_csv):
    path = write_csv(["Refund,refund,10,Returns"])

    result = runner.invoke(
        app, ["import-transactions", "--csv-path", str(path), "--database-url", db_url]
    )

    assert result.exit_code == 1
    assert "persistence failed" in result.output
    assert path.exists()


def test_missing_database_url_exits_with_error(write_csv):
    path = write_csv(["Lunch,outcome,45,Food"])

    result = runner.invoke(app, ["import-transactions", "--csv-path", str(path)])

    assert result.exit_code == 1
    assert "DATABASE_URL is not set" in result.output
    assert path.exists()


def test_list_categories_prints_titles_in_order(db_url, session):
    seed_categories(session, ["Rent", "Food"])

    result = runner.invoke(app, ["list-categories", "--database-url", db_url])

    assert result.exit_code == 0, result.output
    assert [row[1] for row in _tab_lines(result.stdout)] == ["Food", "Rent"]
