"""Pytest configuration for test isolation.

``db.client`` keeps a process-wide engine bound to the first URL it sees, and
``ledger_import.logging_setup`` configures the package logger only once. Both
are reset around every test so each test gets its own SQLite file and its own
logging state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from db.client import get_session, reset_engine
from sqlalchemy.orm import Session

from ledger_import.logging_setup import reset_logging
from tests.helpers.db import bootstrap_sqlite_db

HEADER = "title,type,value,category"


@pytest.fixture(autouse=True)
def _isolate_process_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    for var in (
        "LEDGER_IMPORT_FROM_LINE",
        "LEDGER_IMPORT_ENCODING",
        "LEDGER_IMPORT_KEEP_SOURCE",
        "LEDGER_IMPORT_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_engine()
    yield
    reset_engine()
    reset_logging()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return bootstrap_sqlite_db(tmp_path / "ledger.db")


@pytest.fixture
def session(db_url: str) -> Iterator[Session]:
    s = get_session(database_url=db_url)
    try:
        yield s
    finally:
        s.rollback()
        s.close()


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing ``rows`` (plus a header line) to a CSV file."""

    def _write(rows: list[str], *, name: str = "upload.csv", header: str | None = HEADER) -> Path:
        lines = ([header] if header is not None else []) + list(rows)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
