# ruff: noqa: I001
"""CLI for the ``ledger_import`` package.

This module exposes callable command handlers (``cmd_import_transactions``,
``cmd_init_db``, ``cmd_list_categories``) and a Typer-based console interface.
Environment variables (notably ``DATABASE_URL``) are loaded from a local
``.env`` using ``python-dotenv`` before delegating to command logic. Business
logic lives in ``ledger_import.importer`` and related modules; this is the
only place where exceptions become user-facing messages and exit codes.
"""

from __future__ import annotations

import csv
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from typer.models import OptionInfo

from .config import ImportSettings
from .logging_setup import configure_logging


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _format_value(value: object) -> str:
    return "" if value is None else str(value)


def cmd_import_transactions(
    csv_path: str,
    *,
    database_url: str | None = None,
    keep_file: bool = False,
) -> int:
    """Import ``csv_path`` and print one line per created transaction.

    Output format: ``<id>\\t<title>\\t<type>\\t<value>\\t<category title>``. A
    one-line summary goes to stderr. Returns a process exit code.
    """

    from .importer import run_import

    try:
        settings = ImportSettings.from_env()
    except (ValidationError, ValueError) as e:
        return _error(f"invalid import settings: {e}")
    if keep_file:
        settings = settings.model_copy(update={"keep_source_file": True})

    try:
        report = run_import(csv_path, database_url=database_url, settings=settings)
    except FileNotFoundError:
        return _error(f"File not found: {csv_path}")
    except PermissionError:
        return _error(f"Permission denied: {csv_path}")
    except csv.Error as e:
        return _error(f"Failed to parse CSV: {e}")
    except UnicodeDecodeError as e:
        return _error(f"Failed to decode '{csv_path}' as {settings.encoding}: {e}")
    except SQLAlchemyError as e:
        return _error(f"persistence failed: {e}")
    except RuntimeError as e:
        return _error(str(e))

    for tx in report.transactions:
        category = tx.category.title if tx.category is not None else ""
        print(f"{tx.id}\t{tx.title}\t{tx.type}\t{_format_value(tx.value)}\t{category}")

    print(
        f"Imported {len(report.transactions)} transactions "
        f"({len(report.created_categories)} new categories, "
        f"{len(report.reused_categories)} reused, "
        f"{len(report.skipped)} rows skipped)",
        file=sys.stderr,
    )
    return 0


def cmd_init_db(*, database_url: str | None = None) -> int:
    """Create the ledger tables from ORM metadata when they do not exist."""

    from db import Base
    from db.client import get_engine

    try:
        Base.metadata.create_all(bind=get_engine(database_url=database_url))
    except (SQLAlchemyError, RuntimeError) as e:
        return _error(f"failed to initialize database: {e}")
    print("Database initialized", file=sys.stderr)
    return 0


def cmd_list_categories(*, database_url: str | None = None) -> int:
    """Print ``<id>\\t<title>`` for every stored category, ordered by title."""

    from db.client import session_scope

    from .persistence import CategoryStore

    try:
        with session_scope(database_url=database_url) as session:
            rows = CategoryStore(session).list_all()
    except (SQLAlchemyError, RuntimeError) as e:
        return _error(f"failed to list categories: {e}")

    for row in rows:
        print(f"{row.id}\t{row.title}")
    return 0


# ---- Typer application -------------------------------------------------------

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Import transaction files into the ledger database.",
)

# Module-level option object to satisfy ruff B008 (no calls in parameter
# defaults). Typer will inspect this when used as a default value below.
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--csv-path",
    help="Path to a CSV file with columns title, type, value, category",
    dir_okay=False,
    file_okay=True,
    exists=False,  # allow non-existent here; the handler reports nice errors
)


@app.command("import-transactions")
def import_transactions_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
    keep_file: bool = typer.Option(
        False, "--keep-file", help="Leave the CSV file in place after a successful import."
    ),
) -> None:
    raise typer.Exit(
        cmd_import_transactions(str(csv_path), database_url=database_url, keep_file=keep_file)
    )


@app.command("init-db")
def init_db_cmd(
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
) -> None:
    raise typer.Exit(cmd_init_db(database_url=database_url))


@app.command("list-categories")
def list_categories_cmd(
    database_url: str | None = typer.Option(
        None, help="Override DATABASE_URL (falls back to env var)."
    ),
) -> None:
    raise typer.Exit(cmd_list_categories(database_url=database_url))


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    # Central logging setup so child loggers inherit configuration
    configure_logging()


if __name__ == "__main__":  # pragma: no cover - exercised via console script
    app()
