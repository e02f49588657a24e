"""Import orchestration: file → sanitized rows → categories → transactions.

Sequence for one file
---------------------
1. Stream the file through the row parser and sanitizer. The whole file is
   consumed before anything touches the database.
2. Reconcile category labels and commit the new categories.
3. Materialize transactions against the reconciled categories.
4. Save all transactions in one batch and commit.
5. Delete the source file.

Any failure propagates unchanged and leaves the source file in place.
Categories committed in step 2 stay committed if step 4 fails; there is no
rollback across stages.
"""

from __future__ import annotations

from dataclasses import replace
from os import PathLike
from pathlib import Path

from sqlalchemy.orm import Session

from db.client import session_scope
from db.models.ledger import LedgerTransaction

from .categories import reconcile_categories
from .config import ImportSettings
from .ingest.rows import iter_raw_rows
from .ingest.sanitize import collect_rows
from .logging_setup import get_logger
from .materialize import materialize_transactions
from .models import ImportReport, SanitizedBatch
from .persistence import CategoryStore, TransactionStore

logger = get_logger("ledger_import.importer")


def read_batch(csv_path: str | PathLike[str], *, settings: ImportSettings) -> SanitizedBatch:
    """Parse and sanitize the whole file at ``csv_path``."""

    with Path(csv_path).open("rb") as stream:
        return collect_rows(
            iter_raw_rows(stream, from_line=settings.from_line, encoding=settings.encoding)
        )


def _persist_batch(session: Session, batch: SanitizedBatch) -> ImportReport:
    reconciliation = reconcile_categories(CategoryStore(session), batch.labels)
    # New categories must have their identity settled before transactions bind to them.
    session.commit()

    transactions = TransactionStore(session)
    outcomes = materialize_transactions(
        transactions, batch.transactions, reconciliation.by_title
    )
    saved = transactions.save_all(m.entity for m in outcomes)
    session.commit()

    return ImportReport(
        transactions=tuple(saved),
        created_categories=reconciliation.created,
        reused_categories=reconciliation.existing,
        skipped=batch.skipped,
        outcomes=tuple(outcomes),
        source_deleted=False,
    )


def run_import(
    csv_path: str | PathLike[str],
    *,
    session: Session | None = None,
    database_url: str | None = None,
    settings: ImportSettings | None = None,
) -> ImportReport:
    """Import the transactions file at ``csv_path`` and return a report.

    Parameters
    ----------
    csv_path:
        Path to a comma-delimited file with a header line and the columns
        ``title, type, value, category``.
    session:
        Optional SQLAlchemy session. When omitted, a session is opened from
        ``db.client`` using ``database_url`` (or ``$DATABASE_URL``). The
        importer commits on the given session after each stage.
    database_url:
        Override for ``DATABASE_URL`` when ``session`` is not provided.
    settings:
        Parser and file-lifecycle settings; defaults to ``ImportSettings()``.
    """

    settings = settings or ImportSettings()
    path = Path(csv_path)

    batch = read_batch(path, settings=settings)
    logger.info(
        "Read %s: %d rows kept, %d skipped",
        path.name,
        len(batch.transactions),
        len(batch.skipped),
    )

    if session is not None:
        report = _persist_batch(session, batch)
    else:
        with session_scope(database_url=database_url) as owned:
            report = _persist_batch(owned, batch)

    logger.info(
        "Persisted %d transactions (%d new categories, %d reused, %d without category)",
        len(report.transactions),
        len(report.created_categories),
        len(report.reused_categories),
        len(report.unresolved),
    )

    if settings.keep_source_file:
        return report

    path.unlink()
    logger.debug("Deleted source file %s", path)
    return replace(report, source_deleted=True)


def import_transactions(
    csv_path: str | PathLike[str],
    *,
    session: Session | None = None,
    database_url: str | None = None,
    settings: ImportSettings | None = None,
) -> list[LedgerTransaction]:
    """Import ``csv_path`` and return the persisted transactions in input order."""

    report = run_import(csv_path, session=session, database_url=database_url, settings=settings)
    return list(report.transactions)


__all__ = ["import_transactions", "read_batch", "run_import"]
