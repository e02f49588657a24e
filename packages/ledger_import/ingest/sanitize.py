"""Row sanitization: trim cells and drop incomplete rows."""

from __future__ import annotations

from collections.abc import Iterable

from ..logging_setup import get_logger
from ..models import RawRow, SanitizedBatch, SanitizedTransaction, SkippedRow

logger = get_logger("ledger_import.ingest.sanitize")


def sanitize_row(raw: RawRow) -> SanitizedTransaction | SkippedRow:
    """Trim every cell of ``raw``.

    Rows with an empty ``title``, ``type`` or ``value`` after trimming are not
    errors: they come back as ``SkippedRow(reason="incomplete")``. ``category``
    may be empty.
    """

    title = raw.title.strip()
    type_ = raw.type.strip()
    value = raw.value.strip()
    category = raw.category.strip()

    if not title or not type_ or not value:
        return SkippedRow(line=raw.line, reason="incomplete", raw=raw)
    return SanitizedTransaction(
        title=title, type=type_, value=value, category=category, line=raw.line
    )


def collect_rows(raw_rows: Iterable[RawRow]) -> SanitizedBatch:
    """Sanitize every row of ``raw_rows`` and return the complete batch.

    Consumes the iterable fully before returning. ``labels`` lists the
    category of each kept row in input order, duplicates included.
    """

    transactions: list[SanitizedTransaction] = []
    labels: list[str] = []
    skipped: list[SkippedRow] = []

    for raw in raw_rows:
        result = sanitize_row(raw)
        if isinstance(result, SkippedRow):
            logger.debug("Skipping line %d: %s", result.line, result.reason)
            skipped.append(result)
            continue
        transactions.append(result)
        labels.append(result.category)

    return SanitizedBatch(
        transactions=tuple(transactions),
        labels=tuple(labels),
        skipped=tuple(skipped),
    )


__all__ = ["collect_rows", "sanitize_row"]
