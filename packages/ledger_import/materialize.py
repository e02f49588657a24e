"""Bind sanitized rows to reconciled categories and build transaction entities."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from db.models.ledger import LedgerCategory, LedgerTransaction

from .logging_setup import get_logger
from .models import MaterializationOutcome, MaterializedTransaction, SanitizedTransaction

logger = get_logger("ledger_import.materialize")


class TransactionRepository(Protocol):
    def create_unsaved(self, rows: Iterable[Mapping[str, Any]]) -> list[LedgerTransaction]: ...

    def save_all(self, entities: Iterable[LedgerTransaction]) -> list[LedgerTransaction]: ...


def resolve_category(
    label: str, categories_by_title: Mapping[str, LedgerCategory]
) -> tuple[LedgerCategory | None, MaterializationOutcome]:
    """Look ``label`` up by exact title; never raises on a miss."""

    category = categories_by_title.get(label)
    if category is None:
        return None, "category_unresolved"
    return category, "materialized"


def materialize_transactions(
    store: TransactionRepository,
    rows: Sequence[SanitizedTransaction],
    categories_by_title: Mapping[str, LedgerCategory],
) -> list[MaterializedTransaction]:
    """Build one unsaved transaction per row, in row order.

    A label with no matching category yields a transaction without a category
    link (outcome ``category_unresolved``) rather than an error.
    """

    resolved = [resolve_category(row.category, categories_by_title) for row in rows]
    entities = store.create_unsaved(
        {
            "title": row.title,
            "type": row.type,
            "value": row.value,
            "category": category,
        }
        for row, (category, _outcome) in zip(rows, resolved, strict=True)
    )

    out: list[MaterializedTransaction] = []
    for row, entity, (_category, outcome) in zip(rows, entities, resolved, strict=True):
        if outcome == "category_unresolved":
            logger.debug("Line %d: no category matches %r", row.line, row.category)
        out.append(MaterializedTransaction(entity=entity, source=row, outcome=outcome))
    return out


__all__ = [
    "TransactionRepository",
    "materialize_transactions",
    "resolve_category",
]
