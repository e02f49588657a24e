# ruff: noqa: I001
"""Persistence integration for ledger_import.

The stores here wrap a caller-owned SQLAlchemy ``Session`` and expose the
batched operations the import pipeline needs. They never commit; the caller
decides where unit-of-work boundaries fall.

Scope:
- Look up categories by a set of titles in one query.
- Build unsaved category and transaction entities.
- Flush batches of new entities in a single call.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.ledger import LedgerCategory, LedgerTransaction


def _to_decimal_2(raw: Any) -> Decimal | None:
    if raw is None:
        return None
    try:
        d = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not d.is_finite():
        return None
    return d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class CategoryStore:
    """Batched access to ``ledger_categories``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_titles(self, titles: Iterable[str]) -> list[LedgerCategory]:
        """Return every stored category whose title is in ``titles``.

        A single ``IN`` query regardless of how many titles are passed. Results
        are ordered oldest first (``created_at`` is stamped at construction)
        so callers that keep the first match per title get a stable answer
        when duplicates exist.
        """

        wanted = sorted(set(titles))
        if not wanted:
            return []
        rows = (
            self.session.execute(
                select(LedgerCategory)
                .where(LedgerCategory.title.in_(wanted))
                .order_by(LedgerCategory.created_at, LedgerCategory.id)
            )
            .scalars()
            .all()
        )
        return list(rows)

    def create_unsaved(self, titles: Iterable[str]) -> list[LedgerCategory]:
        """Build one transient category per title, preserving order."""

        return [LedgerCategory(title=title) for title in titles]

    def save_all(self, entities: Iterable[LedgerCategory]) -> list[LedgerCategory]:
        """Insert ``entities`` in one flush and return them."""

        batch = list(entities)
        if batch:
            self.session.add_all(batch)
            self.session.flush()
        return batch

    def list_all(self) -> list[LedgerCategory]:
        """Return all categories ordered by title."""

        rows = (
            self.session.execute(
                select(LedgerCategory).order_by(LedgerCategory.title, LedgerCategory.created_at)
            )
            .scalars()
            .all()
        )
        return list(rows)


class TransactionStore:
    """Batched access to ``ledger_transactions``."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create_unsaved(self, rows: Iterable[Mapping[str, Any]]) -> list[LedgerTransaction]:
        """Build one transient transaction per mapping.

        Each mapping carries ``title``, ``type``, ``value`` and ``category``
        (a :class:`LedgerCategory` or ``None``). ``value`` is converted to a
        two-decimal ``Decimal``; values that do not parse become ``None`` and
        are rejected by the database on save.
        """

        return [
            LedgerTransaction(
                title=row["title"],
                type=row["type"],
                value=_to_decimal_2(row["value"]),
                category=row.get("category"),
            )
            for row in rows
        ]

    def save_all(self, entities: Iterable[LedgerTransaction]) -> list[LedgerTransaction]:
        """Insert ``entities`` in one flush and return them."""

        batch = list(entities)
        if batch:
            self.session.add_all(batch)
            self.session.flush()
        return batch


__all__ = [
    "CategoryStore",
    "TransactionStore",
]
