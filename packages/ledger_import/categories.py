"""Category reconciliation for the import pipeline.

Given every label referenced by the sanitized rows, decide which categories
already exist and create the rest, once each.

Steps (order matters for determinism)
-------------------------------------
1. One batched lookup of stored categories whose title is in the label set.
2. ``existing_titles`` = titles of the rows returned.
3. ``missing`` = labels not in ``existing_titles``, deduplicated in
   first-occurrence order.
4. Build unsaved categories for ``missing`` and save them in one batch.

A blank category column is a label like any other: it reconciles to a
category titled ``""``, created once if the store has none.

Two imports running at the same time against the same store may both decide a
title is missing and both create it. This module does not guard against that.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from typing import Protocol, TypeVar

from db.models.ledger import LedgerCategory

from .logging_setup import get_logger
from .models import CategoryReconciliation

logger = get_logger("ledger_import.categories")

H = TypeVar("H", bound=Hashable)


class CategoryRepository(Protocol):
    def find_by_titles(self, titles: Iterable[str]) -> list[LedgerCategory]: ...

    def create_unsaved(self, titles: Iterable[str]) -> list[LedgerCategory]: ...

    def save_all(self, entities: Iterable[LedgerCategory]) -> list[LedgerCategory]: ...


def unique_in_order(items: Iterable[H]) -> list[H]:
    """Drop repeats, keeping each item at the position it first appeared."""

    seen: set[H] = set()
    out: list[H] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def missing_titles(labels: Sequence[str], existing_titles: Iterable[str]) -> list[str]:
    """Return labels absent from ``existing_titles``, deduplicated in order."""

    existing = set(existing_titles)
    return unique_in_order(label for label in labels if label not in existing)


def reconcile_categories(
    store: CategoryRepository, labels: Sequence[str]
) -> CategoryReconciliation:
    """Resolve ``labels`` to stored categories, creating the missing ones.

    Parameters
    ----------
    store:
        Category store bound to the caller's session.
    labels:
        Category label of every kept row, in row order and with duplicates.

    Returns
    -------
    CategoryReconciliation
        New categories (already saved, in first-occurrence order), the
        pre-existing categories that matched, and a ``by_title`` lookup
        table covering both.
    """

    wanted = set(labels)
    existing = store.find_by_titles(wanted) if wanted else []
    missing = missing_titles(labels, (c.title for c in existing))

    created: list[LedgerCategory] = []
    if missing:
        created = store.save_all(store.create_unsaved(missing))

    logger.info(
        "Reconciled %d distinct categories: %d existing, %d created",
        len(wanted),
        len({c.title for c in existing}),
        len(created),
    )
    return CategoryReconciliation.build(created=created, existing=existing)


__all__ = [
    "CategoryRepository",
    "missing_titles",
    "reconcile_categories",
    "unique_in_order",
]
