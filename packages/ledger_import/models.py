"""Data models and type aliases for ``ledger_import``.

The input file has a fixed column order: ``title, type, value, category``.
Everything defined here is in-memory and lives for a single import run; the
durable entities are the ORM models in ``db.models.ledger``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal, NamedTuple

from db.models.ledger import LedgerCategory, LedgerTransaction, TransactionType

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class RawRow(NamedTuple):
    """One record from the input file, cells untouched.

    ``line`` is the 1-based physical line the record started on, kept for
    error messages and skip reports.
    """

    title: str
    type: str
    value: str
    category: str
    line: int = 0


@dataclass(frozen=True, slots=True)
class SanitizedTransaction:
    """A trimmed row whose ``title``, ``type`` and ``value`` are non-empty.

    ``type`` is kept as the trimmed input string; the store rejects anything
    outside :class:`TransactionType` at persistence time. ``category`` may be
    empty when the input left the column blank.
    """

    title: str
    type: str
    value: str
    category: str
    line: int = 0


SkipReason = Literal["incomplete"]


@dataclass(frozen=True, slots=True)
class SkippedRow:
    """A row dropped by the sanitizer, with the reason it was dropped."""

    line: int
    reason: SkipReason
    raw: RawRow


@dataclass(frozen=True, slots=True)
class SanitizedBatch:
    """Everything the sanitizer produced for one file.

    Only built once the row iterator is exhausted; holding a batch means every
    row has been sanitized.
    """

    transactions: tuple[SanitizedTransaction, ...]
    labels: tuple[str, ...]
    skipped: tuple[SkippedRow, ...] = ()


# ---------------------------------------------------------------------------
# Reconciliation and materialization
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CategoryReconciliation:
    """Result of splitting a label set into existing and newly created categories.

    ``created`` preserves the first-occurrence order of the missing labels.
    ``by_title`` maps each title to a single entity: created entities are
    considered before existing ones and the first entity per title wins.
    """

    created: tuple[LedgerCategory, ...]
    existing: tuple[LedgerCategory, ...]
    by_title: Mapping[str, LedgerCategory] = field(default_factory=dict)

    @classmethod
    def build(
        cls, created: Sequence[LedgerCategory], existing: Sequence[LedgerCategory]
    ) -> CategoryReconciliation:
        by_title: dict[str, LedgerCategory] = {}
        for entity in (*created, *existing):
            by_title.setdefault(entity.title, entity)
        return cls(created=tuple(created), existing=tuple(existing), by_title=by_title)


MaterializationOutcome = Literal["materialized", "category_unresolved"]


@dataclass(frozen=True, slots=True)
class MaterializedTransaction:
    """A transaction entity plus how its category link was resolved.

    - ``materialized``: the label matched a reconciled category.
    - ``category_unresolved``: the label had no match; the entity has no
      category.
    """

    entity: LedgerTransaction
    source: SanitizedTransaction
    outcome: MaterializationOutcome


# ---------------------------------------------------------------------------
# Import result
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ImportReport:
    """Summary of a completed import run.

    ``transactions`` are the persisted entities in input order.
    """

    transactions: tuple[LedgerTransaction, ...]
    created_categories: tuple[LedgerCategory, ...]
    reused_categories: tuple[LedgerCategory, ...]
    skipped: tuple[SkippedRow, ...]
    outcomes: tuple[MaterializedTransaction, ...]
    source_deleted: bool

    @property
    def unresolved(self) -> tuple[MaterializedTransaction, ...]:
        return tuple(m for m in self.outcomes if m.outcome != "materialized")


__all__ = [
    "RawRow",
    "TransactionType",
    "SanitizedTransaction",
    "SkipReason",
    "SkippedRow",
    "SanitizedBatch",
    "CategoryReconciliation",
    "MaterializationOutcome",
    "MaterializedTransaction",
    "ImportReport",
]
