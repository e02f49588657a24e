"""Public API interfaces for the ``ledger_import`` package.

This module is the stable import surface. The pipeline stages live in their
own modules (``ingest``, ``categories``, ``materialize``, ``importer``) and are
re-exported here.
"""

from __future__ import annotations

from .categories import reconcile_categories, unique_in_order
from .importer import import_transactions, read_batch, run_import
from .ingest.rows import iter_raw_rows
from .ingest.sanitize import collect_rows, sanitize_row
from .materialize import materialize_transactions

__all__ = [
    "collect_rows",
    "import_transactions",
    "iter_raw_rows",
    "materialize_transactions",
    "read_batch",
    "reconcile_categories",
    "run_import",
    "sanitize_row",
    "unique_in_order",
]
