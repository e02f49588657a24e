"""Public interface for the ``ledger_import`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .api import (
    collect_rows,
    import_transactions,
    iter_raw_rows,
    materialize_transactions,
    read_batch,
    reconcile_categories,
    run_import,
    sanitize_row,
    unique_in_order,
)
from .config import ImportSettings
from .models import (
    CategoryReconciliation,
    ImportReport,
    MaterializedTransaction,
    RawRow,
    SanitizedBatch,
    SanitizedTransaction,
    SkippedRow,
    TransactionType,
)

__all__ = [
    # API
    "import_transactions",
    "run_import",
    "read_batch",
    "iter_raw_rows",
    "sanitize_row",
    "collect_rows",
    "reconcile_categories",
    "unique_in_order",
    "materialize_transactions",
    # Models / types
    "ImportSettings",
    "RawRow",
    "TransactionType",
    "SanitizedTransaction",
    "SkippedRow",
    "SanitizedBatch",
    "CategoryReconciliation",
    "MaterializedTransaction",
    "ImportReport",
]
