"""Shared SQLAlchemy models registry for the ledger database.

Currently includes the category and transaction tables used by
``ledger_import``.
"""

from .ledger import Base, LedgerCategory, LedgerTransaction, TransactionType

__all__ = [
    "Base",
    "LedgerCategory",
    "LedgerTransaction",
    "TransactionType",
]
