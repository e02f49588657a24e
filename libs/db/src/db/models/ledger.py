from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class TransactionType(StrEnum):
    INCOME = "income"
    OUTCOME = "outcome"


_TYPE_VALUES = ", ".join(f"'{t.value}'" for t in TransactionType)


# ---------------------------
# Reference: ledger_categories
# ---------------------------


class LedgerCategory(Base):
    __tablename__ = "ledger_categories"

    # Ids are assigned on construction (not on flush) so callers can bind
    # relationships before the batched insert.
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    # Titles are matched by exact equality by the import pipeline. There is no
    # unique constraint: two concurrent imports may both create a title.
    title: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    # Stamped on construction with microsecond precision; duplicate titles are
    # resolved oldest first by this column.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("id", _new_id())
        kwargs.setdefault("created_at", _now())
        kwargs.setdefault("updated_at", kwargs["created_at"])
        super().__init__(**kwargs)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"LedgerCategory(id={self.id!r}, title={self.title!r})"


# ---------------------------
# Core: ledger_transactions
# ---------------------------


class LedgerTransaction(Base):
    __tablename__ = "ledger_transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("ledger_categories.id"),
        nullable=True,
    )
    category: Mapped[LedgerCategory | None] = relationship(lazy="joined")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            f"type in ({_TYPE_VALUES})",
            name="ck_ledger_tx_type",
        ),
    )

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("id", _new_id())
        super().__init__(**kwargs)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return (
            f"LedgerTransaction(id={self.id!r}, title={self.title!r}, "
            f"type={self.type!r}, value={self.value!r}, category_id={self.category_id!r})"
        )


__all__ = [
    "Base",
    "LedgerCategory",
    "LedgerTransaction",
    "TransactionType",
]
