from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from db.models.ledger import LedgerCategory, LedgerTransaction, TransactionType
from sqlalchemy.exc import IntegrityError

from ledger_import.persistence import CategoryStore, TransactionStore, _to_decimal_2
from tests.helpers.db import count_transactions, seed_categories


def test_to_decimal_2_rounds_half_up():
    assert _to_decimal_2("45") == Decimal("45.00")
    assert _to_decimal_2(" 1.005 ") == Decimal("1.01")
    assert _to_decimal_2(12.5) == Decimal("12.50")
    assert _to_decimal_2("-3.2") == Decimal("-3.20")


def test_to_decimal_2_rejects_non_numbers():
    assert _to_decimal_2(None) is None
    assert _to_decimal_2("abc") is None
    assert _to_decimal_2("NaN") is None
    assert _to_decimal_2("") is None


def test_find_by_titles_matches_exact_titles_only(session):
    seed_categories(session, ["Food", "food", "Rent"])

    found = CategoryStore(session).find_by_titles({"Food", "Travel"})

    assert [c.title for c in found] == ["Food"]


def test_find_by_titles_returns_duplicates_oldest_first(session):
    older = LedgerCategory(title="Food", created_at=datetime(2024, 1, 1, 9, 0, 0, 1, tzinfo=UTC))
    newer = LedgerCategory(title="Food", created_at=datetime(2024, 1, 1, 9, 0, 0, 2, tzinfo=UTC))
    session.add_all([newer, older])
    session.commit()

    found = CategoryStore(session).find_by_titles(["Food"])

    assert [c.id for c in found] == [older.id, newer.id]


def test_categories_built_in_order_get_increasing_created_at():
    first, second = CategoryStore(None).create_unsaved(["Food", "Rent"])

    assert first.created_at <= second.created_at
    assert first.updated_at == first.created_at


def test_transaction_with_unsaved_category_id_is_rejected(session):
    lunch = LedgerTransaction(
        title="Lunch", type="outcome", value=Decimal("45.00"), category_id="not-a-category"
    )

    with pytest.raises(IntegrityError):
        TransactionStore(session).save_all([lunch])


def test_transaction_type_values_match_the_check_constraint(session):
    transactions = TransactionStore(session)
    rows = transactions.create_unsaved(
        [
            {"title": t.name.title(), "type": t.value, "value": "1", "category": None}
            for t in TransactionType
        ]
    )

    transactions.save_all(rows)
    session.commit()

    assert count_transactions(session) == len(TransactionType)
    assert {r.type for r in rows} == {"income", "outcome"}


def test_find_by_titles_with_no_titles_returns_empty(session):
    assert CategoryStore(session).find_by_titles([]) == []


def test_category_ids_are_assigned_before_save():
    a = LedgerCategory(title="A")
    b = LedgerCategory(title="B")

    assert a.id and b.id and a.id != b.id


def test_save_all_flushes_categories_and_transactions(session):
    categories = CategoryStore(session)
    transactions = TransactionStore(session)

    (food,) = categories.save_all(categories.create_unsaved(["Food"]))
    saved = transactions.save_all(
        transactions.create_unsaved(
            [{"title": "Lunch", "type": "outcome", "value": "45", "category": food}]
        )
    )
    session.commit()

    assert count_transactions(session) == 1
    assert saved[0].category_id == food.id


def test_invalid_type_is_rejected_by_the_store(session):
    transactions = TransactionStore(session)
    rows = transactions.create_unsaved(
        [{"title": "Refund", "type": "refund", "value": "10", "category": None}]
    )

    with pytest.raises(IntegrityError):
        transactions.save_all(rows)


def test_unparseable_value_is_rejected_by_the_store(session):
    transactions = TransactionStore(session)
    rows = transactions.create_unsaved(
        [{"title": "Lunch", "type": "outcome", "value": "ten", "category": None}]
    )

    with pytest.raises(IntegrityError):
        transactions.save_all(rows)


def test_list_all_orders_by_title(session):
    seed_categories(session, ["Rent", "Food", "Salary"])

    assert [c.title for c in CategoryStore(session).list_all()] == ["Food", "Rent", "Salary"]
