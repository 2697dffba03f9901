"""
Tests for ExpenseStore

Covers the mutation contract (add/update/delete/load), ordering,
and what happens when the storage backend fails.
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models.expense import Category, Expense, InvalidExpenseError
from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    InMemoryExpenseStorage,
    StorageReadError,
    StorageWriteError,
)
from expense_tracker.store import ExpenseStore


class BrokenStorage(ExpenseStorageInterface):
    """Backend whose reads and writes always fail."""

    def __init__(self):
        self.save_attempts = 0

    @property
    def source(self) -> str:
        return "broken"

    def load(self) -> list[Expense]:
        raise StorageReadError("disk unavailable")

    def save(self, expenses: list[Expense]) -> bool:
        self.save_attempts += 1
        raise StorageWriteError("disk full")


@pytest.fixture
def store(audit_logger):
    return ExpenseStore(audit_logger=audit_logger)


class TestAdd:
    """Tests for ExpenseStore.add."""

    def test_add_returns_stored_expense(self, store):
        """Test that add returns the new record with an id."""
        expense = store.add(Decimal("250"), "Lunch", "Food & Dining", "2024-01-10")
        assert expense.id
        assert expense.amount == Decimal("250")
        assert expense.category is Category.FOOD_AND_DINING
        assert expense.date == date(2024, 1, 10)
        assert store.get(expense.id) == expense

    def test_add_prepends(self, store):
        """Test that the newest record comes first."""
        first = store.add(100, "A", "Others", "2024-01-01")
        second = store.add(200, "B", "Others", "2023-06-01")
        assert [e.id for e in store.all()] == [second.id, first.id]

    def test_added_ids_are_unique(self, store):
        """Test that ids never collide across many adds."""
        for i in range(100):
            store.add(i + 1, f"item {i}", "Others", "2024-01-01")
        assert len({e.id for e in store.all()}) == 100
        assert len(store) == 100

    def test_add_regenerates_colliding_id(self, store, make_expense, monkeypatch):
        """Test that an id already in the store is replaced."""
        store.load([make_expense(id="taken")])
        ids = iter(["taken", "fresh"])
        monkeypatch.setattr("expense_tracker.models.expense.uuid4", lambda: next(ids))

        expense = store.add(10, "Dup", "Others", "2024-01-01")

        assert expense.id == "fresh"
        assert len({e.id for e in store.all()}) == 2

    @pytest.mark.parametrize("amount", [0, -1, "abc"])
    def test_add_rejects_bad_amount(self, store, amount):
        """Test that non-positive or non-numeric amounts are rejected."""
        with pytest.raises(InvalidExpenseError):
            store.add(amount, "Bad", "Others", "2024-01-01")
        assert len(store) == 0

    def test_add_rejects_unknown_category(self, store, audit_logger):
        """Test that unknown categories are rejected and logged."""
        with pytest.raises(InvalidExpenseError) as exc_info:
            store.add(10, "Bet", "Gambling", "2024-01-01")
        assert exc_info.value.issues[0].field == "category"
        assert "validation_failed" in audit_logger.types()
        assert len(store) == 0

    def test_add_rejects_bad_date(self, store):
        """Test that malformed dates are rejected."""
        with pytest.raises(InvalidExpenseError):
            store.add(10, "Bad date", "Others", "15/01/2024")


class TestUpdate:
    """Tests for ExpenseStore.update."""

    def test_partial_update_keeps_other_fields(self, store):
        """Test that only the given fields change."""
        expense = store.add(Decimal("100"), "Taxi", "Transportation", "2024-02-02")
        updated = store.update(expense.id, amount=Decimal("150"))

        assert updated.amount == Decimal("150")
        assert updated.description == "Taxi"
        assert updated.category is Category.TRANSPORTATION
        assert updated.date == date(2024, 2, 2)
        assert updated.id == expense.id
        assert updated.created_at == expense.created_at

    def test_update_keeps_position(self, store):
        """Test that an updated record stays where it was."""
        first = store.add(1, "first", "Others", "2024-01-01")
        store.add(2, "second", "Others", "2024-01-01")
        store.update(first.id, description="renamed")
        assert store.all()[1].description == "renamed"

    def test_update_missing_id_is_noop(self, store, audit_logger):
        """Test that updating an unknown id changes nothing."""
        store.add(1, "only", "Others", "2024-01-01")
        before = store.snapshot()

        assert store.update("nope", amount=5) is None
        assert store.snapshot() == before
        assert "expense_not_found" in audit_logger.types()

    def test_update_rejects_invalid_amount(self, store):
        """Test that invalid changes raise and leave the record untouched."""
        expense = store.add(10, "x", "Others", "2024-01-01")
        with pytest.raises(InvalidExpenseError):
            store.update(expense.id, amount=-10)
        assert store.get(expense.id).amount == Decimal("10")

    def test_update_rejects_id_change(self, store):
        """Test that the id cannot be rewritten."""
        expense = store.add(10, "x", "Others", "2024-01-01")
        with pytest.raises(InvalidExpenseError):
            store.update(expense.id, id="other")


class TestDelete:
    """Tests for ExpenseStore.delete."""

    def test_delete_removes_record(self, store):
        """Test that delete removes exactly one record."""
        keep = store.add(1, "keep", "Others", "2024-01-01")
        gone = store.add(2, "gone", "Others", "2024-01-01")

        assert store.delete(gone.id) is True
        assert [e.id for e in store.all()] == [keep.id]

    def test_delete_missing_id(self, store):
        """Test that deleting an absent id is a no-op returning False."""
        store.add(1, "a", "Others", "2024-01-01")
        assert store.delete("does-not-exist") is False
        assert len(store) == 1


class TestLoadAndSnapshot:
    """Tests for bulk load and snapshot."""

    def test_load_snapshot_is_idempotent(self, store, make_expense):
        """Test that load(snapshot()) leaves the store unchanged."""
        store.load([make_expense(amount=1), make_expense(amount=2), make_expense(amount=3)])
        before = store.snapshot()

        store.load(store.snapshot())

        assert store.snapshot() == before

    def test_load_keeps_given_order(self, store, make_expense):
        """Test that load does not reorder records."""
        records = [make_expense(date="2024-01-01"), make_expense(date="2024-12-31")]
        store.load(records)
        assert [e.id for e in store.all()] == [r.id for r in records]

    def test_load_drops_duplicate_ids(self, store, make_expense):
        """Test that only the first record with a given id is kept."""
        store.load([
            make_expense(id="same", amount=1),
            make_expense(id="same", amount=2),
        ])
        assert len(store) == 1
        assert store.get("same").amount == Decimal("1")

    def test_snapshot_is_independent(self, store, make_expense):
        """Test that mutating a snapshot doesn't touch the store."""
        store.load([make_expense(description="original")])
        snapshot = store.snapshot()
        snapshot[0].description = "changed"
        assert store.all()[0].description == "original"

    def test_load_does_not_flush(self, make_expense):
        """Test that load never writes to storage."""
        storage = InMemoryExpenseStorage()
        store = ExpenseStore(storage=storage)
        store.load([make_expense()])
        assert storage.save_count == 0


class TestPersistence:
    """Tests for hydrate/flush against a storage backend."""

    def test_mutations_flush_to_storage(self):
        """Test that each mutation writes the full collection."""
        storage = InMemoryExpenseStorage()
        store = ExpenseStore(storage=storage)

        expense = store.add(100, "a", "Others", "2024-01-01")
        store.update(expense.id, amount=200)
        store.delete(expense.id)

        assert storage.save_count == 3
        assert storage.load() == []

    def test_hydrate_restores_collection(self, make_expense):
        """Test that a new store sees what the previous one saved."""
        storage = InMemoryExpenseStorage()
        first = ExpenseStore(storage=storage)
        first.add(100, "a", "Groceries", "2024-01-01")
        first.add(200, "b", "Travel", "2024-02-01")

        second = ExpenseStore(storage=storage)
        assert second.hydrate() == 2
        assert second.snapshot() == first.snapshot()

    def test_hydrate_without_storage(self, store):
        """Test that a store without storage hydrates to nothing."""
        assert store.hydrate() == 0
        assert len(store) == 0

    def test_unreadable_storage_starts_empty(self, audit_logger):
        """Test that read failures leave an empty, working store."""
        store = ExpenseStore(storage=BrokenStorage(), audit_logger=audit_logger)
        assert store.hydrate() == 0
        assert len(store) == 0
        assert "storage_read_failed" in audit_logger.types()

    def test_write_failure_keeps_memory_state(self, audit_logger):
        """Test that a failed write doesn't lose the in-memory change."""
        storage = BrokenStorage()
        store = ExpenseStore(storage=storage, audit_logger=audit_logger)

        expense = store.add(100, "still here", "Others", "2024-01-01")

        assert store.get(expense.id) is not None
        assert storage.save_attempts == 1
        assert "storage_write_failed" in audit_logger.types()


class TestAccessors:
    """Tests for simple accessors."""

    def test_categories(self, store):
        """Test that the store exposes the category vocabulary."""
        assert store.categories[0] == "Food & Dining"
        assert len(store.categories) == 10

    def test_get_unknown_id(self, store):
        assert store.get("missing") is None

    def test_iteration_matches_all(self, store):
        store.add(1, "a", "Others", "2024-01-01")
        store.add(2, "b", "Others", "2024-01-01")
        assert list(store) == store.all()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
