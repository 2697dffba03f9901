"""
Expense Record Store

DESIGN DECISION: The store is an explicitly owned object, not a global.
The application constructs one per session, hydrates it from storage,
mutates it only through its methods, and every mutation is flushed
back to storage before the method returns.

ORDERING: Records are kept newest-first by insertion. `add` prepends;
`update` keeps the record in place; `load` keeps the given order.

FAILURE MODEL:
- Invalid input raises InvalidExpenseError before anything changes
- Update/delete of an unknown id is a logged no-op
- Storage read/write failures are logged and the store keeps working in memory
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import (
    CATEGORIES,
    Category,
    Expense,
    ExpenseUpdate,
    InvalidExpenseError,
    new_expense_id,
)
from expense_tracker.services.storage import ExpenseStorageInterface, StorageError


class ExpenseStore:
    """Ordered collection of expense records."""

    def __init__(
        self,
        storage: Optional[ExpenseStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize the store.

        Args:
            storage: Backend to hydrate from and flush to.
                    If None, the store lives in memory only.
            audit_logger: Where mutations and failures are logged.
        """
        self._expenses: list[Expense] = []
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self):
        return iter(list(self._expenses))

    @property
    def categories(self) -> tuple[str, ...]:
        return CATEGORIES

    @property
    def storage(self) -> Optional[ExpenseStorageInterface]:
        return self._storage

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def all(self) -> list[Expense]:
        """Current records, most recently added first."""
        return list(self._expenses)

    def get(self, expense_id: str) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def snapshot(self) -> list[Expense]:
        """Independent copies of every record, in store order."""
        return [expense.model_copy(deep=True) for expense in self._expenses]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(
        self,
        amount: Union[Decimal, int, float, str],
        description: str,
        category: Union[Category, str],
        date: Union[date, str],
    ) -> Expense:
        """
        Create a new expense and put it at the front of the collection.

        Raises:
            InvalidExpenseError: amount not positive, unknown category, or bad date
        """
        existing_ids = {expense.id for expense in self._expenses}
        try:
            expense = Expense(
                amount=amount,
                description=description,
                category=category,
                date=date,
            )
            while expense.id in existing_ids:
                expense = expense.model_copy(update={"id": new_expense_id()})
        except ValidationError as e:
            error = InvalidExpenseError.from_validation_error(e)
            self._audit_logger.log_validation_failed([i.model_dump() for i in error.issues])
            raise error from e

        self._expenses.insert(0, expense)
        self._audit_logger.log_expense_added(expense.id, expense.category.value, str(expense.amount))
        self._flush()
        return expense

    def update(self, expense_id: str, **changes) -> Optional[Expense]:
        """
        Merge `changes` into the expense with `expense_id`.

        Fields that are not given stay as they are. Returns the updated
        expense, or None if no expense has that id.

        Raises:
            InvalidExpenseError: a given field violates the record invariants
        """
        try:
            update = ExpenseUpdate(**changes)
        except ValidationError as e:
            error = InvalidExpenseError.from_validation_error(e)
            self._audit_logger.log_validation_failed([i.model_dump() for i in error.issues])
            raise error from e

        for index, expense in enumerate(self._expenses):
            if expense.id != expense_id:
                continue

            fields = update.changes()
            merged = Expense.model_validate({**expense.model_dump(), **fields})
            self._expenses[index] = merged
            self._audit_logger.log_expense_updated(expense_id, sorted(fields))
            self._flush()
            return merged

        self._audit_logger.log_expense_not_found(expense_id, "update")
        return None

    def delete(self, expense_id: str) -> bool:
        """Remove the expense with `expense_id`. Returns False if it wasn't there."""
        remaining = [expense for expense in self._expenses if expense.id != expense_id]
        if len(remaining) == len(self._expenses):
            self._audit_logger.log_expense_not_found(expense_id, "delete")
            return False

        self._expenses = remaining
        self._audit_logger.log_expense_deleted(expense_id)
        self._flush()
        return True

    def load(self, expenses: Iterable[Expense]) -> None:
        """
        Replace the whole collection.

        Order is kept as given. If an id appears more than once only
        the first record with it is kept. Nothing is flushed: load is
        how the store is filled *from* storage.
        """
        seen: set[str] = set()
        loaded = []
        for expense in expenses:
            if expense.id in seen:
                continue
            seen.add(expense.id)
            loaded.append(expense.model_copy(deep=True))
        self._expenses = loaded

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def hydrate(self) -> int:
        """
        Fill the store from its storage backend.

        Missing or unreadable storage leaves the store empty; the session
        carries on in memory. Returns the number of records loaded.
        """
        if self._storage is None:
            return 0

        try:
            expenses = self._storage.load()
        except StorageError as e:
            self._audit_logger.log_storage_read_failed(self._storage.source, str(e))
            self._expenses = []
            return 0

        self.load(expenses)
        self._audit_logger.log_expenses_loaded(len(self._expenses), self._storage.source)
        return len(self._expenses)

    def _flush(self) -> bool:
        if self._storage is None:
            return True

        try:
            return self._storage.save(self.snapshot())
        except StorageError as e:
            self._audit_logger.log_storage_write_failed(self._storage.source, str(e))
            return False
