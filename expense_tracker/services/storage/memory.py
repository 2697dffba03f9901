"""In-memory storage, used by tests and by sessions with persistence disabled."""

from typing import Optional

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import ExpenseStorageInterface


class InMemoryExpenseStorage(ExpenseStorageInterface):
    """Keeps records as plain dicts in a list; nothing touches disk."""

    def __init__(self, expenses: Optional[list[Expense]] = None):
        self._records = [expense.to_record() for expense in expenses or []]
        self.save_count = 0

    @property
    def source(self) -> str:
        return "memory"

    def load(self) -> list[Expense]:
        return [Expense.from_record(record) for record in self._records]

    def save(self, expenses: list[Expense]) -> bool:
        # Store records, not model instances, so later mutations can't leak in
        self._records = [expense.to_record() for expense in expenses]
        self.save_count += 1
        return True
