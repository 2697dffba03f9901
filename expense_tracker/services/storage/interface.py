"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the JSON file for a real database later
2. Use in-memory storage for testing
3. Keep the store decoupled from where records live

The interface is intentionally tiny: the store always reads the whole
collection once at startup and writes the whole collection back after
each mutation.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation (JSON file, SQLite, etc.)
    must implement these methods.
    """

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable description of where records live (for logs)."""
        pass

    @abstractmethod
    def load(self) -> list[Expense]:
        """
        Read the persisted collection.

        Returns:
            The stored expenses in stored order; an empty list when
            nothing has been persisted yet

        Raises:
            StorageReadError: If the backend exists but cannot be read
        """
        pass

    @abstractmethod
    def save(self, expenses: list[Expense]) -> bool:
        """
        Replace the persisted collection.

        Args:
            expenses: The full collection in store order

        Returns:
            True if saved successfully

        Raises:
            StorageWriteError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Persisted expenses could not be read."""
    pass


class StorageWriteError(StorageError):
    """Expenses could not be persisted."""
    pass
