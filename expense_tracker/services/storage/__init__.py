"""
Storage Services Package

Provides the abstract storage interface and its implementations.
Currently implements a local JSON file as the backend, but designed to be swappable.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from expense_tracker.services.storage.json_file import JsonFileExpenseStorage
from expense_tracker.services.storage.memory import InMemoryExpenseStorage

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryExpenseStorage",
    "JsonFileExpenseStorage",
]
