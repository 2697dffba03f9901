"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON array on local disk is the storage backend because:
1. It mirrors the browser localStorage entry the web app used
2. No database setup required
3. Users can open, back up, or hand-edit the file

TRADEOFFS:
- The whole collection is rewritten on every change (fine at personal scale)
- No transactions (writes go to a temp file and are renamed into place)
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from expense_tracker.audit import AuditLogger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class JsonFileExpenseStorage(ExpenseStorageInterface):
    """
    Stores expenses as a JSON array of records.

    Each record uses the keys id, amount, description, category,
    date and createdAt.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._path = Path(path) if path else get_settings().storage.file_path
        self._audit_logger = audit_logger

    @property
    def path(self) -> Path:
        return self._path

    @property
    def source(self) -> str:
        return str(self._path)

    def load(self) -> list[Expense]:
        """Read the stored expenses, skipping records that fail validation."""
        if not self._path.exists():
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}")

        if not raw.strip():
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(f"Expenses file is not valid JSON: {e}")

        if not isinstance(records, list):
            raise StorageReadError(
                f"Expenses file must hold a list of records, got {type(records).__name__}"
            )

        expenses = []
        for index, record in enumerate(records):
            try:
                if not isinstance(record, dict):
                    raise TypeError(f"record is a {type(record).__name__}, not an object")
                expenses.append(Expense.from_record(record))
            except (ValidationError, TypeError) as e:
                if self._audit_logger:
                    self._audit_logger.log_record_skipped(self.source, index, str(e))
                continue  # Skip malformed records

        return expenses

    def save(self, expenses: list[Expense]) -> bool:
        """Write the full collection, replacing the file atomically."""
        payload = json.dumps(
            [expense.to_record() for expense in expenses],
            ensure_ascii=False,
            indent=2,
        )
        try:
            self._write(payload)
        except OSError as e:
            raise StorageWriteError(f"Failed to save expenses to {self._path}: {e}")
        return True

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        os.replace(tmp_path, self._path)
