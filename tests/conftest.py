"""Shared fixtures for the expense tracker tests."""

from decimal import Decimal

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.models.audit import AuditEvent
from expense_tracker.models.expense import Expense


class RecordingAuditLogger(AuditLogger):
    """AuditLogger that also keeps every event for assertions."""

    def __init__(self):
        super().__init__("expense_tracker.tests")
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return super().log(event)

    def types(self) -> list[str]:
        return [event.event_type.value for event in self.events]


@pytest.fixture
def audit_logger():
    return RecordingAuditLogger()


@pytest.fixture
def make_expense():
    """Factory for expenses with sensible defaults."""

    def _make(amount="100", category="Others", date="2024-01-15", description="Test", **kwargs):
        return Expense(
            amount=Decimal(str(amount)),
            category=category,
            date=date,
            description=description,
            **kwargs,
        )

    return _make
