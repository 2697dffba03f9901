"""
Audit Models for Expense Tracker

Every store mutation and every degraded path (storage failure,
rejected input) produces an audit event. Events are written to the
structured log only; they are not a history of the records.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Store mutations
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_NOT_FOUND = "expense_not_found"
    EXPENSES_LOADED = "expenses_loaded"

    # Input
    VALIDATION_FAILED = "validation_failed"
    CALCULATION_FAILED = "calculation_failed"

    # Persistence
    STORAGE_READ_FAILED = "storage_read_failed"
    STORAGE_WRITE_FAILED = "storage_write_failed"
    RECORD_SKIPPED = "record_skipped"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """A single audit event."""

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO
    expense_id: Optional[str] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )
    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, category, amount)
        event = AuditEventBuilder.storage_write_failed(path, error)
    """

    @staticmethod
    def expense_added(expense_id: str, category: str, amount: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            expense_id=expense_id,
            description=f"Expense added: {category} - ₹{amount}",
            details={"category": category, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(expense_id: str, fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            description=f"Expense updated: {', '.join(fields) or 'no changes'}",
            details={"fields": fields},
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            expense_id=expense_id,
            description="Expense deleted",
            is_user_action=True,
        )

    @staticmethod
    def expense_not_found(expense_id: str, operation: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            description=f"Cannot {operation}: expense not found",
            details={"operation": operation},
        )

    @staticmethod
    def expenses_loaded(count: int, source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_LOADED,
            description=f"Loaded {count} expenses from {source}",
            details={"count": count, "source": source},
        )

    @staticmethod
    def validation_failed(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"Expense rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def calculation_failed(expression: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CALCULATION_FAILED,
            severity=AuditSeverity.WARNING,
            description="Calculator expression could not be evaluated",
            details={"expression": expression},
            error_message=error_message,
            is_user_action=True,
        )

    @staticmethod
    def storage_read_failed(source: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_READ_FAILED,
            severity=AuditSeverity.ERROR,
            description="Stored expenses could not be read, starting empty",
            details={"source": source},
            error_message=error_message,
        )

    @staticmethod
    def storage_write_failed(source: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_WRITE_FAILED,
            severity=AuditSeverity.ERROR,
            description="Expenses could not be saved, keeping them in memory",
            details={"source": source},
            error_message=error_message,
        )

    @staticmethod
    def record_skipped(source: str, index: int, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_SKIPPED,
            severity=AuditSeverity.WARNING,
            expense_id=None,
            description=f"Skipped malformed record #{index}",
            details={"source": source, "index": index},
            error_message=error_message,
        )
