"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    CATEGORIES,
    Category,
    Expense,
    ExpenseForm,
    ExpenseUpdate,
    InvalidExpenseError,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.analytics import (
    NO_DATA_MONTH,
    CategoryBreakdownItem,
    DashboardStats,
    HighestMonth,
    MonthlyEntry,
    YearlyAnalytics,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CATEGORIES",
    "Category",
    "Expense",
    "ExpenseForm",
    "ExpenseUpdate",
    "InvalidExpenseError",
    "ValidationIssue",
    "ValidationResult",
    # Analytics models
    "NO_DATA_MONTH",
    "CategoryBreakdownItem",
    "DashboardStats",
    "HighestMonth",
    "MonthlyEntry",
    "YearlyAnalytics",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
