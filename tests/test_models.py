"""
Tests for Expense Tracker

Test strategy:
1. Unit tests for individual components (models, store, analytics, formatting)
2. Flow tests for the orchestrator with in-memory storage
3. Storage tests against a temporary directory (no real user data)
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from expense_tracker.models.expense import (
    CATEGORIES,
    Category,
    Expense,
    ExpenseUpdate,
    InvalidExpenseError,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from pydantic import ValidationError


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_creation(self):
        """Test Expense model creation with defaults."""
        expense = Expense(
            amount=Decimal("300"),
            description="Dinner",
            category=Category.FOOD_AND_DINING,
            date=date(2024, 1, 5),
        )
        assert expense.amount == Decimal("300")
        assert expense.category == Category.FOOD_AND_DINING
        assert expense.id
        assert expense.created_at.tzinfo is not None

    def test_expense_ids_are_unique(self):
        """Test that every new expense gets its own id."""
        ids = {
            Expense(amount=1, category="Others", date="2024-01-01").id
            for _ in range(50)
        }
        assert len(ids) == 50

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from the description."""
        expense = Expense(amount=10, description="  Chai  ", category="Others", date="2024-01-01")
        assert expense.description == "Chai"

    def test_expense_accepts_category_string(self):
        """Test that category display names are accepted."""
        expense = Expense(amount=10, category="Bills & Utilities", date="2024-01-01")
        assert expense.category is Category.BILLS_AND_UTILITIES

    @pytest.mark.parametrize("amount", [0, -5, "-0.01"])
    def test_expense_rejects_non_positive_amount(self, amount):
        """Test that zero and negative amounts are rejected."""
        with pytest.raises(ValidationError):
            Expense(amount=amount, category="Others", date="2024-01-01")

    def test_expense_rejects_unknown_category(self):
        """Test that categories outside the vocabulary are rejected."""
        with pytest.raises(ValidationError):
            Expense(amount=10, category="Gambling", date="2024-01-01")

    def test_expense_rejects_malformed_date(self):
        """Test that invalid date strings are rejected."""
        with pytest.raises(ValidationError):
            Expense(amount=10, category="Others", date="2024-02-30")

    def test_expense_reduces_timestamp_to_date(self):
        """Test that an ISO timestamp keeps only its calendar date."""
        expense = Expense(amount=10, category="Others", date="2024-03-15T18:30:00.000Z")
        assert expense.date == date(2024, 3, 15)

    def test_expense_to_record_uses_web_app_keys(self):
        """Test the stored record layout."""
        expense = Expense(
            id="1704441600000",
            amount=Decimal("99.50"),
            description="Auto",
            category=Category.TRANSPORTATION,
            date=date(2024, 1, 5),
            created_at=datetime(2024, 1, 5, 10, 0, tzinfo=timezone.utc),
        )
        record = expense.to_record()
        assert set(record) == {"id", "amount", "description", "category", "date", "createdAt"}
        assert record["category"] == "Transportation"
        assert record["date"] == "2024-01-05"

    def test_expense_from_web_app_record(self):
        """Test loading a record exported by the web app (numeric amount, camelCase)."""
        expense = Expense.from_record({
            "id": "1704441600000",
            "amount": 250,
            "description": "Movie",
            "category": "Entertainment",
            "date": "2024-01-05",
            "createdAt": "2024-01-05T10:00:00.000Z",
        })
        assert expense.id == "1704441600000"
        assert expense.amount == Decimal("250")
        assert expense.category is Category.ENTERTAINMENT

    def test_record_round_trip(self):
        """Test that a record survives to_record/from_record unchanged."""
        expense = Expense(amount=Decimal("12.75"), description="Tea", category="Others", date="2024-06-01")
        assert Expense.from_record(expense.to_record()) == expense


class TestExpenseUpdate:
    """Tests for partial updates."""

    def test_changes_only_include_given_fields(self):
        """Test that unset fields are not part of the change set."""
        update = ExpenseUpdate(amount=Decimal("50"))
        assert update.changes() == {"amount": Decimal("50")}

    def test_update_rejects_identity_fields(self):
        """Test that id cannot be changed through an update."""
        with pytest.raises(ValidationError):
            ExpenseUpdate(id="other")

    def test_update_validates_amount(self):
        """Test that updates obey the same amount rule."""
        with pytest.raises(ValidationError):
            ExpenseUpdate(amount=0)


class TestInvalidExpenseError:
    """Tests for InvalidExpenseError."""

    def test_from_validation_error_lists_fields(self):
        """Test that each failing field becomes an issue."""
        try:
            Expense(amount=-1, category="Nope", date="2024-01-01")
        except ValidationError as e:
            error = InvalidExpenseError.from_validation_error(e)
        fields = {issue.field for issue in error.issues}
        assert fields == {"amount", "category"}
        assert isinstance(error, ValueError)
        assert all(issue.severity == "error" for issue in error.issues)


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Please enter a valid amount",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.errors_by_field() == {"amount": "Please enter a valid amount"}

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message="Date in future",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0
        assert result.warnings == ["Date in future"]


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Test expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.expense_added("abc", "Travel", "1500")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["expense_id"] == "abc"
        assert log_dict["details"]["category"] == "Travel"
        assert log_dict["is_user_action"] is True

    def test_storage_failures_are_errors(self):
        """Test that storage failures are logged at error severity."""
        event = AuditEventBuilder.storage_write_failed("data/x.json", "disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"

    def test_not_found_is_warning(self):
        """Test AuditEventBuilder.expense_not_found."""
        event = AuditEventBuilder.expense_not_found("missing", "delete")
        assert event.severity == AuditSeverity.WARNING
        assert event.details == {"operation": "delete"}


class TestCategories:
    """Tests for the category vocabulary."""

    def test_all_categories_exist(self):
        """Test the vocabulary and its order."""
        assert CATEGORIES == (
            "Food & Dining", "Transportation", "Shopping", "Entertainment",
            "Bills & Utilities", "Healthcare", "Education", "Travel",
            "Groceries", "Others",
        )

    def test_category_values(self):
        """Test category string values."""
        assert Category.FOOD_AND_DINING.value == "Food & Dining"
        assert Category("Groceries") is Category.GROCERIES


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
