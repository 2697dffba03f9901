"""
Core Data Models for Expense Tracker

These models define the strict schemas for every expense flowing
through the system. They are designed to:
1. Enforce the record invariants at runtime (positive amount, known category, real date)
2. Provide clear validation error messages
3. Be serializable for storage and logging

DESIGN DECISION: Amounts are Decimal, never float.
Rupee totals are summed over hundreds of records and must not drift.
"""

from datetime import date as date_type, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """
    Supported expense categories.

    DESIGN DECISION: The vocabulary is fixed and ordered.
    Forms list categories in this order and analytics group by exactly these values.
    """
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    TRAVEL = "Travel"
    GROCERIES = "Groceries"
    OTHERS = "Others"


CATEGORIES: tuple[str, ...] = tuple(category.value for category in Category)


def new_expense_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _date_part(value: Any) -> Any:
    """Reduce timestamps to the calendar date they fall on."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single logged spending event.

    `created_at` only drives default ordering; `date` is the day the
    money was spent and is what every analytics query looks at.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    id: str = Field(
        default_factory=new_expense_id,
        min_length=1,
        description="Unique expense ID, stable for the record's lifetime"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent in INR"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="What the money was spent on"
    )
    category: Category = Field(
        ...,
        description="Expense category"
    )
    date: date_type = Field(
        ...,
        description="Calendar date of the expense"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        alias="createdAt",
        description="When the expense was recorded"
    )

    @field_validator('date', mode='before')
    @classmethod
    def strip_time_component(cls, v: Any) -> Any:
        return _date_part(v)

    def to_record(self) -> dict:
        """
        Convert to the JSON-ready record written to durable storage.

        Keys match the collection format of the browser version
        (`createdAt` rather than `created_at`).
        """
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: dict) -> "Expense":
        """Build an expense from a stored record."""
        return cls.model_validate(record)


class ExpenseUpdate(BaseModel):
    """
    Partial update for an existing expense.

    Only the fields that are set are applied. Identity (`id`, `created_at`)
    can never be changed through an update.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    amount: Optional[Decimal] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, max_length=500)
    category: Optional[Category] = None
    date: Optional[date_type] = None

    @field_validator('date', mode='before')
    @classmethod
    def strip_time_component(cls, v: Any) -> Any:
        return _date_part(v)

    def changes(self) -> dict[str, Any]:
        """The fields the caller actually provided."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ExpenseForm(BaseModel):
    """
    Raw form input, exactly as typed by the user.

    Nothing here is trusted; ExpenseFormValidator decides whether it
    may become an Expense.
    """

    amount: str = ""
    description: str = ""
    category: str = ""
    date: str = Field(default_factory=lambda: date_type.today().isoformat())


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating an expense form."""

    validated_at: datetime = Field(
        default_factory=_utcnow
    )
    is_valid: bool = Field(
        ...,
        description="Can this input be saved?"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    def errors_by_field(self) -> dict[str, str]:
        """First error message per field, for inline form errors."""
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.severity == "error" and issue.field not in errors:
                errors[issue.field] = issue.message
        return errors


class InvalidExpenseError(ValueError):
    """
    An expense violated the record invariants.

    Raised by the store before any mutation, so store state is never
    left half-updated.
    """

    def __init__(self, message: str, issues: Optional[list[ValidationIssue]] = None):
        super().__init__(message)
        self.issues = issues or []

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> "InvalidExpenseError":
        issues = [
            ValidationIssue(
                field=".".join(str(part) for part in err["loc"]) or "expense",
                issue_type=err["type"],
                message=err["msg"],
                severity="error",
            )
            for err in error.errors()
        ]
        fields = ", ".join(issue.field for issue in issues)
        return cls(f"Invalid expense ({fields})", issues)
