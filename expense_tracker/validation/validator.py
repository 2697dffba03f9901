"""
Expense Form Validation

DESIGN DECISION: The form is validated before anything reaches the store.
The store enforces the record invariants on its own, but the messages
a user sees ("Please enter a valid amount") are produced here.

Two kinds of findings:
- ERRORS block saving (missing or unparseable fields)
- WARNINGS are shown but don't block (very large amount, future date)

IMPORTANT: Validation NEVER silently fixes input.
It reports problems for the user to correct.
"""

from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_tracker.config import get_settings
from expense_tracker.models.expense import (
    CATEGORIES,
    ExpenseForm,
    ValidationIssue,
    ValidationResult,
)


AMOUNT_MESSAGE = "Please enter a valid amount"
DESCRIPTION_MESSAGE = "Please enter a description"
CATEGORY_MESSAGE = "Please select a category"
DATE_MESSAGE = "Please select a date"


def parse_amount(text: str) -> Optional[Decimal]:
    """The amount as a Decimal, or None if it isn't a finite number."""
    try:
        amount = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_date(text: str) -> Optional[date]:
    try:
        return date.fromisoformat(text.strip())
    except (ValueError, AttributeError):
        return None


class ExpenseFormValidator:
    """Validates add/edit expense forms."""

    def __init__(self, max_amount: Optional[float] = None):
        """
        Args:
            max_amount: Amount above which a warning is raised.
                        Defaults to the configured max_expense_amount_inr.
        """
        if max_amount is None:
            max_amount = get_settings().app.max_expense_amount_inr
        self._max_amount = Decimal(str(max_amount))

    def _check_required(self, form: ExpenseForm) -> list[ValidationIssue]:
        issues = []

        amount = parse_amount(form.amount)
        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value" if form.amount.strip() else "missing",
                message=AMOUNT_MESSAGE,
                severity="error",
            ))

        if not form.description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message=DESCRIPTION_MESSAGE,
                severity="error",
            ))

        if form.category not in CATEGORIES:
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value" if form.category else "missing",
                message=CATEGORY_MESSAGE,
                severity="error",
            ))

        if parse_date(form.date) is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_value" if form.date.strip() else "missing",
                message=DATE_MESSAGE,
                severity="error",
            ))

        return issues

    def _check_plausible(
        self,
        form: ExpenseForm,
        today: date,
    ) -> list[ValidationIssue]:
        issues = []

        amount = parse_amount(form.amount)
        if amount is not None and amount > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount (₹{amount:,.2f}) seems unusually high",
                severity="warning",
            ))

        spent_on = parse_date(form.date)
        if spent_on is not None and spent_on > today + timedelta(days=1):
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({spent_on.isoformat()}) is in the future",
                severity="warning",
            ))

        return issues

    def validate(
        self,
        form: ExpenseForm,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Validate a form.

        Plausibility warnings are only computed when there are no errors.
        """
        issues = self._check_required(form)
        if not issues:
            issues.extend(self._check_plausible(form, today or date.today()))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text to show above the form."""
        if result.is_valid and not result.warnings:
            return "✅ Looks good!"

        lines = []

        if result.has_errors:
            lines.append("❌ Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please double-check:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
