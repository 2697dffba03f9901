"""
Main Orchestrator for Expense Tracker

This module ties together all the components and defines the flows
the UI calls:
1. Add expense (form -> validate -> store -> flush)
2. Edit / delete expense
3. Calculator (typed expression -> amount text)
4. Read-only views (dashboard, yearly analytics, filtered list)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the store without passing form validation
- The store is owned by one ExpenseTracker, created by create_app_components()
- Every read recomputes from the store's current records
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from expense_tracker.analytics import (
    dashboard_stats,
    filter_expenses,
    total_amount,
    yearly_analytics,
)
from expense_tracker.audit import AuditLogger, configure_logging, get_logger
from expense_tracker.calculator import CalculatorError, evaluate, format_result
from expense_tracker.config import get_settings
from expense_tracker.formatting import format_date_for_input
from expense_tracker.models.analytics import DashboardStats, YearlyAnalytics
from expense_tracker.models.expense import (
    Category,
    Expense,
    ExpenseForm,
    ValidationResult,
)
from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    JsonFileExpenseStorage,
)
from expense_tracker.store import ExpenseStore
from expense_tracker.validation import ExpenseFormValidator, parse_amount


logger = get_logger(__name__)


class ExpenseTracker:
    """
    Facade the presentation layer talks to.

    Mutating calls return the validation result alongside the outcome
    so the UI can show per-field messages.
    """

    def __init__(
        self,
        store: ExpenseStore,
        validator: Optional[ExpenseFormValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        top_categories_limit: int = 5,
        recent_expenses_limit: int = 5,
    ):
        self._store = store
        self._validator = validator or ExpenseFormValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._top_categories_limit = top_categories_limit
        self._recent_expenses_limit = recent_expenses_limit

    @property
    def store(self) -> ExpenseStore:
        return self._store

    @property
    def categories(self) -> tuple[str, ...]:
        return self._store.categories

    def _reject(self, result: ValidationResult) -> None:
        self._audit_logger.log_validation_failed(
            [{"field": i.field, "type": i.issue_type, "message": i.message} for i in result.issues]
        )

    def submit_expense(
        self,
        form: ExpenseForm,
        today: Optional[date] = None,
    ) -> tuple[Optional[Expense], ValidationResult]:
        """
        Validate the add-expense form and store it.

        Returns:
            (expense, validation_result); expense is None when validation failed
        """
        result = self._validator.validate(form, today)
        if not result.is_valid:
            self._reject(result)
            return None, result

        expense = self._store.add(
            amount=parse_amount(form.amount),
            description=form.description.strip(),
            category=form.category,
            date=form.date.strip(),
        )
        return expense, result

    def edit_expense(
        self,
        expense_id: str,
        form: ExpenseForm,
        today: Optional[date] = None,
    ) -> tuple[Optional[Expense], ValidationResult]:
        """
        Validate the edit form and apply it to `expense_id`.

        Returns (None, result) when validation failed or the expense no
        longer exists.
        """
        result = self._validator.validate(form, today)
        if not result.is_valid:
            self._reject(result)
            return None, result

        updated = self._store.update(
            expense_id,
            amount=parse_amount(form.amount),
            description=form.description.strip(),
            category=form.category,
            date=form.date.strip(),
        )
        return updated, result

    def remove_expense(self, expense_id: str) -> bool:
        return self._store.delete(expense_id)

    def evaluate_amount(self, expression: str) -> Optional[str]:
        """
        Run the calculator on the amount box.

        Returns the new amount text, or None when the expression is
        invalid (the form then clears the box).
        """
        try:
            return format_result(evaluate(expression))
        except CalculatorError as e:
            self._audit_logger.log_calculation_failed(expression, str(e))
            return None

    @staticmethod
    def form_for(expense: Expense) -> ExpenseForm:
        """Pre-filled edit form for an existing expense."""
        return ExpenseForm(
            amount=str(expense.amount),
            description=expense.description,
            category=expense.category.value,
            date=format_date_for_input(expense.date),
        )

    def dashboard(self, today: Optional[date] = None) -> DashboardStats:
        return dashboard_stats(
            self._store.all(),
            today=today,
            top_n=self._top_categories_limit,
            recent_n=self._recent_expenses_limit,
        )

    def analytics(
        self,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> YearlyAnalytics:
        return yearly_analytics(self._store.all(), year=year, today=today)

    def search(
        self,
        search: str = "",
        category: Optional[Union[Category, str]] = None,
        date_filter: str = "",
    ) -> tuple[list[Expense], Decimal]:
        """Filtered list plus the total of what matched."""
        matches = filter_expenses(
            self._store.all(),
            search=search,
            category=category,
            date_filter=date_filter,
        )
        return matches, total_amount(matches)


def create_app_components(
    use_storage: bool = True,
    storage: Optional[ExpenseStorageInterface] = None,
) -> ExpenseTracker:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the configured JSON file.
                    Set to False for a throwaway in-memory session.
        storage: Explicit backend, overriding the configured one.

    Returns:
        A hydrated ExpenseTracker
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)
    audit_logger = AuditLogger()

    if storage is None and use_storage and settings.storage.enabled:
        storage = JsonFileExpenseStorage(settings.storage.file_path, audit_logger)

    store = ExpenseStore(storage=storage, audit_logger=audit_logger)
    loaded = store.hydrate()
    logger.info("tracker_ready", expenses=loaded, source=storage.source if storage else "memory")

    return ExpenseTracker(
        store=store,
        validator=ExpenseFormValidator(settings.app.max_expense_amount_inr),
        audit_logger=audit_logger,
        top_categories_limit=settings.app.top_categories_limit,
        recent_expenses_limit=settings.app.recent_expenses_limit,
    )
