"""
Aggregation Engine

DESIGN DECISION: Every figure on the dashboard and analytics pages is
computed here, from scratch, on every call. Nothing is cached: the
collection is small (hundreds to low thousands of records) and a
recompute can never serve a stale number.

All functions are pure. Anything that depends on "now" takes an
explicit `today` so results are reproducible in tests.

TWO DIFFERENT "PREVIOUS MONTH" RULES:
- monthly_trend() works on the selected year's 12-slot series. In
  January it compares against slot 11, i.e. December of the SAME
  selected year, not the year before. Reported analytics depend on
  this, so it is kept as is.
- dashboard_stats() filters raw dates by explicit (month, year) pairs,
  so January compares against December of the previous year.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from expense_tracker.formatting.dates import month_name
from expense_tracker.models.analytics import (
    NO_DATA_MONTH,
    CategoryBreakdownItem,
    DashboardStats,
    HighestMonth,
    MonthlyEntry,
    YearlyAnalytics,
)
from expense_tracker.models.expense import Expense


ZERO = Decimal("0")
MONTHS_IN_YEAR = 12
DAYS_IN_YEAR = 365


def _percentage(part: Decimal, whole: Decimal) -> float:
    if whole <= 0:
        return 0.0
    return float(part / whole * 100)


def _change(current: Decimal, previous: Decimal) -> float:
    """Percent change, defined as 0 when there is nothing to compare against."""
    if previous <= 0:
        return 0.0
    return float((current - previous) / previous * 100)


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


# =============================================================================
# FILTERS AND TOTALS
# =============================================================================

def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), ZERO)


def filter_by_year(expenses: Iterable[Expense], year: int) -> list[Expense]:
    return [expense for expense in expenses if expense.date.year == year]


def filter_by_month(expenses: Iterable[Expense], year: int, month: int) -> list[Expense]:
    """Expenses dated in `month` (1-12) of `year`."""
    return [
        expense for expense in expenses
        if expense.date.year == year and expense.date.month == month
    ]


def category_totals(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Sum per category, keyed in the order categories are first seen."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        key = expense.category.value
        totals[key] = totals.get(key, ZERO) + expense.amount
    return totals


# =============================================================================
# YEAR-SCOPED QUERIES
# =============================================================================

def category_breakdown(expenses: Iterable[Expense]) -> list[CategoryBreakdownItem]:
    """
    Group by category, largest total first.

    Each item carries its share of the grand total. Ties keep the
    order in which their categories were first encountered.
    """
    totals = category_totals(expenses)
    grand_total = sum(totals.values(), ZERO)

    items = [
        CategoryBreakdownItem(
            category=category,
            amount=amount,
            percentage=_percentage(amount, grand_total),
        )
        for category, amount in totals.items()
    ]
    # sorted() is stable, reverse=True included
    return sorted(items, key=lambda item: item.amount, reverse=True)


def monthly_series(expenses: Iterable[Expense], year: int) -> list[MonthlyEntry]:
    """Twelve entries, January first, with amount and count per month of `year`."""
    amounts = [ZERO] * MONTHS_IN_YEAR
    counts = [0] * MONTHS_IN_YEAR

    for expense in filter_by_year(expenses, year):
        index = expense.date.month - 1
        amounts[index] += expense.amount
        counts[index] += 1

    year_total = sum(amounts, ZERO)

    return [
        MonthlyEntry(
            month_index=index,
            month=month_name(index),
            amount=amounts[index],
            count=counts[index],
            percentage=_percentage(amounts[index], year_total),
        )
        for index in range(MONTHS_IN_YEAR)
    ]


def monthly_trend(series: Sequence[MonthlyEntry], today: Optional[date] = None) -> float:
    """
    Percent change of the current month's slot versus the slot before it.

    Works purely on the 12-slot series; January wraps to slot 11 of the
    same series. Returns 0 when the previous slot is empty.
    """
    today = today or date.today()
    current = today.month - 1
    previous = MONTHS_IN_YEAR - 1 if current == 0 else current - 1
    return _change(series[current].amount, series[previous].amount)


def highest_month(series: Sequence[MonthlyEntry]) -> HighestMonth:
    """
    The month with the most spending; the earliest month wins ties.

    Returns the "None" sentinel when nothing was spent in the year.
    """
    best: Optional[MonthlyEntry] = None
    for entry in series:
        if best is None or entry.amount > best.amount:
            best = entry

    if best is None or best.amount <= 0:
        return HighestMonth(month=NO_DATA_MONTH, amount=ZERO)

    return HighestMonth(month=best.month, amount=best.amount, month_index=best.month_index)


def available_years(expenses: Iterable[Expense], today: Optional[date] = None) -> list[int]:
    """Distinct years with expenses, newest first; the current year if there are none."""
    years = sorted({expense.date.year for expense in expenses}, reverse=True)
    if not years:
        return [(today or date.today()).year]
    return years


def yearly_analytics(
    expenses: Sequence[Expense],
    year: Optional[int] = None,
    today: Optional[date] = None,
) -> YearlyAnalytics:
    """Everything the analytics page needs for `year` (default: the current year)."""
    today = today or date.today()
    year = year if year is not None else today.year

    year_expenses = filter_by_year(expenses, year)
    breakdown = category_breakdown(year_expenses)
    series = monthly_series(year_expenses, year)
    total = total_amount(year_expenses)
    count = len(year_expenses)

    return YearlyAnalytics(
        year=year,
        category_breakdown=breakdown,
        monthly_data=series,
        total_amount=total,
        avg_monthly=total / MONTHS_IN_YEAR,
        max_month=highest_month(series),
        monthly_trend=monthly_trend(series, today),
        transaction_count=count,
        available_years=available_years(expenses, today),
        top_category=breakdown[0] if breakdown else None,
        daily_average=total / DAYS_IN_YEAR,
        average_per_expense=total / max(count, 1),
    )


# =============================================================================
# DASHBOARD
# =============================================================================

def top_categories(expenses: Iterable[Expense], limit: int = 5) -> list[tuple[str, Decimal]]:
    """All-time category totals, largest first, at most `limit` entries."""
    ranked = sorted(category_totals(expenses).items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def dashboard_stats(
    expenses: Sequence[Expense],
    today: Optional[date] = None,
    top_n: int = 5,
    recent_n: int = 5,
) -> DashboardStats:
    """
    This-month, last-month and all-time figures.

    `expenses` must be in store order: the recent list is the first
    `recent_n` records as added, not the latest by date.
    """
    today = today or date.today()
    last_year, last_month = _previous_month(today.year, today.month)

    total_this_month = total_amount(filter_by_month(expenses, today.year, today.month))
    total_last_month = total_amount(filter_by_month(expenses, last_year, last_month))

    return DashboardStats(
        total_this_month=total_this_month,
        total_last_month=total_last_month,
        total_all_time=total_amount(expenses),
        transaction_count=len(expenses),
        monthly_change=_change(total_this_month, total_last_month),
        top_categories=top_categories(expenses, top_n),
        recent_expenses=list(expenses[:recent_n]),
    )
