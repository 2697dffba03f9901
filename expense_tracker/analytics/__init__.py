"""Aggregation engine package."""

from expense_tracker.analytics.engine import (
    available_years,
    category_breakdown,
    category_totals,
    dashboard_stats,
    filter_by_month,
    filter_by_year,
    highest_month,
    monthly_series,
    monthly_trend,
    top_categories,
    total_amount,
    yearly_analytics,
)
from expense_tracker.analytics.filters import filter_expenses

__all__ = [
    "available_years",
    "category_breakdown",
    "category_totals",
    "dashboard_stats",
    "filter_by_month",
    "filter_by_year",
    "filter_expenses",
    "highest_month",
    "monthly_series",
    "monthly_trend",
    "top_categories",
    "total_amount",
    "yearly_analytics",
]
