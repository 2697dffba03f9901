"""
Analytics Result Models

Shapes returned by the aggregation engine. The engine builds these
from scratch on every call; nothing here is persisted.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expense_tracker.models.expense import Expense


NO_DATA_MONTH = "None"


class CategoryBreakdownItem(BaseModel):
    """Spending in one category and its share of the grand total."""

    category: str
    amount: Decimal = Field(ge=0)
    percentage: float = Field(
        ge=0.0,
        description="Share of the grand total (0 when the total is 0)"
    )


class MonthlyEntry(BaseModel):
    """One slot of the 12-month series."""

    month_index: int = Field(ge=0, le=11, description="0 = January")
    month: str
    amount: Decimal = Field(default=Decimal("0"), ge=0)
    count: int = Field(default=0, ge=0)
    percentage: float = Field(
        default=0.0,
        ge=0.0,
        description="Share of the year's total"
    )


class HighestMonth(BaseModel):
    """
    Month with the highest spending.

    When the year has no spending at all, `month` is the "None"
    sentinel and `month_index` is None.
    """

    month: str
    amount: Decimal = Field(default=Decimal("0"))
    month_index: Optional[int] = None

    @property
    def has_data(self) -> bool:
        return self.month_index is not None


class YearlyAnalytics(BaseModel):
    """Everything the analytics page shows for one selected year."""

    year: int
    category_breakdown: list[CategoryBreakdownItem] = Field(default_factory=list)
    monthly_data: list[MonthlyEntry]
    total_amount: Decimal
    avg_monthly: Decimal = Field(description="Year total divided by 12")
    max_month: HighestMonth
    monthly_trend: float = Field(
        description="Percent change of the current month versus the previous slot"
    )
    transaction_count: int = Field(ge=0)
    available_years: list[int]
    top_category: Optional[CategoryBreakdownItem] = None
    daily_average: Decimal = Field(description="Year total divided by 365")
    average_per_expense: Decimal


class DashboardStats(BaseModel):
    """All-time and this-month figures for the dashboard."""

    total_this_month: Decimal
    total_last_month: Decimal
    total_all_time: Decimal
    transaction_count: int = Field(ge=0)
    monthly_change: float = Field(
        description="Percent change of this month versus last month (0 when last month is 0)"
    )
    top_categories: list[tuple[str, Decimal]] = Field(default_factory=list)
    recent_expenses: list[Expense] = Field(default_factory=list)
