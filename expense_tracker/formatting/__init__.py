"""Display formatting package."""

from expense_tracker.formatting.currency import (
    category_color,
    category_hex_color,
    category_icon,
    format_indian_number,
    format_inr,
    format_percentage,
    group_indian,
)
from expense_tracker.formatting.dates import (
    MONTH_NAMES,
    current_month,
    current_year,
    format_date,
    format_date_for_input,
    month_name,
    to_date,
)

__all__ = [
    # Currency
    "category_color",
    "category_hex_color",
    "category_icon",
    "format_indian_number",
    "format_inr",
    "format_percentage",
    "group_indian",
    # Dates
    "MONTH_NAMES",
    "current_month",
    "current_year",
    "format_date",
    "format_date_for_input",
    "month_name",
    "to_date",
]
