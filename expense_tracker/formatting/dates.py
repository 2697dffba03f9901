"""Date helpers for display and form inputs (en-IN conventions)."""

from datetime import date, datetime
from typing import Optional, Union


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# en-IN abbreviates September as "Sept"
SHORT_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sept", "Oct", "Nov", "Dec",
)

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """
    Coerce a date, datetime or ISO string to a calendar date.

    Raises:
        ValueError: if the string is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value.strip()[:10])


def format_date(value: DateLike) -> str:
    """
    Render a date as 'DD Mon YYYY'.

    >>> format_date("2024-01-05")
    '05 Jan 2024'
    """
    day = to_date(value)
    return f"{day.day:02d} {SHORT_MONTH_NAMES[day.month - 1]} {day.year}"


def format_date_for_input(value: DateLike) -> str:
    """ISO form used by date inputs."""
    return to_date(value).isoformat()


def month_name(month_index: int) -> str:
    """Full month name for a 0-based index (0 = January)."""
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be 0-11, got {month_index}")
    return MONTH_NAMES[month_index]


def current_month(today: Optional[date] = None) -> str:
    today = today or date.today()
    return month_name(today.month - 1)


def current_year(today: Optional[date] = None) -> int:
    return (today or date.today()).year
