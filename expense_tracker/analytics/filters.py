"""List-view filtering for the manage-expenses page."""

from typing import Iterable, Optional, Union

from expense_tracker.models.expense import Category, Expense


def filter_expenses(
    expenses: Iterable[Expense],
    search: str = "",
    category: Optional[Union[Category, str]] = None,
    date_filter: str = "",
) -> list[Expense]:
    """
    Apply the search box, category dropdown and date filter.

    Args:
        search: Case-insensitive substring of the description or category name
        category: Exact category; None or "" means all categories
        date_filter: Substring of the ISO date, e.g. "2024-01" for a month

    Order is preserved.
    """
    needle = search.lower()
    wanted = category.value if isinstance(category, Category) else (category or "")

    matches = []
    for expense in expenses:
        if needle and needle not in expense.description.lower() \
                and needle not in expense.category.value.lower():
            continue
        if wanted and expense.category.value != wanted:
            continue
        if date_filter and date_filter not in expense.date.isoformat():
            continue
        matches.append(expense)
    return matches
