"""
Currency and Category Display Formatting

Amounts are shown the way en-IN renders rupees: a ₹ prefix, no
decimals, and Indian digit grouping (the last three digits, then
groups of two: ₹12,34,567).
"""

import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

from expense_tracker.models.expense import Category


Number = Union[Decimal, int, float, str]

RUPEE = "₹"

DEFAULT_COLOR = "bg-gray-500"
DEFAULT_HEX_COLOR = "#6b7280"
DEFAULT_ICON = "📦"

# category -> (css class, hex, icon)
CATEGORY_DISPLAY: dict[str, tuple[str, str, str]] = {
    Category.FOOD_AND_DINING.value: ("bg-orange-500", "#f97316", "🍽️"),
    Category.TRANSPORTATION.value: ("bg-blue-500", "#3b82f6", "🚗"),
    Category.SHOPPING.value: ("bg-pink-500", "#ec4899", "🛍️"),
    Category.ENTERTAINMENT.value: ("bg-purple-500", "#a855f7", "🎬"),
    Category.BILLS_AND_UTILITIES.value: ("bg-red-500", "#ef4444", "⚡"),
    Category.HEALTHCARE.value: ("bg-green-500", "#22c55e", "⚕️"),
    Category.EDUCATION.value: ("bg-indigo-500", "#6366f1", "📚"),
    Category.TRAVEL.value: ("bg-teal-500", "#14b8a6", "✈️"),
    Category.GROCERIES.value: ("bg-yellow-500", "#eab308", "🛒"),
    Category.OTHERS.value: ("bg-gray-500", DEFAULT_HEX_COLOR, DEFAULT_ICON),
}

_LAKH_GROUPS = re.compile(r"(\d)(?=(\d{2})+$)")


def _to_decimal(amount: Number) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(repr(amount))
    return Decimal(amount)


def _round(value: Decimal, exponent: Decimal) -> Decimal:
    """Half-up quantize with enough precision for any digit count."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exponent.adjusted() + 2)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def group_indian(digits: str) -> str:
    """
    Insert Indian group separators into a string of digits.

    >>> group_indian("1234567")
    '12,34,567'
    """
    if len(digits) <= 3:
        return digits
    head = _LAKH_GROUPS.sub(r"\1,", digits[:-3])
    return f"{head},{digits[-3:]}"


def format_inr(amount: Number) -> str:
    """
    Format an amount as whole rupees.

    Rounds half away from zero, like the browser's Intl formatter.

    >>> format_inr(1234567.5)
    '₹12,34,568'
    """
    rounded = _round(_to_decimal(amount), Decimal("1"))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{RUPEE}{group_indian(str(rounded.copy_abs()))}"


def format_indian_number(amount: Number) -> str:
    """Indian-grouped number with up to three decimals and no symbol."""
    value = _round(_to_decimal(amount), Decimal("0.001"))
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{value.copy_abs():f}".partition(".")
    fraction = fraction.rstrip("0")
    grouped = group_indian(whole)
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def format_percentage(value: float, signed: bool = False) -> str:
    """One decimal place; `signed` adds '+' to non-negative values."""
    prefix = "+" if signed and value >= 0 else ""
    return f"{prefix}{value:.1f}%"


def _display(category: Union[Category, str]) -> tuple[str, str, str]:
    key = category.value if isinstance(category, Category) else str(category)
    return CATEGORY_DISPLAY.get(key, (DEFAULT_COLOR, DEFAULT_HEX_COLOR, DEFAULT_ICON))


def category_color(category: Union[Category, str]) -> str:
    return _display(category)[0]


def category_hex_color(category: Union[Category, str]) -> str:
    return _display(category)[1]


def category_icon(category: Union[Category, str]) -> str:
    return _display(category)[2]
