"""
Miscellaneous utility functions
"""

import math
import numbers
from decimal import Decimal
from typing import Any


def to_number(value: Any) -> float:
    """
    Parse user input into a finite float.
    Real numbers (numpy scalars and Decimals included) are taken as they are,
    strings may carry surrounding whitespace, thousands separators, a leading "$"
    and a trailing "%".
    Anything that does not parse or does not fit a float (including None,
    booleans, NaN and infinities)
    becomes 0.0.
    Args:
        value (Any): Raw cell or form value.
    Returns:
        float: The parsed value, or 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            number = float(value)
        except (ValueError, OverflowError):
            return 0.0
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if cleaned.startswith("$"):
            cleaned = cleaned[1:]
        if cleaned.endswith("%"):
            cleaned = cleaned[:-1]
        try:
            number = float(cleaned.strip())
        except (ValueError, OverflowError):
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_budget(value: Any) -> float:
    """Parse a budget value, budgets are never negative."""
    return max(to_number(value), 0.0)


def to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def wrap_label(label: str, width: int = 16) -> str:
    """
    Insert <br> between words so that no line runs much past `width` characters.
    Used for the longer sector names on chart axes.
    """
    if len(label) <= width:
        return label

    lines: list[str] = []
    current = ""
    for word in label.split(" "):
        if current and len(current) + 1 + len(word) > width:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        lines.append(current)
    return "<br>".join(lines)
