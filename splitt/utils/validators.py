"""Value checks shared by the expense state setters"""

from typing import Any


def is_non_negative_int(value: Any) -> bool:
    # bool is an int subclass but never a valid amount
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def is_positive_int(value: Any) -> bool:
    return is_non_negative_int(value) and value > 0


def is_non_empty_str_or_none(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value != "")


def describe(value: Any) -> str:
    """Render a value and its type for error messages"""
    return f"{value!r} ({type(value).__name__})"
