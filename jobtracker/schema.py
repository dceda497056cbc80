"""
Reusable record validations.

Each helper inspects one attribute and returns a list of (field, message)
pairs. Empty list means valid. Models combine them in ``validate``.
"""

from typing import Any, Iterable, List, Optional, Tuple

ValidationErrors = List[Tuple[str, str]]

BLANK = "can't be blank"

# SQLite stores INTEGER as a signed 64-bit value.
MIN_INTEGER = -(2 ** 63)
MAX_INTEGER = 2 ** 63 - 1


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_storable_integer(value: Any) -> bool:
    return _is_integer(value) and MIN_INTEGER <= value <= MAX_INTEGER


def validate_presence(field: str, value: Any) -> ValidationErrors:
    if is_blank(value):
        return [(field, BLANK)]
    return []


def validate_inclusion(
    field: str,
    value: Any,
    allowed: Iterable[Any],
    allow_blank: bool = False,
) -> ValidationErrors:
    if allow_blank and is_blank(value):
        return []
    if value not in list(allowed):
        return [(field, "is not included in the list")]
    return []


def validate_integer(
    field: str,
    value: Any,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> ValidationErrors:
    """
    Numericality check; blank values are skipped (pair with validate_presence).

    Without explicit bounds the value must still fit a SQLite INTEGER.
    """
    if is_blank(value):
        return []
    if not _is_integer(value):
        return [(field, "must be an integer")]
    minimum = MIN_INTEGER if minimum is None else minimum
    maximum = MAX_INTEGER if maximum is None else maximum
    if value < minimum:
        return [(field, f"must be greater than or equal to {minimum}")]
    if value > maximum:
        return [(field, f"must be less than or equal to {maximum}")]
    return []
