from __future__ import annotations

import math
from typing import Any

from ..core.exceptions import InvalidExpenseAmount


def parse_number(value: Any) -> float:
    """Parse a form/JSON value into a finite float.

    Raises ValueError for anything that is not a finite number. Booleans are
    rejected even though they are ints in Python.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    return number


def require_amount(value: Any, field_name: str, *, allow_zero: bool = True, blank_as_zero: bool = False) -> float:
    if blank_as_zero and (value is None or (isinstance(value, str) and not value.strip())):
        return 0.0
    try:
        number = parse_number(value)
    except (TypeError, ValueError):
        raise InvalidExpenseAmount(f"{field_name} must be a valid number")
    if number < 0 or (number == 0 and not allow_zero):
        qualifier = "greater than 0" if not allow_zero else "0 or more"
        raise InvalidExpenseAmount(f"{field_name} must be {qualifier}")
    return number
