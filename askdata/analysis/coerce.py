"""Scalar helpers shared by the analysis engines."""

import math
import numbers
from datetime import date
from typing import Any

import pandas as pd


def is_null(value: Any) -> bool:
    """None, NaN and blank strings all count as missing."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def to_number(value: Any) -> float | None:
    """Coerce a cell to a finite float, or None if it is not a number.

    Booleans are never numbers. Strings are parsed after stripping whitespace.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_date(value: Any) -> bool:
    """True for date/datetime objects (pandas Timestamps included) and ISO-8601 strings."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False
    parsed = pd.to_datetime(value.strip(), format="ISO8601", errors="coerce")
    return not pd.isna(parsed)


def is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, numbers.Number, bool, date))
