"""Descriptive statistics for a single column."""

import math
from collections.abc import Sequence

import numpy as np

from askdata.analysis.coerce import is_null, to_number
from askdata.analysis.models import Row, StatSummary

# Largest e with 2**e finite.
_MAX_EXPONENT = 1023


def numeric_values(rows: Sequence[Row], column: str) -> list[tuple[int, float]]:
    """(row index, value) for every cell in ``column`` that is a finite number."""
    out: list[tuple[int, float]] = []
    for i, row in enumerate(rows):
        raw = row.get(column)
        if is_null(raw):
            continue
        number = to_number(raw)
        if number is not None:
            out.append((i, number))
    return out


def power_of_two_scale(values: np.ndarray) -> float:
    """Power of two just above max |value|, capped at the largest finite one.

    Dividing by it is exact and brings values into [-2, 2], so sums and squares
    over finite inputs near the float limit do not overflow.
    """
    _, exponent = math.frexp(float(np.max(np.abs(values))))
    return math.ldexp(1.0, min(exponent, _MAX_EXPONENT))


def calculate_statistics(rows: Sequence[Row], column: str) -> StatSummary | None:
    """Count, mean, median, min, max and population std dev of ``column``.

    Returns None when the column holds no numeric values.
    """
    values = np.array([v for _, v in numeric_values(rows, column)], dtype=float)
    if values.size == 0:
        return None
    scale = power_of_two_scale(values)
    scaled = values / scale
    return StatSummary(
        count=int(values.size),
        mean=float(np.mean(scaled)) * scale,
        median=float(np.median(scaled)) * scale,
        min=float(np.min(values)),
        max=float(np.max(values)),
        stddev=float(np.std(scaled)) * scale,
    )
