"""Partition rows by a key column and reduce a numeric column per group."""

from collections.abc import Sequence

import numpy as np

from askdata.analysis.coerce import is_null, to_number
from askdata.analysis.models import GroupResult, Row

NULL_GROUP = "null"

_REDUCERS = {
    "mean": np.mean,
    "sum": np.sum,
    "min": np.min,
    "max": np.max,
    "count": np.size,
}

AGGREGATION_MODES = tuple(_REDUCERS)


def _group_key(value) -> str:
    """Chart label for a key: "true"/"false" for booleans, "10" for 10.0."""
    if is_null(value):
        return NULL_GROUP
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def group_by(rows: Sequence[Row], key_column: str) -> dict[str, list[Row]]:
    """Rows bucketed by the stringified value of ``key_column``, in first-seen order.

    When no row has ``key_column`` at all the result is empty.
    """
    if not any(key_column in row for row in rows):
        return {}
    groups: dict[str, list[Row]] = {}
    for row in rows:
        groups.setdefault(_group_key(row.get(key_column)), []).append(row)
    return groups


def aggregate_groups(
    groups: dict[str, list[Row]],
    value_column: str,
    mode: str = "mean",
) -> list[GroupResult]:
    """Reduce ``value_column`` within each group.

    Non-numeric and missing values are left out of the reduction. A group with
    no numeric values at all reduces to 0. When ``value_column`` appears in no
    row the result is empty.
    """
    reducer = _REDUCERS.get(mode)
    if reducer is None:
        raise ValueError(
            f"Unknown aggregation mode: {mode}. "
            f"Available: {', '.join(AGGREGATION_MODES)}"
        )
    if not any(value_column in row for members in groups.values() for row in members):
        return []

    results: list[GroupResult] = []
    for key, members in groups.items():
        coerced = (to_number(row.get(value_column)) for row in members)
        values = np.array([v for v in coerced if v is not None], dtype=float)
        value = float(reducer(values)) if values.size else 0.0
        results.append(GroupResult(group=key, value=value))
    return results
