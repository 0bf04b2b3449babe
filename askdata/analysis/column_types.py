"""Column type detection over a deterministic prefix of the table."""

import logging
from collections.abc import Sequence

from askdata.analysis.coerce import is_date, is_null, is_scalar, to_number
from askdata.analysis.models import ColumnType, Row

log = logging.getLogger(__name__)

DEFAULT_SAMPLE_ROWS = 1000
NUMERIC_THRESHOLD = 0.8
DATE_THRESHOLD = 0.5

# Low-cardinality string columns are categories, the rest free text.
CATEGORY_MAX_DISTINCT = 20
CATEGORY_MAX_DISTINCT_RATIO = 0.5


def _classify_column(
    values: list,
    numeric_threshold: float,
    date_threshold: float,
) -> ColumnType:
    numbers = dates = 0
    others: list[str] = []
    for value in values:
        if is_null(value) or not is_scalar(value):
            continue
        if to_number(value) is not None:
            numbers += 1
        elif is_date(value):
            dates += 1
        else:
            others.append(str(value))

    total = numbers + dates + len(others)
    if total == 0:
        return "text"
    if numbers / total >= numeric_threshold:
        return "number"
    if dates / total > date_threshold:
        return "date"

    distinct = len(set(others))
    if distinct <= CATEGORY_MAX_DISTINCT or (others and distinct / len(others) <= CATEGORY_MAX_DISTINCT_RATIO):
        return "category"
    return "text"


def infer_column_types(
    rows: Sequence[Row],
    columns: Sequence[str],
    sample_rows: int | None = DEFAULT_SAMPLE_ROWS,
    numeric_threshold: float = NUMERIC_THRESHOLD,
    date_threshold: float = DATE_THRESHOLD,
) -> dict[str, ColumnType]:
    """Classify every listed column as number, date, category or text.

    Only the first ``sample_rows`` rows are inspected (``None`` or ``0`` means
    all of them). A column is numeric when at least ``numeric_threshold`` of
    its non-null values parse as finite numbers, a date when more than
    ``date_threshold`` of them are dates. Columns with no usable values are
    text. Malformed (non-scalar) values are skipped, never raised on.
    """
    sample = rows[:sample_rows] if sample_rows else rows
    types: dict[str, ColumnType] = {}
    for col in columns:
        values = [row.get(col) for row in sample]
        types[col] = _classify_column(values, numeric_threshold, date_threshold)
    log.debug("Inferred column types over %d rows: %s", len(sample), types)
    return types
