"""Z-score outlier detection."""

import logging
from collections.abc import Sequence

import numpy as np
from scipy import stats

from askdata.analysis.descriptive import numeric_values, power_of_two_scale
from askdata.analysis.models import Anomaly, Row

log = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 2.0


def find_anomalies(
    rows: Sequence[Row],
    column: str,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[Anomaly]:
    """Values of ``column`` at least ``threshold`` standard deviations from the mean.

    Uses the population standard deviation. A value sitting on the threshold
    (within a relative 1e-9) is flagged; a value on the mean never is. Columns
    with no numeric values or no spread yield an empty list. Results keep table
    order.
    """
    pairs = numeric_values(rows, column)
    if not pairs:
        return []

    indices = [i for i, _ in pairs]
    values = np.array([v for _, v in pairs], dtype=float)
    if np.ptp(values) == 0:
        return []

    # z-scores are scale-invariant
    z = stats.zscore(values / power_of_two_scale(values))
    magnitude = np.abs(z)
    on_boundary = np.isclose(magnitude, threshold, rtol=1e-9, atol=0.0) & (magnitude > 0)
    flagged = (magnitude > threshold) | on_boundary

    anomalies = [
        Anomaly(index=indices[k], value=float(values[k]), deviation=float(z[k]))
        for k in np.flatnonzero(flagged)
    ]
    if anomalies:
        log.debug("Column %s: %d anomalies at threshold %.2f", column, len(anomalies), threshold)
    return anomalies
