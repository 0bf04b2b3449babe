"""Descriptive statistics for every numeric column."""

import logging

from askdata.analysis import register
from askdata.analysis.descriptive import calculate_statistics
from askdata.analysis.models import AnalysisContext, AnalysisResult, ChartSpec, StatSummary

log = logging.getLogger(__name__)

DEFAULT_METRICS = ["mean", "median", "min", "max", "count"]

_METRIC_ALIASES = {
    "count": "count",
    "mean": "mean",
    "average": "mean",
    "avg": "mean",
    "median": "median",
    "min": "min",
    "minimum": "min",
    "max": "max",
    "maximum": "max",
    "stddev": "stddev",
    "std": "stddev",
    "std_dev": "stddev",
    "standard_deviation": "stddev",
}


def resolve_metrics(requested: list[str]) -> list[str]:
    """Map the model's metric names onto StatSummary fields, keeping order."""
    metrics: list[str] = []
    for name in requested:
        key = _METRIC_ALIASES.get(name.strip().lower().replace(" ", "_"))
        if key and key not in metrics:
            metrics.append(key)
    return metrics or list(DEFAULT_METRICS)


@register("statistics")
def statistics_analysis(ctx: AnalysisContext) -> AnalysisResult:
    result = ctx.new_result()
    ctx.log.add("Calculating statistics...")

    stats: dict[str, StatSummary] = {}
    for col in ctx.numeric_columns:
        summary = calculate_statistics(ctx.rows, col)
        if summary is not None:
            stats[col] = summary
    ctx.log.add(f"Calculated statistics for {len(stats)} columns")

    metrics = resolve_metrics(ctx.intent.statistics)
    result.statistics = stats
    result.table = [
        {"column": col, **{m: getattr(summary, m) for m in metrics}}
        for col, summary in stats.items()
    ]

    if stats:
        result.chart = ChartSpec(
            type="bar",
            data=[{"name": col, "value": summary.mean} for col, summary in stats.items()],
            x_key="name",
            y_key="value",
        )
    return result
