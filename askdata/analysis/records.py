"""Row-level answers: anomaly listings and plain row samples."""

import logging

from askdata.analysis import register
from askdata.analysis.anomalies import find_anomalies
from askdata.analysis.models import AnalysisContext, AnalysisResult

log = logging.getLogger(__name__)

# Substring match on the lower-cased question; a fixed rule, not NLP.
ANOMALY_KEYWORDS = ("anomal", "outlier", "аномал")


def wants_anomalies(query: str) -> bool:
    lowered = query.lower()
    return any(keyword in lowered for keyword in ANOMALY_KEYWORDS)


@register("sql")
def sql_analysis(ctx: AnalysisContext) -> AnalysisResult:
    """SQL-flavoured intents. The SQL itself is never executed."""
    result = ctx.new_result()
    if not wants_anomalies(ctx.query):
        result.table = ctx.rows[: ctx.config.sql_sample_rows]
        return result

    ctx.log.add("Searching for anomalies...")
    table: list[dict] = []
    for col in ctx.numeric_columns:
        for a in find_anomalies(ctx.rows, col, ctx.config.anomaly_threshold):
            table.append({
                "column": col,
                "row_index": a.index,
                "value": a.value,
                "deviation": a.deviation,
            })
    ctx.log.add(f"Found {len(table)} anomalies")
    result.table = table
    return result


@register("text")
def text_analysis(ctx: AnalysisContext) -> AnalysisResult:
    result = ctx.new_result()
    result.table = ctx.rows[: ctx.config.text_sample_rows]
    return result
