"""Chart specification from the model's requested chart type and axes."""

import logging

from askdata.analysis import register
from askdata.analysis.grouping import aggregate_groups, group_by
from askdata.analysis.models import AnalysisContext, AnalysisResult, ChartSpec

log = logging.getLogger(__name__)

DEFAULT_CHART_TYPE = "line"
# Only these chart types are grouped and averaged; others get the raw rows.
AGGREGATED_CHART_TYPES = {"line", "bar"}


def _pick_axis(requested: str | None, columns: list[str], fallback: str | None) -> str | None:
    if requested and requested in columns:
        return requested
    return fallback


@register("visualization")
def visualization_analysis(ctx: AnalysisContext) -> AnalysisResult:
    result = ctx.new_result()
    viz = ctx.intent.visualization
    chart_type = (viz.chart_type or DEFAULT_CHART_TYPE).lower()
    x_axis = _pick_axis(viz.x_axis, ctx.columns, ctx.columns[0] if ctx.columns else None)
    numeric = ctx.numeric_columns
    y_axis = _pick_axis(viz.y_axis, ctx.columns, numeric[0] if numeric else None)
    ctx.log.add(f"Building {chart_type} chart: x={x_axis}, y={y_axis}")

    if not x_axis or not y_axis:
        ctx.log.add("No usable axes for the chart")
        return result

    if chart_type in AGGREGATED_CHART_TYPES:
        groups = group_by(ctx.rows, x_axis)
        aggregated = aggregate_groups(groups, y_axis, "mean")
        data = [{x_axis: item.group, y_axis: item.value} for item in aggregated]
    else:
        data = [{x_axis: row.get(x_axis), y_axis: row.get(y_axis)} for row in ctx.rows]

    result.chart = ChartSpec(type=chart_type, data=data, x_key=x_axis, y_key=y_axis)
    return result
