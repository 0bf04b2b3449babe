import logging
from typing import Any

from askdata import llm
from askdata.analysis import run_analysis
from askdata.analysis.column_types import infer_column_types
from askdata.analysis.descriptive import calculate_statistics
from askdata.analysis.models import AnalysisContext, AnalysisResult, ChartSpec, Row
from askdata.config import settings
from askdata.errors import ModelServiceError, QueryValidationError
from askdata.intent import ModelIntent, parse_intent
from askdata.prompts import build_query_message, build_summary_prompt, build_system_prompt
from askdata.request_log import RequestLog

log = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Could not generate a summary of the data"


def validate_query(query: Any, req_log: RequestLog) -> str:
    if not isinstance(query, str) or not query.strip():
        req_log.add("ERROR: query is empty")
        raise QueryValidationError("Query is required")
    return query


def validate_data(data: Any, columns: Any, req_log: RequestLog) -> tuple[list[Row], list[str]]:
    """Check the table and settle its column order.

    Without an explicit column list the first row's key order is used.
    """
    if not isinstance(data, list) or not data:
        req_log.add("ERROR: no data")
        raise QueryValidationError("Data is required")
    if not all(isinstance(row, dict) for row in data):
        req_log.add("ERROR: data rows are not objects")
        raise QueryValidationError("Data rows must be objects")
    if columns is not None and not (
        isinstance(columns, list) and all(isinstance(c, str) for c in columns)
    ):
        req_log.add("ERROR: columns is not a list of names")
        raise QueryValidationError("Columns must be a list of column names")
    return data, list(columns) if columns else list(data[0].keys())


def resolve_handler(intent: ModelIntent) -> str:
    """Pick the analysis handler for the model's declared intent."""
    if intent.type in ("statistics", "visualization"):
        return intent.type
    if intent.type == "sql" or intent.sql.strip():
        return "sql"
    return "text"


def ensure_chart(result: AnalysisResult, ctx: AnalysisContext) -> None:
    """Fall back to a one-bar chart of the first numeric column's mean."""
    if result.chart is not None or not ctx.numeric_columns:
        return
    first = ctx.numeric_columns[0]
    stats = calculate_statistics(ctx.rows, first)
    if stats is None:
        return
    result.chart = ChartSpec(
        type="bar",
        data=[{"name": first, "value": stats.mean}],
        x_key="name",
        y_key="value",
    )


async def answer(query: str, rows: list[Row], columns: list[str], req_log: RequestLog) -> AnalysisResult:
    """Interpret a question about ``rows`` through the model and build the result.

    Model failures are raised as ModelServiceError; data problems never raise.
    """
    cfg = settings.analysis
    req_log.add("Processing started")
    req_log.add(f'Received query: "{query[:50]}"')
    req_log.add(f"Data: {len(rows)} rows, {len(columns)} columns")

    req_log.add("Detecting column types...")
    column_types = infer_column_types(
        rows, columns, cfg.type_sample_rows, numeric_threshold=cfg.numeric_threshold
    )
    numeric_count = sum(1 for t in column_types.values() if t == "number")
    req_log.add(f"Found {numeric_count} numeric columns")

    req_log.add("Sending query to the language model...")
    sample = rows[: cfg.prompt_sample_rows]
    message = build_query_message(query, columns, column_types, sample, len(rows))
    try:
        raw, finish_reason = await llm.chat(build_system_prompt(), message)
    except ModelServiceError as e:
        req_log.add(f"ERROR: {e}")
        raise
    except Exception as e:
        log.exception("LLM call failed")
        req_log.add(f"ERROR: language model call failed: {e}")
        raise ModelServiceError(f"Language model request failed: {e}") from e
    if finish_reason != "stop":
        log.warning("Model response finished with reason %s", finish_reason)

    intent = parse_intent(raw)
    req_log.add(f"Model response received: type={intent.type}")

    ctx = AnalysisContext(
        query=query,
        rows=rows,
        columns=columns,
        column_types=column_types,
        intent=intent,
        log=req_log,
        config=cfg,
    )
    handler = resolve_handler(intent)
    req_log.add(f"Handling response type: {handler}")
    result = run_analysis(handler, ctx)
    ensure_chart(result, ctx)

    req_log.add("Query processed successfully")
    return result


async def summarize(rows: list[Row], columns: list[str], req_log: RequestLog) -> str:
    """Short model-written description of the table; never raises on model errors."""
    sample = rows[: settings.analysis.prompt_sample_rows]
    req_log.add(f"Requesting summary for {len(rows)} rows")
    try:
        summary = await llm.quick_chat(build_summary_prompt(columns, sample, len(rows)))
    except Exception as e:
        log.warning("Summary generation failed: %s", e)
        req_log.add(f"ERROR: summary generation failed: {e}")
        return SUMMARY_FALLBACK
    req_log.add("Summary generated")
    return summary or SUMMARY_FALLBACK
