from typing import Any

_INSTRUCTIONS = """\
You are an expert data analyst. The user asks a question in plain language
about a table they uploaded. Your job is to:

1. Understand what the user wants to know.
2. Choose how the table should be analysed.
3. Return your answer as **JSON only** (no markdown fences) with these keys:
   - "type": one of "sql", "statistics", "visualization", "text"
   - "sql": a SELECT query over a table named "data" (only when type is "sql")
   - "statistics": metric names to compute, e.g. ["mean", "median", "count"]
     (only when type is "statistics")
   - "visualization": {"chartType": "line" | "bar" | "pie" | "scatter",
     "xAxis": "<column>", "yAxis": "<column>"} (only when type is "visualization")
   - "description": one sentence on what will be done
   - "message": the answer to show the user

## Choosing a type
- Averages, spread, ranges, "describe the data" → statistics
- Trends, comparisons between groups, "plot", "chart" → visualization
- Filtering, listing rows, anomalies/outliers → sql
- Anything else → text

Use column names exactly as listed in the schema.
"""

_SUMMARY_INSTRUCTIONS = """\
Summarise the table below in 2-3 sentences: what the data represents, the main
patterns you see, and whether anything looks anomalous.
"""


def _format_value(value: Any) -> str:
    return "N/A" if value is None else str(value)


def describe_schema(
    columns: list[str],
    column_types: dict[str, str],
    sample_rows: list[dict[str, Any]],
    total_rows: int,
) -> str:
    if not columns:
        return "No columns"
    first = sample_rows[0] if sample_rows else {}
    lines = ["Columns:"]
    for col in columns:
        kind = column_types.get(col, "text")
        lines.append(f'- {col} ({kind}): example value "{_format_value(first.get(col))}"')
    lines.append(f"\nTotal rows: {total_rows}")
    return "\n".join(lines)


def build_system_prompt() -> str:
    return _INSTRUCTIONS


def build_query_message(
    question: str,
    columns: list[str],
    column_types: dict[str, str],
    sample_rows: list[dict[str, Any]],
    total_rows: int,
) -> str:
    schema = describe_schema(columns, column_types, sample_rows, total_rows)
    return f"# Data schema\n{schema}\n\n# Question\n\"{question}\""


def build_summary_prompt(columns: list[str], sample_rows: list[dict[str, Any]], total_rows: int) -> str:
    rows_text = "\n".join(
        ", ".join(_format_value(row.get(col)) for col in columns) for row in sample_rows
    )
    return (
        f"{_SUMMARY_INSTRUCTIONS}\n"
        f"Columns: {', '.join(columns)}\n"
        f"Row count: {total_rows}\n\n"
        f"Sample rows (first {len(sample_rows)}):\n{rows_text}"
    )
