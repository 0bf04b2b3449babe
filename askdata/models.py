from typing import Any

from pydantic import BaseModel

from askdata.analysis.models import AnalysisResult
from askdata.request_log import LogEntry


class QueryRequest(BaseModel):
    # Loosely typed; agent.validate_query/validate_data reject bad input
    # with the request log attached.
    query: Any = None
    data: Any = None
    columns: Any = None


class SummaryRequest(BaseModel):
    data: Any = None
    columns: Any = None


class QueryResponse(AnalysisResult):
    logs: list[LogEntry] = []


class SummaryResponse(BaseModel):
    summary: str
    logs: list[LogEntry] = []


class ErrorResponse(BaseModel):
    error: str
    message: str | None = None
    logs: list[LogEntry] = []
    stack: str | None = None
