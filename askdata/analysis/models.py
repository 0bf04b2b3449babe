from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from askdata.config import AnalysisConfig
from askdata.intent import ModelIntent
from askdata.request_log import RequestLog

ColumnType = Literal["number", "date", "category", "text"]

Row = dict[str, Any]


class StatSummary(BaseModel):
    count: int
    mean: float
    median: float
    min: float
    max: float
    stddev: float


class Anomaly(BaseModel):
    index: int  # row position in the original table
    value: float
    deviation: float  # signed, in standard deviations


class GroupResult(BaseModel):
    group: str
    value: float


class ChartSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    data: list[dict[str, Any]]
    x_key: str = Field(alias="xKey")
    y_key: str = Field(alias="yKey")


class AnalysisResult(BaseModel):
    type: str = "text"
    message: str = ""
    description: str = ""
    table: list[dict[str, Any]] | None = None
    chart: ChartSpec | None = None
    statistics: dict[str, StatSummary] | None = None


@dataclass
class AnalysisContext:
    """Everything an intent handler needs for one request."""

    query: str
    rows: list[Row]
    columns: list[str]
    column_types: dict[str, ColumnType]
    intent: ModelIntent
    log: RequestLog
    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    @property
    def numeric_columns(self) -> list[str]:
        return [c for c in self.columns if self.column_types.get(c) == "number"]

    def new_result(self) -> AnalysisResult:
        """Envelope pre-filled with the model's type, message and description."""
        return AnalysisResult(
            type=self.intent.type or "text",
            message=self.intent.message or "Query processed",
            description=self.intent.description,
        )
