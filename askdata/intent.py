"""Parsing of the language model's structured response."""

import json
import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

log = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Analysis complete"


class VisualizationIntent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    chart_type: str | None = Field(None, alias="chartType")
    x_axis: str | None = Field(None, alias="xAxis")
    y_axis: str | None = Field(None, alias="yAxis")

    @model_validator(mode="before")
    @classmethod
    def _stringify(cls, values: Any) -> Any:
        """Drop non-string axis/type values instead of failing validation."""
        if isinstance(values, dict):
            return {
                k: (v.strip() or None) if isinstance(v, str) else None
                for k, v in values.items()
            }
        return values


class ModelIntent(BaseModel):
    """What the model says the question asks for.

    Only ``type`` is meaningful on every response; the other fields belong to
    particular intent types and may be absent, null or malformed.
    """

    model_config = ConfigDict(extra="ignore")

    type: str = "text"
    sql: str = ""
    statistics: list[str] = Field(default_factory=list)
    visualization: VisualizationIntent = Field(default_factory=VisualizationIntent)
    description: str = ""
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def _coerce_nulls(cls, values: Any) -> Any:
        """Replace nulls and wrong-typed fields with safe defaults."""
        if not isinstance(values, dict):
            return {}
        values = dict(values)
        for key in ("type", "sql", "description", "message"):
            if not isinstance(values.get(key), str):
                values.pop(key, None)
        if isinstance(values.get("type"), str):
            values["type"] = values["type"].strip().lower() or "text"
        stats = values.get("statistics")
        if isinstance(stats, list):
            values["statistics"] = [s for s in stats if isinstance(s, str)]
        else:
            values.pop("statistics", None)
        if not isinstance(values.get("visualization"), dict):
            values.pop("visualization", None)
        return values


def _extract_json(text: str) -> dict[str, Any] | None:
    text = text.strip()
    try:
        data = json.loads(text)
        return data if isinstance(data, dict) else None
    except json.JSONDecodeError:
        pass
    # Try extracting from code fences
    m = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if m:
        try:
            data = json.loads(m.group(1).strip())
            if isinstance(data, dict):
                return data
        except json.JSONDecodeError:
            pass
    # Try finding first { ... }
    m = re.search(r"\{.*\}", text, re.DOTALL)
    if m:
        try:
            data = json.loads(m.group())
            if isinstance(data, dict):
                return data
        except json.JSONDecodeError:
            pass
    return None


def parse_intent(text: str) -> ModelIntent:
    """Leniently parse model output into a ModelIntent.

    Output with no usable JSON object is treated as a plain text answer.
    """
    data = _extract_json(text)
    if data is None:
        log.warning("No JSON in model output, treating as text answer")
        return ModelIntent(type="text", message=text.strip(), description=FALLBACK_DESCRIPTION)
    return ModelIntent.model_validate(data)
