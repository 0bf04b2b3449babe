import logging
import traceback

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from askdata import agent, llm
from askdata.config import settings
from askdata.errors import QueryValidationError
from askdata.models import (
    ErrorResponse,
    QueryRequest,
    QueryResponse,
    SummaryRequest,
    SummaryResponse,
)
from askdata.request_log import RequestLog

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="askdata", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, error: str, req_log: RequestLog, exc: Exception | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, logs=req_log.entries)
    if exc is not None:
        body.message = str(exc)
        if not settings.is_production:
            body.stack = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "llm_configured": llm.is_configured(),
        "deployment": settings.azure_openai.deployment,
    }


@app.post("/api/query", response_model=QueryResponse)
async def query(req: QueryRequest):
    req_log = RequestLog()
    try:
        text = agent.validate_query(req.query, req_log)
        rows, columns = agent.validate_data(req.data, req.columns, req_log)
    except QueryValidationError as e:
        return _error(400, str(e), req_log)

    try:
        result = await agent.answer(text, rows, columns, req_log)
    except Exception as e:
        log.exception("Query processing failed")
        req_log.add(f"CRITICAL ERROR: {e}")
        return _error(500, "Error processing query", req_log, e)

    return QueryResponse(**result.model_dump(), logs=req_log.entries)


@app.post("/api/summary", response_model=SummaryResponse)
async def summary(req: SummaryRequest):
    req_log = RequestLog()
    try:
        rows, columns = agent.validate_data(req.data, req.columns, req_log)
    except QueryValidationError as e:
        return _error(400, str(e), req_log)

    text = await agent.summarize(rows, columns, req_log)
    return SummaryResponse(summary=text, logs=req_log.entries)

