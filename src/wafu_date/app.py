from __future__ import annotations

import logging
import time
from datetime import date, datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .date_helpers import get_end_date, get_first_date, get_today
from .date_parser import parse_date
from .models import (
    BatchParseRequest,
    BatchParseResponse,
    MonthRangeResponse,
    ParseDateRequest,
    ParseDateResponse,
    ParseDateResult,
)
from .settings import settings

LOG_LEVEL = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger("wafu_date.app")
logger.setLevel(LOG_LEVEL)

ALLOWED_ORIGINS = settings.allowed_origins or ["*"]


app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _uptime_seconds() -> float:
    started_at = getattr(app.state, "started_at", None)
    if not started_at:
        return 0.0
    return max(0.0, (datetime.utcnow() - started_at).total_seconds())


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id
    start_time = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    if settings.enable_request_logging:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = getattr(request.state, "request_id", str(uuid4()))
    logger.exception(
        "Unhandled server error",
        extra={"request_id": request_id, "path": request.url.path},
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "サーバー内部で予期しないエラーが発生しました。",
            "request_id": request_id,
        },
        headers={"X-Request-ID": request_id},
    )


@app.on_event("startup")
async def startup() -> None:
    app.state.started_at = datetime.utcnow()
    app.state.settings = settings


def _parse_one(text: str, today: date) -> ParseDateResult:
    match = parse_date(text, today=today)
    if match is None:
        return ParseDateResult(input=text, success=False)
    return ParseDateResult(
        input=text,
        success=True,
        date_iso=match.value.isoformat(),
        stage=match.stage,
        pattern=match.pattern,
    )


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "uptime_seconds": round(_uptime_seconds(), 3),
        "version": app.version,
    }


@app.get("/health/live")
async def health_live() -> Dict[str, Any]:
    return {"status": "ok", "uptime_seconds": round(_uptime_seconds(), 3)}


@app.get("/health/ready")
async def health_ready() -> Dict[str, Any]:
    return {"status": "ok", "uptime_seconds": round(_uptime_seconds(), 3)}


@app.post("/api/dates/parse", response_model=ParseDateResponse)
async def parse(request: ParseDateRequest) -> ParseDateResponse:
    today = request.today or get_today()
    result = _parse_one(request.text, today)
    return ParseDateResponse(**result.model_dump(), today=today)


@app.get("/api/dates/parse", response_model=ParseDateResponse)
async def parse_query(
    q: str = Query(..., description="解析する日付文字列"),
    today: Optional[date] = Query(default=None, description="基準日 (ISO 日付)"),
) -> ParseDateResponse:
    try:
        request = ParseDateRequest(text=q, today=today)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return await parse(request)


@app.post("/api/dates/parse-batch", response_model=BatchParseResponse)
async def parse_batch(request: BatchParseRequest) -> BatchParseResponse:
    today = request.today or get_today()
    results = [_parse_one(text, today) for text in request.texts]
    return BatchParseResponse(
        results=results,
        total=len(results),
        parsed=sum(1 for result in results if result.success),
        today=today,
        generated_at=datetime.utcnow(),
    )


@app.get("/api/dates/month-range", response_model=MonthRangeResponse)
async def month_range(
    text: str = Query(..., description="解析する日付文字列"),
    today: Optional[date] = Query(default=None, description="基準日 (ISO 日付)"),
) -> MonthRangeResponse:
    try:
        request = ParseDateRequest(text=text, today=today)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    match = parse_date(request.text, today=request.today or get_today())
    if match is None:
        raise HTTPException(status_code=404, detail="日付として解釈できませんでした。")
    return MonthRangeResponse(
        input=request.text,
        date_iso=match.value.isoformat(),
        first_date=get_first_date(match.value.year, match.value.month),
        end_date=get_end_date(match.value),
    )
