"""
Impulse log router.

GET    /api/logs        - all logs, newest first
POST   /api/logs        - record one impulse
DELETE /api/logs/{id}   - delete one log
DELETE /api/logs        - delete every log (ids restart at 1)
GET    /api/stats       - statistics for the last N days
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.dependency import get_current_principal
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.logs import LogCreateRequest, LogResponse
from app.schemas.reports import StatsResponse
from app.services import log_store
from app.services.report_assembler import report_window, summarize_window

router = APIRouter(
    prefix="/api",
    tags=["logs"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("/logs", response_model=list[LogResponse], summary="List impulse logs (newest first)")
def list_logs(db: Session = Depends(get_db)):
    return log_store.list_logs(db)


@router.post(
    "/logs",
    response_model=LogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an impulse",
    responses={422: {"description": "Validation error (e.g. empty feeling)."}},
)
def submit_log(payload: LogCreateRequest, db: Session = Depends(get_db)):
    return log_store.insert_log(
        db,
        occurred_at=payload.datetime,
        feeling=payload.feeling,
        acted=payload.acted,
    )


@router.delete(
    "/logs/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete one impulse log",
    responses={404: {"model": ErrorResponse, "description": "Unknown log id."}},
)
def delete_log(log_id: int, db: Session = Depends(get_db)):
    log_store.delete_log(db, log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/logs",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete all impulse logs",
)
def clear_logs(db: Session = Depends(get_db)):
    log_store.clear_logs(db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Trend statistics for a rolling window",
    responses={422: {"model": ErrorResponse, "description": "No logs in the window (INSUFFICIENT_DATA)."}},
)
def stats(
    days: Optional[int] = Query(
        default=None,
        ge=1,
        le=365,
        description="Window length in days, ending now. Defaults to CONTEXT_WINDOW_DAYS.",
    ),
    db: Session = Depends(get_db),
):
    """
    Same numbers the weekly report is built from: totals, resistance rate,
    busiest hour and the three most frequent words in `feeling`.
    """
    start, end = report_window(days=days or settings.CONTEXT_WINDOW_DAYS)
    summary = summarize_window(db, start, end)
    return StatsResponse(**vars(summary))
