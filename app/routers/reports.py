"""
Weekly report router.

GET  /api/reports            - all reports, newest first
GET  /api/reports/{id}       - single report
POST /api/reports/generate   - build a report from the last 7 days
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.dependency import get_completion_service, get_current_principal
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.reports import ReportResponse
from app.services import report_store
from app.services.completion import CompletionService
from app.services.report_assembler import generate_weekly_report

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[ReportResponse], summary="List reports (newest first)")
def list_reports(db: Session = Depends(get_db)):
    return report_store.list_reports(db)


@router.post(
    "/generate",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate a weekly report",
    responses={
        201: {"description": "Report generated and stored."},
        422: {"model": ErrorResponse, "description": "No logs in the last 7 days (INSUFFICIENT_DATA)."},
        503: {"model": ErrorResponse, "description": "AI service unavailable; nothing was stored."},
    },
)
def generate_report(
    db: Session = Depends(get_db),
    completion: CompletionService = Depends(get_completion_service),
):
    """
    Summarize the last 7 days (rolling, not calendar-aligned) and have the
    AI write a four-part narrative: pattern analysis, progress and challenges,
    concrete suggestions, and a goal for next week.

    Every call stores a new report, even when windows overlap.
    Intended to be hit weekly by an external scheduler.
    """
    return generate_weekly_report(db, completion)


@router.get(
    "/{report_id}",
    response_model=ReportResponse,
    summary="Get one report",
    responses={404: {"model": ErrorResponse, "description": "Unknown report id."}},
)
def get_report(report_id: int, db: Session = Depends(get_db)):
    return report_store.get_report(db, report_id)
