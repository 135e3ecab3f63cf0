"""
Report Store: write-once weekly reports.

insert_report(db, week_start, week_end, content) -> Report
list_reports(db)                                 -> list[Report]  (created_at desc)
get_report(db, report_id)                        -> Report
"""
from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ReportNotFoundError, StorageError
from app.models.report import Report

logger = logging.getLogger(__name__)


def insert_report(db: Session, week_start: date, week_end: date, content: str) -> Report:
    report = Report(week_start=week_start, week_end=week_end, content=content)
    try:
        db.add(report)
        db.commit()
        db.refresh(report)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to insert report for %s..%s", week_start, week_end)
        raise StorageError("insert_report") from exc
    return report


def list_reports(db: Session) -> list[Report]:
    try:
        return (
            db.query(Report)
            .order_by(Report.created_at.desc(), Report.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise StorageError("list_reports") from exc


def get_report(db: Session, report_id: int) -> Report:
    try:
        report = db.get(Report, report_id)
    except SQLAlchemyError as exc:
        raise StorageError("get_report") from exc
    if report is None:
        raise ReportNotFoundError(report_id)
    return report
