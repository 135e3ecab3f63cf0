"""
Report Assembler: one weekly Report from the last 7 days of logs.

generate_weekly_report(db, completion, now=None) -> Report

  1. window = [now - CONTEXT_WINDOW_DAYS, now]
  2. read logs in the window (inclusive, oldest first)
  3. no logs                  -> InsufficientDataError, nothing written
  4. statistics               -> StatSummary; the read transaction ends here
  5. report context block
  6. narrative from the completion service; ServiceUnavailableError
     propagates and nothing is written
  7. insert Report(week_start, week_end, content) and return it

Every call appends a new row. Reports are not deduplicated per week.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InsufficientDataError
from app.models.report import Report
from app.services.completion import CompletionService
from app.services.context import build_report_context
from app.services.log_store import list_logs_in_window
from app.services.narrative import write_report_narrative
from app.services.report_store import insert_report
from app.services.statistics import StatSummary, summarize

logger = logging.getLogger(__name__)


def report_window(now: Optional[datetime] = None, days: Optional[int] = None) -> tuple[datetime, datetime]:
    end = now or datetime.now()
    days = days if days is not None else settings.CONTEXT_WINDOW_DAYS
    return end - timedelta(days=days), end


def summarize_window(db: Session, start: datetime, end: datetime) -> StatSummary:
    logs = list_logs_in_window(db, start=start, end=end)
    if not logs:
        raise InsufficientDataError(start, end)
    return summarize(logs, start, end)


def generate_weekly_report(
    db: Session,
    completion: CompletionService,
    now: Optional[datetime] = None,
) -> Report:
    start, end = report_window(now)
    summary = summarize_window(db, start, end)
    # End the read transaction so no lock on impulse_logs is held while the
    # completion call blocks.
    db.commit()

    context = build_report_context(summary)
    narrative = write_report_narrative(completion, context)

    report = insert_report(
        db,
        week_start=start.date(),
        week_end=end.date(),
        content=narrative,
    )
    logger.info(
        "Weekly report %s generated for %s..%s (%d impulses, %d%% resisted)",
        report.id, report.week_start, report.week_end,
        summary.total_impulses, summary.resistance_rate,
    )
    return report
