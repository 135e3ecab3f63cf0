"""
Context Assembler: bounded plain-text blocks injected into AI prompts.

Chat context    last CONTEXT_WINDOW_DAYS days, newest first, at most
                CHAT_CONTEXT_LIMIT lines of `<datetime>: <feeling> (行动: 是|否)`.
Report context  the statistics of the report window as a short labelled block.

Both are plain strings, pasted verbatim into a system / user message.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.services.log_store import list_logs_in_window
from app.services.statistics import StatSummary, enum_value

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
DATE_FORMAT = "%Y-%m-%d"

_ACTED_LABEL = {"yes": "是", "no": "否"}


def render_chat_line(log) -> str:
    label = _ACTED_LABEL.get(enum_value(log.acted), "否")
    return f"{log.datetime.strftime(TIMESTAMP_FORMAT)}: {log.feeling} (行动: {label})"


def build_chat_context(
    db: Session,
    now: Optional[datetime] = None,
    days: Optional[int] = None,
    limit: Optional[int] = None,
) -> str:
    now = now or datetime.now()
    days = days if days is not None else settings.CONTEXT_WINDOW_DAYS
    limit = limit if limit is not None else settings.CHAT_CONTEXT_LIMIT

    logs = list_logs_in_window(
        db,
        start=now - timedelta(days=days),
        end=now,
        newest_first=True,
        limit=limit,
    )
    return "\n".join(render_chat_line(log) for log in logs)


def build_report_context(summary: StatSummary) -> str:
    lines = []
    if summary.window_start is not None and summary.window_end is not None:
        lines.append(
            f"冲动日志数据（{summary.window_start.strftime(DATE_FORMAT)} - "
            f"{summary.window_end.strftime(DATE_FORMAT)}）:"
        )
    else:
        lines.append("冲动日志数据:")
    lines.extend([
        f"- 总冲动次数: {summary.total_impulses}",
        f"- 行动次数: {summary.acted_impulses}",
        f"- 抵抗次数: {summary.resisted_impulses}",
        f"- 抵抗成功率: {summary.resistance_rate}%",
        f"- 高发时段: {summary.peak_hour:02d}:00",
        f"- 主要情绪: {', '.join(summary.top_emotion_words)}",
    ])
    return "\n".join(lines)
