"""
Report: AI-written weekly narrative.

Write-once. week_start / week_end are the date parts of the rolling
[now - 7 days, now] window at generation time, not calendar weeks, so
repeated generation produces overlapping rows.
"""
from datetime import datetime, date
from sqlalchemy import Integer, Text, DateTime, Date, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Report(Base):
    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    week_start: Mapped[date] = mapped_column(Date, nullable=False)
    week_end: Mapped[date] = mapped_column(Date, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
