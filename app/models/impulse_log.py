"""
ImpulseLog: one recorded urge event.

Never updated. Rows are deleted individually or all at once; a bulk
delete restarts the id sequence (see app/services/log_store.py).

`datetime` is the wall-clock time the user supplied, stored without a
timezone. Hour-of-day statistics read it as-is.
"""
import datetime as dt
import enum

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Acted(str, enum.Enum):
    yes = "yes"
    no = "no"


class ImpulseLog(Base):
    __tablename__ = "impulse_logs"
    __table_args__ = (
        CheckConstraint("acted IN ('yes', 'no')", name="ck_impulse_logs_acted"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    datetime: Mapped[dt.datetime] = mapped_column(DateTime(timezone=False), nullable=False, index=True)
    feeling: Mapped[str] = mapped_column(Text, nullable=False)
    acted: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
