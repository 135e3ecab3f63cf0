"""
Log Store: persisted, ordered collection of impulse logs.

Public API
----------
insert_log(db, occurred_at, feeling, acted)            -> ImpulseLog
list_logs(db)                                          -> list[ImpulseLog]   (datetime desc)
list_logs_in_window(db, start, end, newest_first, limit) -> list[ImpulseLog]
get_log(db, log_id)                                    -> ImpulseLog
delete_log(db, log_id)                                 -> None
clear_logs(db)                                         -> None  (restarts ids)

Every write commits on its own; there are no multi-statement transactions.
SQLAlchemy failures are rolled back and re-raised as StorageError.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import FieldValidationError, LogNotFoundError, StorageError
from app.models.impulse_log import Acted, ImpulseLog

logger = logging.getLogger(__name__)


def _as_wall_clock(value: datetime) -> datetime:
    """Drop any UTC offset but keep the supplied wall-clock time."""
    return value.replace(tzinfo=None) if value.tzinfo is not None else value


def _acted_value(acted) -> str:
    value = acted.value if hasattr(acted, "value") else str(acted)
    if value not in (Acted.yes.value, Acted.no.value):
        raise FieldValidationError("acted", "acted must be 'yes' or 'no'")
    return value


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def insert_log(db: Session, occurred_at: datetime, feeling: str, acted) -> ImpulseLog:
    feeling = (feeling or "").strip()
    if not feeling:
        raise FieldValidationError("feeling", "feeling must not be empty")

    log = ImpulseLog(
        datetime=_as_wall_clock(occurred_at),
        feeling=feeling,
        acted=_acted_value(acted),
    )
    try:
        db.add(log)
        db.commit()
        db.refresh(log)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to insert impulse log")
        raise StorageError("insert_log") from exc
    return log


def delete_log(db: Session, log_id: int) -> None:
    log = get_log(db, log_id)
    try:
        db.delete(log)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete impulse log %s", log_id)
        raise StorageError("delete_log") from exc


def clear_logs(db: Session) -> None:
    """Delete every log and restart the id sequence."""
    try:
        if db.get_bind().dialect.name == "postgresql":
            db.execute(text("TRUNCATE TABLE impulse_logs RESTART IDENTITY"))
        else:
            # SQLite reuses max(rowid) + 1, so an empty table starts again at 1.
            db.query(ImpulseLog).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to clear impulse logs")
        raise StorageError("clear_logs") from exc
    logger.info("All impulse logs cleared")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_log(db: Session, log_id: int) -> ImpulseLog:
    try:
        log = db.get(ImpulseLog, log_id)
    except SQLAlchemyError as exc:
        raise StorageError("get_log") from exc
    if log is None:
        raise LogNotFoundError(log_id)
    return log


def list_logs(db: Session) -> list[ImpulseLog]:
    try:
        return (
            db.query(ImpulseLog)
            .order_by(ImpulseLog.datetime.desc(), ImpulseLog.id.desc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise StorageError("list_logs") from exc


def list_logs_in_window(
    db: Session,
    start: datetime,
    end: datetime,
    newest_first: bool = False,
    limit: Optional[int] = None,
) -> list[ImpulseLog]:
    """Logs with start <= datetime <= end, oldest first unless newest_first."""
    q = db.query(ImpulseLog).filter(
        ImpulseLog.datetime >= _as_wall_clock(start),
        ImpulseLog.datetime <= _as_wall_clock(end),
    )
    if newest_first:
        q = q.order_by(ImpulseLog.datetime.desc(), ImpulseLog.id.desc())
    else:
        q = q.order_by(ImpulseLog.datetime.asc(), ImpulseLog.id.asc())
    if limit is not None:
        q = q.limit(limit)
    try:
        return q.all()
    except SQLAlchemyError as exc:
        raise StorageError("list_logs_in_window") from exc
