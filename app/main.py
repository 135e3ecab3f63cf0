import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy import text

from app.db.base import SessionLocal, get_db
from app.core.config import settings
from app.core.logging import configure_logging
from app.routers import auth as auth_router
from app.routers import logs as logs_router
from app.routers import analysis as analysis_router
from app.routers import reports as reports_router
from app.services.auth import ensure_default_user
from app.core.errors import (
    JournalException,
    journal_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = SessionLocal()
    try:
        ensure_default_user(db)
    except (SQLAlchemyError, JournalException):
        # Schema not migrated yet or DB down; /health/db reports it.
        logger.exception("Default user seeding failed")
    finally:
        db.close()
    yield


app = FastAPI(
    title="Impulse Journal API",
    description=(
        "**Impulse journal backend**\n\n"
        "Log impulsive urges, review trend statistics, ask for an AI emotion "
        "analysis, chat with an assistant that knows your last 7 days, and "
        "generate weekly AI-written reports.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(JournalException, journal_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(auth_router.router)
app.include_router(logs_router.router)
app.include_router(analysis_router.router)
app.include_router(reports_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health():
    """Liveness probe; does not touch the database."""
    return {"status": "ok", "env": settings.APP_ENV}


@app.get("/health/db", tags=["health"], summary="Database health check")
def health_db(db: Session = Depends(get_db)):
    """
    Returns `{"status": "ok", "db": "ok"}` when the database is reachable,
    HTTP 503 otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Database health check failed", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": "unreachable"},
        )
    return {"status": "ok", "db": "ok"}
