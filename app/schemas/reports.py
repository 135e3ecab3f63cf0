"""
Report and statistics schemas.

GET  /api/reports           → list[ReportResponse]
GET  /api/reports/{id}      → ReportResponse
POST /api/reports/generate  → ReportResponse
GET  /api/stats             → StatsResponse
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    week_start: date = Field(description="Window start (generation time minus 7 days).")
    week_end: date = Field(description="Window end (generation time).")
    content: str = Field(description="AI-written weekly narrative.")
    created_at: datetime


class StatsResponse(BaseModel):
    """Statistics for a rolling window ending now."""
    window_start: Optional[datetime] = None
    window_end: Optional[datetime] = None
    total_impulses: int
    acted_impulses: int
    resisted_impulses: int
    resistance_rate: int = Field(ge=0, le=100, description="Percent of impulses resisted.")
    peak_hour: int = Field(ge=0, le=23)
    top_emotion_words: list[str]
