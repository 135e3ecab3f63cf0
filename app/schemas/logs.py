"""
Impulse log request / response schemas.

POST /api/logs  → LogCreateRequest → LogResponse
GET  /api/logs  → list[LogResponse]
"""
import datetime as dt
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.impulse_log import Acted


class LogCreateRequest(BaseModel):
    """A single impulse event as submitted by the user."""
    model_config = ConfigDict(use_enum_values=True)

    datetime: dt.datetime = Field(
        description=(
            "When the urge happened. Wall-clock time; any UTC offset is dropped "
            "without conversion."
        ),
        examples=["2026-10-19T08:30:00"],
    )
    feeling: Annotated[str, Field(
        min_length=1,
        max_length=5_000,
        description="What was felt. Stripped of leading/trailing whitespace.",
        examples=["anxious about deadline"],
    )]
    acted: Acted = Field(description='"yes" if the urge was acted on, otherwise "no".')

    @field_validator("feeling", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("feeling must not be empty after stripping whitespace")
        return stripped


class LogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    datetime: dt.datetime
    feeling: str
    acted: str
    created_at: dt.datetime
