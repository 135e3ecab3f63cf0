"""
AI feature schemas.

POST /api/analyze-emotion → AnalyzeEmotionRequest → EmotionAnalysis
POST /api/chat            → ChatRequest           → ChatResponse

EmotionAnalysis keeps the camelCase keys the model is asked to return,
so the same class validates the model's JSON and serializes the response.
"""
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator


def _strip_required(v):
    stripped = v.strip() if isinstance(v, str) else v
    if not stripped:
        raise ValueError("must not be empty after stripping whitespace")
    return stripped


class EmotionAnalysis(BaseModel):
    primaryEmotion: str = Field(min_length=1, examples=["anxiety"])
    intensity: int = Field(ge=1, le=10, description="1 (mild) to 10 (overwhelming).")
    triggers: list[str] = Field(default_factory=list)
    copingStrategies: list[str] = Field(default_factory=list)


class AnalyzeEmotionRequest(BaseModel):
    feeling: Annotated[str, Field(
        min_length=1,
        max_length=5_000,
        description="Free-text description of the feeling to analyze.",
        examples=["I keep wanting to check my phone during meetings"],
    )]

    @field_validator("feeling", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        return _strip_required(v)


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: Annotated[str, Field(min_length=1, max_length=5_000)]
    history: list[ChatTurn] = Field(
        default_factory=list,
        description="Earlier turns of this conversation, oldest first.",
    )

    @field_validator("message", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        return _strip_required(v)


class ChatResponse(BaseModel):
    reply: str
