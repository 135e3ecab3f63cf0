"""
AI assistant router.

POST /api/analyze-emotion - structured emotion analysis of one text
POST /api/chat            - assistant reply, primed with the last 7 days of logs
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.dependency import get_completion_service, get_current_principal
from app.db.base import get_db
from app.schemas.common import ErrorResponse
from app.schemas.analysis import (
    AnalyzeEmotionRequest,
    ChatRequest,
    ChatResponse,
    EmotionAnalysis,
)
from app.services import narrative
from app.services.completion import CompletionService
from app.services.context import build_chat_context

router = APIRouter(
    prefix="/api",
    tags=["ai"],
    dependencies=[Depends(get_current_principal)],
)

_AI_ERRORS = {
    422: {"model": ErrorResponse, "description": "Validation error (empty text)."},
    503: {"model": ErrorResponse, "description": "AI service unavailable; safe to retry (SERVICE_UNAVAILABLE)."},
}


@router.post(
    "/analyze-emotion",
    response_model=EmotionAnalysis,
    summary="Analyze the emotion in a piece of text",
    responses=_AI_ERRORS,
)
def analyze_emotion(
    payload: AnalyzeEmotionRequest,
    completion: CompletionService = Depends(get_completion_service),
):
    """
    If the model's reply is not the expected JSON object, a fixed fallback
    analysis (`primaryEmotion="unknown"`, `intensity=5`) is returned instead
    of an error. An unreachable AI service is reported as 503.
    """
    return narrative.analyze_emotion(completion, payload.feeling)


@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Chat with the impulse-management assistant",
    responses=_AI_ERRORS,
)
def chat(
    payload: ChatRequest,
    db: Session = Depends(get_db),
    completion: CompletionService = Depends(get_completion_service),
):
    context = build_chat_context(db)
    # Release the read transaction before the blocking completion call.
    db.commit()
    reply = narrative.chat(completion, context, payload.message, payload.history)
    return ChatResponse(reply=reply)
