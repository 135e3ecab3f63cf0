"""
AI Narrative Generator: the three prompt shapes sent to the completion service.

Public API
----------
analyze_emotion(completion, text)                   -> EmotionAnalysis
chat(completion, context, message, history)         -> str
write_report_narrative(completion, report_context)  -> str

Failure policy
--------------
- ServiceUnavailableError from the completion service always propagates.
- A reply to analyze_emotion that is not the expected JSON object is NOT an
  error: parse_emotion_analysis tags it FallbackUsed and the caller gets the
  fixed fallback analysis. That recovery lives here and nowhere else.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import FieldValidationError, ServiceUnavailableError
from app.schemas.analysis import EmotionAnalysis
from app.services import prompts
from app.services.completion import CompletionService

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


# ---------------------------------------------------------------------------
# Emotion analysis: tagged parse result
# ---------------------------------------------------------------------------

def fallback_analysis() -> EmotionAnalysis:
    return EmotionAnalysis(
        primaryEmotion="unknown",
        intensity=5,
        triggers=["undetermined"],
        copingStrategies=["breathe", "seek support"],
    )


@dataclass(frozen=True)
class Parsed:
    analysis: EmotionAnalysis


@dataclass(frozen=True)
class FallbackUsed:
    analysis: EmotionAnalysis
    reason: str


AnalysisOutcome = Union[Parsed, FallbackUsed]


def parse_emotion_analysis(raw: Optional[str]) -> AnalysisOutcome:
    text = (raw or "").strip()
    fenced = _FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        data: Any = json.loads(text)
    except ValueError:
        return FallbackUsed(fallback_analysis(), reason="not_json")
    if not isinstance(data, dict):
        return FallbackUsed(fallback_analysis(), reason="not_object")
    try:
        return Parsed(EmotionAnalysis.model_validate(data))
    except ValidationError:
        return FallbackUsed(fallback_analysis(), reason="wrong_shape")


def analyze_emotion(completion: CompletionService, text: Optional[str]) -> EmotionAnalysis:
    feeling = (text or "").strip()
    if not feeling:
        raise FieldValidationError("feeling", "feeling must not be empty")

    raw = completion.complete(
        prompts.EMOTION_ANALYSIS_PROMPT,
        [{"role": "user", "content": feeling}],
        max_tokens=settings.ANALYSIS_MAX_TOKENS,
        temperature=settings.AI_TEMPERATURE,
    )

    outcome = parse_emotion_analysis(raw)
    if isinstance(outcome, FallbackUsed):
        logger.warning("Emotion analysis reply unusable (%s); returning fallback", outcome.reason)
    return outcome.analysis


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------

def _turn_to_message(turn: Any) -> dict[str, str]:
    if isinstance(turn, dict):
        return {"role": turn["role"], "content": turn["content"]}
    return {"role": turn.role, "content": turn.content}


def build_chat_system_prompt(context: str) -> str:
    return prompts.CHAT_PERSONA_PROMPT.format(context=context or prompts.CHAT_EMPTY_CONTEXT)


def chat(
    completion: CompletionService,
    context: str,
    message: Optional[str],
    history: Optional[Iterable[Any]] = None,
) -> str:
    message = (message or "").strip()
    if not message:
        raise FieldValidationError("message", "message must not be empty")

    conversation = [_turn_to_message(t) for t in (history or [])]
    conversation.append({"role": "user", "content": message})

    reply = completion.complete(
        build_chat_system_prompt(context),
        conversation,
        max_tokens=settings.CHAT_MAX_TOKENS,
        temperature=settings.AI_TEMPERATURE,
    )
    if not reply or not reply.strip():
        return prompts.CHAT_APOLOGY
    return reply


# ---------------------------------------------------------------------------
# Weekly report prose
# ---------------------------------------------------------------------------

def write_report_narrative(completion: CompletionService, report_context: str) -> str:
    narrative = completion.complete(
        prompts.WEEKLY_REPORT_PROMPT,
        [{"role": "user", "content": report_context}],
        max_tokens=settings.REPORT_MAX_TOKENS,
        temperature=settings.AI_TEMPERATURE,
    )
    if not narrative or not narrative.strip():
        # An empty report is never persisted.
        raise ServiceUnavailableError(reason="empty_completion")
    return narrative
