"""
FastAPI dependency providers for the completion service and the caller identity.
"""
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.errors import AuthenticationError
from app.core.security import decode_access_token
from app.services.completion import CompletionService, OpenAICompletionService

bearer = HTTPBearer(auto_error=False)


# One instance per process; the service holds no per-request state.
@lru_cache(maxsize=None)
def _openai_service() -> CompletionService:
    return OpenAICompletionService.from_settings(settings)


def get_completion_service() -> CompletionService:
    return _openai_service()


def get_current_principal(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> str:
    """Username from a valid bearer token."""
    if creds is None or not creds.credentials:
        raise AuthenticationError("Missing bearer token.")
    return decode_access_token(creds.credentials)
