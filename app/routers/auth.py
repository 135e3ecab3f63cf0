"""
POST /api/login - exchange username / password for a bearer token.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.common import ErrorResponse
from app.services.auth import login as login_user

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    responses={401: {"model": ErrorResponse, "description": "Wrong username or password."}},
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    token = login_user(db, payload.username, payload.password)
    return LoginResponse(token=token, username=payload.username)
