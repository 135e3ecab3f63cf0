"""
Login against the users table and default-account seeding.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationError, StorageError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


def ensure_default_user(db: Session) -> bool:
    """Create DEFAULT_USERNAME if it does not exist. Returns True when a user was created."""
    username = settings.DEFAULT_USERNAME
    if db.query(User.id).filter(User.username == username).first() is not None:
        return False
    db.add(User(username=username, password_hash=hash_password(settings.DEFAULT_PASSWORD)))
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("ensure_default_user") from exc
    logger.info("Default user created: %s", username)
    return True


def login(db: Session, username: str, password: str) -> str:
    """Return a bearer token for valid credentials."""
    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError as exc:
        raise StorageError("login") from exc
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid username or password.")
    return create_access_token(user.username)
