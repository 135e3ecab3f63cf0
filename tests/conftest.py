"""
Shared pytest fixtures.

Uses a file-backed SQLite database so no Postgres is required for tests.
The completion service is replaced by FakeCompletionService; no test talks
to a real AI endpoint.
"""
import os

os.environ["DATABASE_URL"] = "sqlite:///./test_impulse_journal.db"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DEFAULT_USERNAME", "admin")
os.environ.setdefault("DEFAULT_PASSWORD", "admin123")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")

import pytest
from fastapi.testclient import TestClient

from app.core.dependency import get_completion_service, get_current_principal
from app.core.errors import ServiceUnavailableError
from app.db.base import Base, SessionLocal, engine, get_db
from app.main import app
from app.models.impulse_log import ImpulseLog
from app.models.report import Report


class FakeCompletionService:
    """Records every call; replies with `reply` or raises when `fail` is set."""

    model = "fake-model"

    def __init__(self, reply: str = "ok", fail: bool = False):
        self.reply = reply
        self.fail = fail
        self.calls: list[dict] = []

    def complete(self, system_prompt, conversation, *, max_tokens, temperature, model=None):
        self.calls.append({
            "system_prompt": system_prompt,
            "conversation": list(conversation),
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.fail:
            raise ServiceUnavailableError(reason="APIConnectionError")
        return self.reply


class TransactionRecordingCompletion(FakeCompletionService):
    """Notes whether `db` has an open transaction each time complete() runs."""

    def __init__(self, db, reply: str = "ok"):
        super().__init__(reply=reply)
        self.db = db
        self.in_transaction: list[bool] = []

    def complete(self, system_prompt, conversation, *, max_tokens, temperature, model=None):
        self.in_transaction.append(self.db.in_transaction())
        return super().complete(
            system_prompt, conversation, max_tokens=max_tokens, temperature=temperature, model=model
        )


def override_get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    """Every test starts with no logs and no reports (users are kept)."""
    db = SessionLocal()
    try:
        db.query(ImpulseLog).delete()
        db.query(Report).delete()
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def fake_completion():
    return FakeCompletionService()


@pytest.fixture()
def anon_client(fake_completion):
    """Client without an authenticated principal; routes enforce bearer tokens."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_service] = lambda: fake_completion
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def client(anon_client):
    app.dependency_overrides[get_current_principal] = lambda: "tester"
    yield anon_client
