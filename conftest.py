"""Shared pytest fixtures: in-memory database, fake Gemini service, API client."""
import json
import os

# Keep the module-level engine off disk and the real key out of tests
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from papergrade.api.deps import get_client_factory
from papergrade.core.llm.client import GeminiClientFactory
from papergrade.db.base import Base
from papergrade.db.repo import UserRepository
from papergrade.db.session import get_db
from papergrade.main import app
from papergrade.services.auth_service import hash_password
from papergrade.settings import Settings, get_settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 32


class FakeGemini:
    """Stands in for the generateContent endpoint, one queued reply per request.

    A queued dict is returned as JSON text, a str as raw text, an int as an
    error status, and an exception is raised as a transport failure.
    """

    def __init__(self):
        self.replies = []
        self.requests = []

    def reply(self, *items):
        self.replies.extend(items)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.replies.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, int):
            return httpx.Response(item, json={"error": {"code": item}})
        text = item if isinstance(item, str) else json.dumps(item)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def prompt(self, index: int) -> str:
        """Prompt text sent with the index-th request."""
        body = json.loads(self.requests[index].content)
        return body["contents"][0]["parts"][0]["text"]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def user(db_session):
    user = UserRepository.create(db_session, email="teacher@example.com",
                                 password_hash=hash_password("correct-horse"), name="Teacher")
    db_session.commit()
    return user


@pytest.fixture
def gemini():
    return FakeGemini()


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", database_url="sqlite://")


@pytest.fixture
def client(session_factory, settings, gemini):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_client_factory] = lambda: GeminiClientFactory(settings, transport=gemini.transport)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client):
    response = client.post("/api/signup", json={
        "email": "teacher@example.com",
        "password": "correct-horse",
        "name": "Teacher",
    })
    assert response.status_code == 201
    return client
