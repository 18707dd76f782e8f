"""Shared FastAPI dependencies."""
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from papergrade.core.llm.client import GeminiClientFactory
from papergrade.db.models import User
from papergrade.db.repo import UserRepository
from papergrade.db.session import get_db
from papergrade.services.auth_service import decode_access_token
from papergrade.settings import Settings, get_settings

ACCESS_TOKEN_COOKIE = "access_token"


def get_client_factory(settings: Settings = Depends(get_settings)) -> GeminiClientFactory:
    """Gemini client factory built from settings."""
    return GeminiClientFactory(settings)


def _token_from_request(request: Request):
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip()
    return None


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the logged-in user or fail with 401."""
    token = _token_from_request(request)
    user_id = decode_access_token(token) if token else None
    user = UserRepository.get(db, user_id) if user_id is not None else None
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
