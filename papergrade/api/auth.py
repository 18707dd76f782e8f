"""Authentication routes."""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from papergrade.api.deps import ACCESS_TOKEN_COOKIE, get_current_user
from papergrade.core.schemas.api_models import LoginRequest, SignupRequest, UserResponse
from papergrade.db.models import User
from papergrade.db.session import get_db
from papergrade.services.auth_service import authenticate_user, create_access_token, create_user
from papergrade.settings import get_settings

router = APIRouter()


def _set_session_cookie(response: Response, user: User):
    settings = get_settings()
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=create_access_token(user.id),
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
    )


@router.post("/signup", response_model=UserResponse, status_code=201)
async def signup(payload: SignupRequest, response: Response, db: Session = Depends(get_db)):
    """Create a new user account and log it in."""
    user = create_user(db, payload.email, payload.password, name=payload.name)
    if not user:
        raise HTTPException(status_code=409, detail="An account with this email already exists")
    _set_session_cookie(response, user)
    return user


@router.post("/login", response_model=UserResponse)
async def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    """Check email/password and start a session."""
    user = authenticate_user(db, payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="These credentials do not match our records.")
    _set_session_cookie(response, user)
    return user


@router.post("/logout", status_code=204)
async def logout(response: Response):
    """End the session."""
    response.delete_cookie(ACCESS_TOKEN_COOKIE)


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    """Return the logged-in user."""
    return user
