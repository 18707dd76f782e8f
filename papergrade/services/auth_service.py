from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from papergrade.db.models import User
from papergrade.db.repo import UserRepository
from papergrade.settings import get_settings

ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash."""
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        # malformed hash
        return False


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token identifying the user."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({"sub": str(user_id), "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[int]:
    """Return the user id from a valid token, or None."""
    try:
        payload = jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
        return int(payload["sub"])
    except (JWTError, KeyError, ValueError):
        return None


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = UserRepository.get_by_email(db, email.strip().lower())
    if not user:
        return None
    if verify_password(password, user.password_hash):
        return user
    return None


def create_user(db: Session, email: str, password: str, name: str = "") -> Optional[User]:
    """Create a new user account.

    Args:
        db: Database session
        email: User email (must be unique, stored lower-cased)
        password: User password (hashed before storing)
        name: Display name

    Returns:
        User object if created successfully, None if email already exists
    """
    email = email.strip().lower()
    if UserRepository.get_by_email(db, email):
        return None

    try:
        user = UserRepository.create(db, email=email, password_hash=hash_password(password), name=name)
        db.commit()
        db.refresh(user)
        return user
    except IntegrityError:
        db.rollback()
        return None
