"""Database engine and declarative base."""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base

from papergrade.settings import get_settings


def build_engine(database_url: str, **kwargs):
    """Create an engine; SQLite connections are shared across request threads."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(database_url, **kwargs)


engine = build_engine(get_settings().database_url)

Base = declarative_base()
