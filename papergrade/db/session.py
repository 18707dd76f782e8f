"""Session factory, request-scoped sessions and the unit of work."""
import logging

from sqlalchemy.orm import Session, sessionmaker

from papergrade.db.base import engine

logger = logging.getLogger(__name__)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Database session dependency for FastAPI.
    Yields a session and closes it after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class UnitOfWork:
    """All-or-nothing scope for a multi-row write.

    Used as a context manager it commits on a clean exit and rolls back
    (then re-raises) if the block raises:

        with UnitOfWork(db):
            ExamRepository.create(db, ...)
            QuestionRepository.create(db, ...)
    """

    def __init__(self, db: Session):
        self.db = db

    def begin(self) -> "UnitOfWork":
        # Finish whatever read transaction the session auto-began so the
        # writes below start from a clean slate.
        if self.db.in_transaction():
            self.db.commit()
        self.db.begin()
        return self

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def __enter__(self) -> "UnitOfWork":
        return self.begin()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.commit()
        else:
            logger.debug(f"Rolling back unit of work after {exc_type.__name__}")
            self.rollback()
        return False
