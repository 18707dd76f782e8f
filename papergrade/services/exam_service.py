"""Exam service for creating and reading answer keys."""
from typing import List, Optional
from sqlalchemy.orm import Session
from papergrade.core.errors import PersistenceError
from papergrade.core.schemas.api_models import ExamCreateRequest
from papergrade.db.models import Exam, User
from papergrade.db.repo import ExamRepository, QuestionRepository
from papergrade.db.session import UnitOfWork
import logging

logger = logging.getLogger(__name__)


class ExamService:
    """Service for managing exams and their questions."""

    def create_exam(self, db: Session, user: User, payload: ExamCreateRequest) -> Exam:
        """Create an exam and its questions in one transaction.

        Question numbers follow the order of payload.questions, starting at 1.

        Raises:
            PersistenceError: If anything fails; nothing is written in that case.
        """
        user_id = user.id
        try:
            with UnitOfWork(db):
                exam = ExamRepository.create(
                    db,
                    user_id=user_id,
                    title=payload.title,
                    subject=payload.subject,
                    total_marks=payload.total_marks,
                )
                for number, spec in enumerate(payload.questions, start=1):
                    QuestionRepository.create(
                        db,
                        exam_id=exam.id,
                        question_number=number,
                        question_type=spec.type,
                        correct_answer=spec.answer,
                        marks=spec.marks,
                    )
        except Exception as e:
            logger.exception(f"Error saving exam '{payload.title}' for user {user_id}")
            raise PersistenceError("An error occurred while saving the exam.") from e

        logger.info(f"Created exam {exam.id} with {len(payload.questions)} question(s) for user {user_id}")
        return ExamRepository.get_for_user(db, exam.id, user_id)

    def list_exams(self, db: Session, user: User) -> List[Exam]:
        """Get the user's exams with questions."""
        return ExamRepository.list_for_user(db, user.id)

    def get_exam(self, db: Session, user: User, exam_id: int) -> Optional[Exam]:
        """Get one of the user's exams with questions, or None."""
        return ExamRepository.get_for_user(db, exam_id, user.id)
