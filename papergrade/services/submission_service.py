"""Submission service for storing and reading graded papers."""
from typing import Optional
from sqlalchemy.orm import Session
from papergrade.core.errors import PersistenceError
from papergrade.core.schemas.api_models import SubmissionCreateRequest
from papergrade.db.models import Exam, ExamSubmission, User
from papergrade.db.repo import QuestionRepository, StudentAnswerRepository, SubmissionRepository
from papergrade.db.session import UnitOfWork
import logging

logger = logging.getLogger(__name__)


class SubmissionService:
    """Service for persisting reviewed grades."""

    def store_submission(self, db: Session, user: User, exam: Exam,
                         payload: SubmissionCreateRequest) -> ExamSubmission:
        """Store a submission and one answer per grade that matches a question.

        Grades whose question_number has no question on the exam are skipped.
        The full grade list is kept on the submission as posted.

        Raises:
            PersistenceError: If anything fails; nothing is written in that case.
        """
        exam_id, user_id = exam.id, user.id
        raw_grades = [grade.model_dump() for grade in payload.grades]

        try:
            question_ids = {q.question_number: q.id for q in QuestionRepository.get_by_exam(db, exam_id)}

            with UnitOfWork(db):
                submission = SubmissionRepository.create(
                    db,
                    exam_id=exam_id,
                    user_id=user_id,
                    student_name=payload.student_name,
                    final_score=payload.final_score,
                    total_possible_marks=payload.total_possible_marks,
                    ai_raw_grades=raw_grades,
                )

                stored = 0
                for grade in payload.grades:
                    question_id = question_ids.get(grade.question_number)
                    if question_id is None:
                        logger.info(
                            f"Exam {exam_id} has no question {grade.question_number}; grade not stored"
                        )
                        continue
                    StudentAnswerRepository.create(
                        db,
                        exam_submission_id=submission.id,
                        question_id=question_id,
                        student_answer=grade.student_answer,
                        final_score=grade.score,
                    )
                    stored += 1
        except Exception as e:
            logger.exception(f"Error saving submission for exam {exam_id}")
            raise PersistenceError("An error occurred while saving the final grade.") from e

        logger.info(f"Stored submission {submission.id} for exam {exam_id} with {stored} answer(s)")
        return submission

    def get_submission(self, db: Session, user: User, submission_id: int) -> Optional[ExamSubmission]:
        """Get one of the user's submissions with its answers, or None."""
        return SubmissionRepository.get_for_user(db, submission_id, user.id)
