"""Database repository for CRUD operations.

Create methods add and flush but never commit; the caller's UnitOfWork owns
the transaction.
"""
from sqlalchemy.orm import Session, selectinload
from typing import Optional, List
from papergrade.db.models import User, Exam, Question, ExamSubmission, StudentAnswer


class UserRepository:
    """Repository for user operations."""

    @staticmethod
    def get(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email."""
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def create(db: Session, email: str, password_hash: str, name: str = "") -> User:
        """Create a new user."""
        user = User(email=email, password_hash=password_hash, name=name)
        db.add(user)
        db.flush()
        return user


class ExamRepository:
    """Repository for exam operations."""

    @staticmethod
    def create(db: Session, user_id: int, title: str, subject: Optional[str], total_marks: int) -> Exam:
        """Create a new exam."""
        exam = Exam(user_id=user_id, title=title, subject=subject, total_marks=total_marks)
        db.add(exam)
        db.flush()
        return exam

    @staticmethod
    def get_for_user(db: Session, exam_id: int, user_id: int) -> Optional[Exam]:
        """Get an exam owned by the user, with its questions loaded."""
        return (
            db.query(Exam)
            .options(selectinload(Exam.questions))
            .filter(Exam.id == exam_id, Exam.user_id == user_id)
            .first()
        )

    @staticmethod
    def list_for_user(db: Session, user_id: int) -> List[Exam]:
        """Get all of a user's exams, newest first."""
        return (
            db.query(Exam)
            .options(selectinload(Exam.questions))
            .filter(Exam.user_id == user_id)
            .order_by(Exam.created_at.desc(), Exam.id.desc())
            .all()
        )


class QuestionRepository:
    """Repository for question operations."""

    @staticmethod
    def create(db: Session, exam_id: int, question_number: int, question_type: str,
               correct_answer: str, marks: int) -> Question:
        """Create a new question."""
        question = Question(
            exam_id=exam_id,
            question_number=question_number,
            question_type=question_type,
            correct_answer=correct_answer,
            marks=marks,
        )
        db.add(question)
        db.flush()
        return question

    @staticmethod
    def get_by_exam(db: Session, exam_id: int) -> List[Question]:
        """Get all questions for an exam."""
        return db.query(Question).filter(Question.exam_id == exam_id).order_by(Question.question_number).all()


class SubmissionRepository:
    """Repository for exam submission operations."""

    @staticmethod
    def create(db: Session, exam_id: int, user_id: int, student_name: str, final_score: float,
               total_possible_marks: int, ai_raw_grades: list) -> ExamSubmission:
        """Create a new submission."""
        submission = ExamSubmission(
            exam_id=exam_id,
            user_id=user_id,
            student_name=student_name,
            final_score=final_score,
            total_possible_marks=total_possible_marks,
            ai_raw_grades=ai_raw_grades,
        )
        db.add(submission)
        db.flush()
        return submission

    @staticmethod
    def get_for_user(db: Session, submission_id: int, user_id: int) -> Optional[ExamSubmission]:
        """Get a submission owned by the user, with its answers loaded."""
        return (
            db.query(ExamSubmission)
            .options(selectinload(ExamSubmission.student_answers).selectinload(StudentAnswer.question))
            .filter(ExamSubmission.id == submission_id, ExamSubmission.user_id == user_id)
            .first()
        )


class StudentAnswerRepository:
    """Repository for student answer operations."""

    @staticmethod
    def create(db: Session, exam_submission_id: int, question_id: int, student_answer: str,
               final_score: float) -> StudentAnswer:
        """Create a new student answer."""
        answer = StudentAnswer(
            exam_submission_id=exam_submission_id,
            question_id=question_id,
            student_answer=student_answer,
            final_score=final_score,
        )
        db.add(answer)
        db.flush()
        return answer
