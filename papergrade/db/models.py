"""Database models."""
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from papergrade.db.base import Base


class User(Base):
    """Teacher account that owns exams and submissions."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    exams = relationship("Exam", back_populates="user")
    exam_submissions = relationship("ExamSubmission", back_populates="user")


class Exam(Base):
    """An answer key: ordered questions with correct answers and marks."""
    __tablename__ = "exams"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=True)
    total_marks = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="exams")
    questions = relationship("Question", back_populates="exam", order_by="Question.question_number")
    submissions = relationship("ExamSubmission", back_populates="exam")


class Question(Base):
    """One answer-key entry."""
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    question_number = Column(Integer, nullable=False)  # 1-based position in the key
    question_type = Column(String(20), nullable=False)  # "MCQ", "TF" or "SHORT"
    correct_answer = Column(Text, nullable=False)
    marks = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    exam = relationship("Exam", back_populates="questions")

    __table_args__ = (
        UniqueConstraint("exam_id", "question_number", name="uq_exam_question_number"),
    )


class ExamSubmission(Base):
    """One student's graded attempt at an exam."""
    __tablename__ = "exam_submissions"

    id = Column(Integer, primary_key=True, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    student_name = Column(String(255), nullable=False)
    final_score = Column(Float, nullable=False)
    total_possible_marks = Column(Integer, nullable=False)  # copied at submission time
    ai_raw_grades = Column(JSON, nullable=True)  # grade list as posted, kept for audit
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    exam = relationship("Exam", back_populates="submissions")
    user = relationship("User", back_populates="exam_submissions")
    student_answers = relationship("StudentAnswer", back_populates="exam_submission", order_by="StudentAnswer.id")


class StudentAnswer(Base):
    """A student's answer to one question, with the accepted score."""
    __tablename__ = "student_answers"

    id = Column(Integer, primary_key=True, index=True)
    exam_submission_id = Column(Integer, ForeignKey("exam_submissions.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    student_answer = Column(Text, nullable=False)
    final_score = Column(Float, nullable=False)

    exam_submission = relationship("ExamSubmission", back_populates="student_answers")
    question = relationship("Question")
