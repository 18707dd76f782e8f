"""Pydantic schemas for API request/response models."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from papergrade.core.schemas.llm_contracts import GradedSubmission, ScannedQuestion


class SignupRequest(BaseModel):
    """Account creation request."""
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8)
    name: str = Field("", max_length=255)


class LoginRequest(BaseModel):
    """Login request model."""
    email: str
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str


class QuestionSpec(BaseModel):
    """One answer-key entry as submitted when creating an exam."""
    answer: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    marks: int = Field(..., ge=1)


class ExamCreateRequest(BaseModel):
    """Exam creation request; question order defines question numbers."""
    title: str = Field(..., min_length=1, max_length=255)
    subject: Optional[str] = Field(None, max_length=255)
    total_marks: int
    questions: List[QuestionSpec] = Field(..., min_length=1)


class QuestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    exam_id: int
    question_number: int
    question_type: str
    correct_answer: str
    marks: int


class ExamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    subject: Optional[str] = None
    total_marks: int
    created_at: Optional[datetime] = None
    questions: List[QuestionResponse] = Field(default_factory=list)


class ScanResponse(BaseModel):
    """Consolidated answer key read from the uploaded images."""
    questions: List[ScannedQuestion]


class ProcessSubmissionResponse(BaseModel):
    """AI grades for review, alongside the stored answer key."""
    ai_results: GradedSubmission
    answer_key: List[QuestionResponse]


class GradeInput(BaseModel):
    """One reviewed grade posted for storage."""
    question_number: int
    student_answer: str = Field(..., min_length=1)
    score: float


class SubmissionCreateRequest(BaseModel):
    """Final, reviewed grades for one student's paper."""
    exam_id: int
    student_name: str = Field(..., min_length=1, max_length=255)
    final_score: float
    total_possible_marks: int
    grades: List[GradeInput] = Field(..., min_length=1)


class SubmissionCreatedResponse(BaseModel):
    message: str
    submission_id: int


class StudentAnswerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: int
    student_answer: str
    final_score: float


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    exam_id: int
    student_name: str
    final_score: float
    total_possible_marks: int
    ai_raw_grades: Optional[list] = None
    created_at: Optional[datetime] = None
    student_answers: List[StudentAnswerResponse] = Field(default_factory=list)
