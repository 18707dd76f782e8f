"""Pydantic schemas for what goes into and comes out of the grading pipeline."""
from pydantic import BaseModel, BeforeValidator, Field, field_validator
from typing import Annotated, Any, List

UNKNOWN_STUDENT = "Unknown Student"
MISSING_ANSWER = "N/A"
DEFAULT_QUESTION_TYPE = "SHORT"


def _is_number(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def text_or(default: str) -> BeforeValidator:
    """Accept non-blank text or a number (as text); anything else becomes the default."""
    def coerce(value: Any) -> str:
        if _is_number(value):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value
        return default
    return BeforeValidator(coerce)


def _number_or_zero(value: Any) -> float:
    return value if _is_number(value) else 0


class PageImage(BaseModel):
    """One uploaded page: raw bytes plus declared media type."""
    content: bytes
    mime_type: str
    filename: str = ""


class ScannedQuestion(BaseModel):
    """One answer-key entry read off a page."""
    answer: Annotated[str, text_or("")] = Field("", description="The correct answer as written on the key")
    type: Annotated[str, text_or(DEFAULT_QUESTION_TYPE)] = Field(DEFAULT_QUESTION_TYPE, description="MCQ, TF or SHORT")


class ScanPage(BaseModel):
    """Model output for one answer-key page."""
    questions: List[ScannedQuestion]

    @field_validator("questions", mode="before")
    @classmethod
    def drop_stray_items(cls, value):
        if isinstance(value, list):
            return [item for item in value if isinstance(item, dict)]
        return value


class PageGrade(BaseModel):
    """One grade as the model reports it; its own question number is not trusted."""
    student_answer: Annotated[str, text_or(MISSING_ANSWER)] = MISSING_ANSWER
    score: Annotated[float, BeforeValidator(_number_or_zero)] = 0


class GradePage(BaseModel):
    """Model output for one page of a student's paper."""
    student_name: Annotated[str, text_or(UNKNOWN_STUDENT)] = UNKNOWN_STUDENT
    grades: List[PageGrade] = Field(default_factory=list)

    @field_validator("grades", mode="before")
    @classmethod
    def keep_every_position(cls, value):
        if not isinstance(value, list):
            return []
        return [item if isinstance(item, dict) else {} for item in value]


class GradeItem(BaseModel):
    """One consolidated grade, numbered by position across all pages."""
    question_number: int = Field(..., ge=1)
    student_answer: str
    score: float = 0


class GradedSubmission(BaseModel):
    """Consolidated grading result for one multi-page paper."""
    student_name: str
    grades: List[GradeItem] = Field(default_factory=list)
