"""Exam routes."""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from papergrade.api.deps import get_current_user
from papergrade.core.errors import PersistenceError
from papergrade.core.schemas.api_models import ExamCreateRequest, ExamResponse
from papergrade.db.models import User
from papergrade.db.session import get_db
from papergrade.services.exam_service import ExamService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/exams", response_model=ExamResponse, status_code=201)
async def create_exam(
    payload: ExamCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an exam and its answer key."""
    try:
        return ExamService().create_exam(db, user, payload)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/exams", response_model=List[ExamResponse])
async def list_exams(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """List the current user's exams."""
    return ExamService().list_exams(db, user)


@router.get("/exams/{exam_id}", response_model=ExamResponse)
async def get_exam(exam_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get one exam with its questions."""
    exam = ExamService().get_exam(db, user, exam_id)
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")
    return exam
