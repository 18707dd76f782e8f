"""Submission routes: AI grading of a paper, then storage of the reviewed grades."""
import logging
from typing import List
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session
from papergrade.api.deps import get_client_factory, get_current_user
from papergrade.api.uploads import read_page_images
from papergrade.core.errors import ConfigurationError, PersistenceError
from papergrade.core.grading.consolidator import PageConsolidator
from papergrade.core.llm.client import GeminiClientFactory
from papergrade.core.schemas.api_models import (
    ProcessSubmissionResponse,
    QuestionResponse,
    SubmissionCreateRequest,
    SubmissionCreatedResponse,
    SubmissionResponse,
)
from papergrade.db.models import User
from papergrade.db.session import get_db
from papergrade.services.exam_service import ExamService
from papergrade.services.submission_service import SubmissionService
from papergrade.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/exam-submissions/process", response_model=ProcessSubmissionResponse)
async def process_submission(
    exam_id: int = Form(...),
    pages: List[UploadFile] = File(...),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    client_factory: GeminiClientFactory = Depends(get_client_factory),
    db: Session = Depends(get_db),
):
    """Grade a student's paper page by page. Nothing is stored here."""
    page_images = await read_page_images(pages, "pages", settings.max_page_image_bytes)

    try:
        client = client_factory.for_grading()
    except ConfigurationError as e:
        logger.error(str(e))
        raise HTTPException(status_code=400, detail="Invalid request or API key not configured.")

    exam = ExamService().get_exam(db, user, exam_id)
    if not exam:
        raise HTTPException(status_code=400, detail="Invalid request or API key not configured.")

    answer_key = [QuestionResponse.model_validate(q) for q in exam.questions]
    graded = await PageConsolidator(client).grade_submission(page_images, exam.questions)

    return ProcessSubmissionResponse(ai_results=graded, answer_key=answer_key)


@router.post("/exam-results", response_model=SubmissionCreatedResponse, status_code=201)
async def store_submission(
    payload: SubmissionCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Store the reviewed grades for one student's paper."""
    exam = ExamService().get_exam(db, user, payload.exam_id)
    if not exam:
        raise HTTPException(status_code=422, detail=[{
            "loc": ["body", "exam_id"],
            "msg": "The selected exam does not exist",
            "type": "value_error",
        }])

    try:
        submission = SubmissionService().store_submission(db, user, exam, payload)
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return SubmissionCreatedResponse(message="Final grade saved successfully!", submission_id=submission.id)


@router.get("/exam-results/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a stored submission with its answers."""
    submission = SubmissionService().get_submission(db, user, submission_id)
    if not submission:
        raise HTTPException(status_code=404, detail="Submission not found")
    return submission
