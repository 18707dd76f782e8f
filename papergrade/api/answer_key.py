"""Answer-key scanning routes."""
import logging
from typing import List
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from papergrade.api.deps import get_client_factory, get_current_user
from papergrade.api.uploads import read_page_images
from papergrade.core.errors import ConfigurationError, ExtractionError
from papergrade.core.grading.consolidator import PageConsolidator
from papergrade.core.llm.client import GeminiClientFactory
from papergrade.core.schemas.api_models import ScanResponse
from papergrade.db.models import User
from papergrade.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/answer-key/scan", response_model=ScanResponse)
async def scan_answer_key(
    images: List[UploadFile] = File(...),
    user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    client_factory: GeminiClientFactory = Depends(get_client_factory),
):
    """Read one or more answer-key images into a single ordered question list."""
    pages = await read_page_images(images, "images", settings.max_scan_image_bytes)

    try:
        client = client_factory.for_scanning()
    except ConfigurationError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e))

    consolidator = PageConsolidator(client)
    try:
        questions = await consolidator.scan_answer_key(pages)
    except ExtractionError as e:
        logger.warning(f"Answer-key scan for user {user.id} produced nothing from {len(pages)} image(s)")
        raise HTTPException(status_code=500, detail=str(e))

    return ScanResponse(questions=questions)
