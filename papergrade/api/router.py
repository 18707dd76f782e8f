"""Main API router."""
from fastapi import APIRouter
from papergrade.api import health, auth, answer_key, exam, submission

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(answer_key.router, tags=["answer-key"])
api_router.include_router(exam.router, tags=["exam"])
api_router.include_router(submission.router, tags=["submission"])
