"""Merges per-page model output into one ordered result for a whole document."""
import logging
from typing import List, Sequence

from papergrade.core.errors import ExtractionError
from papergrade.core.llm.client import GeminiClient
from papergrade.core.llm.guardrails import validate_response
from papergrade.core.llm.prompts import continuation_prompt, grading_prompt, scan_prompt
from papergrade.core.schemas.llm_contracts import (
    UNKNOWN_STUDENT,
    GradedSubmission,
    GradeItem,
    GradePage,
    PageImage,
    ScannedQuestion,
    ScanPage,
)

logger = logging.getLogger(__name__)


class PageConsolidator:
    """Runs each page of a document through the vision client, one page at a time."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def scan_answer_key(self, pages: Sequence[PageImage]) -> List[ScannedQuestion]:
        """Extract answer-key questions from every page, in page order.

        A page that fails or has no "questions" list is skipped.

        Raises:
            ExtractionError: If no page yielded any question.
        """
        prompt = scan_prompt()
        questions: List[ScannedQuestion] = []

        for index, page in enumerate(pages, start=1):
            result = await self.client.generate_json(prompt, page.content, page.mime_type)
            scanned = validate_response(result, ScanPage) if result is not None else None
            if scanned is None:
                logger.warning(f"Skipping answer-key page {index} ({page.filename}): no usable response")
                continue

            logger.info(f"Answer-key page {index}: {len(scanned.questions)} question(s)")
            questions.extend(scanned.questions)

        if not questions:
            raise ExtractionError("Could not extract any questions from the provided images.")
        return questions

    async def grade_submission(self, pages: Sequence[PageImage], questions) -> GradedSubmission:
        """Grade a student's paper against the exam's questions.

        The first page gets the answer key and is graded; later pages are
        OCR only and score 0. Grades are renumbered 1..N across all pages.
        An empty result is not an error.
        """
        student_name = UNKNOWN_STUDENT
        grades: List[GradeItem] = []

        for index, page in enumerate(pages):
            is_first_page = index == 0
            prompt = grading_prompt(questions) if is_first_page else continuation_prompt()

            result = await self.client.generate_json(prompt, page.content, page.mime_type)
            graded = validate_response(result, GradePage) if result is not None else None
            if graded is None:
                logger.warning(f"Skipping submission page {index + 1} ({page.filename}): no usable response")
                continue

            if is_first_page:
                student_name = graded.student_name

            for item in graded.grades:
                grades.append(GradeItem(
                    question_number=len(grades) + 1,
                    student_answer=item.student_answer,
                    score=item.score,
                ))

        logger.info(f"Graded {len(pages)} page(s) for {student_name}: {len(grades)} answer(s)")
        return GradedSubmission(student_name=student_name, grades=grades)
