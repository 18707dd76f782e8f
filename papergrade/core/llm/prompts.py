"""Prompt template loading and rendering."""
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined


PROMPTS_DIR = Path(__file__).parent.parent.parent / "prompts"

SCAN_ANSWER_KEY = "scan_answer_key.txt"
GRADE_FIRST_PAGE = "grade_first_page.txt"
OCR_CONTINUATION_PAGE = "ocr_continuation_page.txt"

# Prompts are plain text, so no HTML autoescaping
env = Environment(
    loader=FileSystemLoader(str(PROMPTS_DIR)),
    undefined=StrictUndefined,
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def load_prompt(filename: str) -> str:
    """Load a prompt template from file."""
    prompt_path = PROMPTS_DIR / filename
    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")
    return prompt_path.read_text(encoding="utf-8").strip()


def render_prompt(filename: str, **context) -> str:
    """Render a prompt template with the provided variables."""
    return env.get_template(filename).render(**context).strip()


def scan_prompt() -> str:
    """Prompt used for every page of an answer key."""
    return load_prompt(SCAN_ANSWER_KEY)


def grading_prompt(questions) -> str:
    """First-page prompt: extract the student name and grade against the key.

    The answer key is listed in question_number order, one
    'Question N: <answer> (<marks> marks)' line per question.
    """
    ordered = sorted(questions, key=lambda q: q.question_number)
    return render_prompt(GRADE_FIRST_PAGE, questions=ordered)


def continuation_prompt() -> str:
    """Prompt for page 2 onwards: OCR only, every score is 0."""
    return load_prompt(OCR_CONTINUATION_PAGE)
