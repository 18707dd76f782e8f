"""Guardrails for cleaning up and validating LLM responses."""
import json
import logging
import re
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)

# One leading fence (optionally tagged json) and one trailing fence
_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def strip_code_fence(text: str) -> str:
    """Remove a markdown code-fence wrapper, leaving the interior untouched."""
    return _FENCE_RE.sub("", text.strip())


def parse_json_response(text: Any) -> Optional[dict]:
    """Parse model output text into a JSON object.

    Returns None when the text is missing, is not valid JSON after fence
    stripping, or decodes to something other than an object.
    """
    if not isinstance(text, str):
        logger.warning(f"Expected response text, got {type(text).__name__}")
        return None

    cleaned = strip_code_fence(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse LLM response as JSON: {e}")
        logger.debug(f"Unparsable response text: {cleaned[:500]}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"LLM response is a JSON {type(data).__name__}, expected an object")
        return None
    return data


def validate_response(response_dict: dict, schema: Type[T]) -> Optional[T]:
    """Validate a parsed LLM response against a Pydantic schema, or return None."""
    try:
        return schema.model_validate(response_dict)
    except ValidationError as e:
        logger.warning(f"{schema.__name__} validation failed: {e.error_count()} error(s)")
        logger.debug(f"Response dict: {response_dict}")
        return None
