"""LLM client for the Gemini generateContent REST API."""
import base64
import logging
from typing import Optional

import httpx

from papergrade.core.errors import ConfigurationError
from papergrade.core.llm.guardrails import parse_json_response
from papergrade.settings import Settings

logger = logging.getLogger(__name__)


class GeminiClient:
    """Sends one prompt plus one image to Gemini and returns the JSON it answers with."""

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout: float = 120.0,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("Gemini API key is not configured.")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    @staticmethod
    def build_payload(prompt: str, image_bytes: bytes, mime_type: str) -> dict:
        """Build the request body: a text part, an inline image part, and JSON output mode."""
        return {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inline_data": {
                                "mime_type": mime_type,
                                "data": base64.b64encode(image_bytes).decode("ascii"),
                            }
                        },
                    ]
                }
            ],
            "generation_config": {"response_mime_type": "application/json"},
        }

    @staticmethod
    def extract_text(envelope) -> Optional[str]:
        """Return candidates[0].content.parts[0].text, or None if the path is absent."""
        try:
            text = envelope["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) else None

    async def generate_json(self, prompt: str, image_bytes: bytes, mime_type: str) -> Optional[dict]:
        """
        Ask the model about one image.

        Args:
            prompt (str): Instruction text.
            image_bytes (bytes): Raw image content.
            mime_type (str): Declared media type, e.g. "image/png".

        Returns:
            dict | None: Parsed JSON object, or None if the call failed in any way.
                Callers treat None as "skip this page".
        """
        payload = self.build_payload(prompt, image_bytes, mime_type)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            # str(e) may carry the request URL, key included
            logger.warning(f"Gemini request to model {self.model} failed: {type(e).__name__}")
            return None

        if not response.is_success:
            logger.warning(f"Gemini returned HTTP {response.status_code} for model {self.model}")
            return None

        try:
            envelope = response.json()
        except ValueError:
            logger.warning("Gemini response body is not JSON")
            return None

        text = self.extract_text(envelope)
        if text is None:
            logger.warning("Gemini response has no candidate text")
            return None

        return parse_json_response(text)


class GeminiClientFactory:
    """Builds per-flow clients from settings (model and timeout differ per flow)."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def _build(self, model: str, timeout: float) -> GeminiClient:
        return GeminiClient(
            api_key=self.settings.gemini_api_key,
            model=model,
            timeout=timeout,
            base_url=self.settings.gemini_base_url,
            transport=self.transport,
        )

    def for_scanning(self) -> GeminiClient:
        """Client for answer-key scanning. Raises ConfigurationError without a key."""
        return self._build(self.settings.scan_model, self.settings.scan_timeout)

    def for_grading(self) -> GeminiClient:
        """Client for grading submissions. Raises ConfigurationError without a key."""
        return self._build(self.settings.grading_model, self.settings.grading_timeout)
