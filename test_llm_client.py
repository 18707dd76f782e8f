"""Tests for the Gemini REST client."""
import asyncio
import base64
import json

import httpx
import pytest

from papergrade.core.errors import ConfigurationError
from papergrade.core.llm.client import GeminiClient, GeminiClientFactory
from papergrade.settings import Settings
from conftest import PNG_BYTES


def make_client(gemini, **kwargs):
    return GeminiClient(api_key="secret-key", model="gemini-test", transport=gemini.transport, **kwargs)


def test_request_shape(gemini):
    gemini.reply({"questions": []})
    result = asyncio.run(make_client(gemini).generate_json("Read this", PNG_BYTES, "image/png"))

    assert result == {"questions": []}
    request = gemini.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-test:generateContent"
    assert request.url.params["key"] == "secret-key"

    body = json.loads(request.content)
    parts = body["contents"][0]["parts"]
    assert parts[0] == {"text": "Read this"}
    assert parts[1]["inline_data"]["mime_type"] == "image/png"
    assert base64.b64decode(parts[1]["inline_data"]["data"]) == PNG_BYTES
    assert body["generation_config"] == {"response_mime_type": "application/json"}


def test_fenced_response_text_is_parsed(gemini):
    gemini.reply('```json\n{"grades": [{"student_answer": "B", "score": 1}]}\n```')
    result = asyncio.run(make_client(gemini).generate_json("p", PNG_BYTES, "image/png"))
    assert result == {"grades": [{"student_answer": "B", "score": 1}]}


@pytest.mark.parametrize("reply", [
    500,
    429,
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("timed out"),
    "not json at all",
])
def test_failures_give_none(gemini, reply):
    gemini.reply(reply)
    assert asyncio.run(make_client(gemini).generate_json("p", PNG_BYTES, "image/png")) is None


def test_missing_candidate_text_gives_none():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"candidates": []}))
    client = GeminiClient(api_key="k", model="m", transport=transport)
    assert asyncio.run(client.generate_json("p", PNG_BYTES, "image/png")) is None


def test_non_json_envelope_gives_none():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    client = GeminiClient(api_key="k", model="m", transport=transport)
    assert asyncio.run(client.generate_json("p", PNG_BYTES, "image/png")) is None


def test_missing_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        GeminiClient(api_key="", model="m")


def test_factory_uses_per_flow_model_and_timeout():
    settings = Settings(gemini_api_key="k", scan_model="scan-model", scan_timeout=30,
                        grading_model="grade-model", grading_timeout=300)
    factory = GeminiClientFactory(settings)

    scanner = factory.for_scanning()
    grader = factory.for_grading()
    assert (scanner.model, scanner.timeout) == ("scan-model", 30)
    assert (grader.model, grader.timeout) == ("grade-model", 300)

    settings.gemini_api_key = ""
    with pytest.raises(ConfigurationError):
        factory.for_grading()
