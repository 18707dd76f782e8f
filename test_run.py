"""Tests for the uvicorn runner script."""
import logging

import run
from papergrade.settings import get_settings


def test_runner_never_logs_the_api_key(monkeypatch, caplog, capsys):
    calls = []
    monkeypatch.setenv("GEMINI_API_KEY", "AIzaSecretKey123")
    monkeypatch.setattr(run.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    caplog.set_level(logging.INFO, logger="papergrade.run")

    try:
        run.main()
    finally:
        get_settings.cache_clear()

    assert calls[0][0] == ("papergrade.main:app",)
    assert "Gemini API key configured: yes" in caplog.text
    assert "AIza" not in caplog.text
    assert "AIza" not in capsys.readouterr().out
