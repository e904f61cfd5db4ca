"""Tests for configuration helpers."""

import pytest

from nutricare.config import Settings, parse_allowed_origins
from nutricare.domain.profile import Language
from nutricare.services.chat import ChatBackend


def test_parse_allowed_origins() -> None:
    assert parse_allowed_origins(None) == []
    assert parse_allowed_origins(" * ") == ["*"]
    assert parse_allowed_origins("https://a.test, https://b.test,,") == [
        "https://a.test",
        "https://b.test",
    ]


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")
    monkeypatch.setenv("CHAT_BACKEND", "heuristic")
    monkeypatch.setenv("DEFAULT_LANGUAGE", "ur")

    settings = Settings()

    assert settings.openai_api_key == "env-key"
    assert settings.chat_backend == ChatBackend.HEURISTIC
    assert settings.default_language == Language.UR


def test_settings_have_no_embedded_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert Settings(_env_file=None).openai_api_key is None
