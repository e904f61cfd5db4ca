"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from nutricare.domain.profile import Language
from nutricare.services.chat import ChatBackend

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_store: bool = False
    openai_timeout_seconds: float = 60.0
    chat_backend: ChatBackend = ChatBackend.ASSISTANT
    default_language: Language = Language.EN
    session_ttl_seconds: int = 3600
    cors_allow_origins: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse comma-separated CORS origins from env."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    return [chunk.strip() for chunk in cleaned.split(",") if chunk.strip()]
