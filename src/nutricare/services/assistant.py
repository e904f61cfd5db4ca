"""Remote nutrition assistant with localized fallback advice."""

import logging
from dataclasses import dataclass
from typing import Protocol

from nutricare.domain.errors import NutriCareError
from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import Language, Profile
from nutricare.services.images import ImagePayload, split_data_url
from nutricare.services.localization import (
    connection_fallback,
    credentials_fallback,
)
from nutricare.services.prompts import compose_prompt

_logger = logging.getLogger(__name__)


class AssistantError(NutriCareError):
    """The remote assistant call failed."""


class AssistantCredentialsError(AssistantError):
    """No usable API key, or the service rejected it."""


class AssistantClient(Protocol):
    """Interface for the remote text/image-to-text model."""

    async def generate(
        self,
        *,
        api_key: str,
        model: str,
        prompt: str,
        image: ImagePayload | None,
    ) -> str:
        """Return the model's free-form text reply."""


@dataclass
class AssistantService:
    """Prepare prompts, resolve credentials and call the assistant once."""

    client: AssistantClient
    model: str
    api_key: str | None = None

    def resolve_api_key(self, override: str | None = None) -> str:
        """Prefer a caller-supplied key, then the configured one."""
        for candidate in (override, self.api_key):
            if candidate and candidate.strip():
                return candidate.strip()
        raise AssistantCredentialsError("No API key available")

    async def complete(
        self,
        prompt: str,
        *,
        image: str | None = None,
        api_key: str | None = None,
    ) -> str:
        """Send one prompt, with an optional image data URL, and return the reply."""
        resolved_key = self.resolve_api_key(api_key)
        payload = split_data_url(image) if image else None
        if payload is not None:
            _logger.info("Sending assistant request with image: %s", payload.mime_type)
        reply = await self.client.generate(
            api_key=resolved_key,
            model=self.model,
            prompt=prompt,
            image=payload,
        )
        _logger.info("Received assistant reply: %s chars", len(reply))
        return reply

    async def ask(  # noqa: PLR0913
        self,
        question: str,
        profile: Profile,
        *,
        language: Language = Language.EN,
        analysis: NutritionRecord | None = None,
        image: str | None = None,
        api_key: str | None = None,
    ) -> str:
        """Answer a chat question, degrading to canned advice on failure."""
        prompt = compose_prompt(
            question,
            profile,
            language,
            analysis=analysis,
            has_image=image is not None,
        )
        try:
            return await self.complete(prompt, image=image, api_key=api_key)
        except AssistantCredentialsError:
            _logger.exception("Assistant credentials missing or rejected")
            return credentials_fallback(question, profile, language)
        except AssistantError:
            _logger.exception("Assistant request failed")
            return connection_fallback(question, profile, language)
