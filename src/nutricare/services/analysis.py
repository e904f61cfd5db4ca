"""Meal photo analysis pipeline."""

import logging
from dataclasses import dataclass, replace

from nutricare.domain.errors import NutriCareError
from nutricare.domain.nutrition import ParsedNutrition, ParseSource
from nutricare.domain.profile import Language, Profile
from nutricare.services.assistant import AssistantError, AssistantService
from nutricare.services.parser import ResponseParser
from nutricare.services.prompts import analysis_prompt, compose_prompt
from nutricare.services.scoring import with_derived_fields

_logger = logging.getLogger(__name__)


class MissingImageError(NutriCareError):
    """Analysis was requested without an image."""


class AnalysisFailedError(NutriCareError):
    """The assistant could not produce an analysis."""


@dataclass
class AnalysisService:
    """Send a meal photo to the assistant and score the parsed reply."""

    assistant: AssistantService
    parser: ResponseParser

    async def analyze(
        self,
        profile: Profile,
        image: str | None,
        *,
        language: Language = Language.EN,
        api_key: str | None = None,
    ) -> ParsedNutrition:
        """Return the parsed nutrition for a meal image data URL."""
        if not image:
            raise MissingImageError("An image is required for food analysis")

        prompt = compose_prompt(
            analysis_prompt(language), profile, language, has_image=True
        )
        try:
            reply = await self.assistant.complete(
                prompt, image=image, api_key=api_key
            )
        except AssistantError as exc:
            raise AnalysisFailedError(str(exc)) from exc

        parsed = score_reported_nutrition(self.parser.decode(reply, profile), profile)
        if not parsed.is_valid:
            _logger.warning(
                "Analysis reply had no nutrient values: source=%s", parsed.source
            )
        return parsed


def score_reported_nutrition(
    parsed: ParsedNutrition, profile: Profile
) -> ParsedNutrition:
    """Fill in score, risks and warnings a JSON reply left out.

    Values the reply supplied are kept as decoded. Line-scanned and default
    records are returned unchanged.
    """
    if parsed.source != ParseSource.JSON:
        return parsed
    record = with_derived_fields(parsed.record, profile, keep=parsed.derived_found)
    return replace(parsed, record=record)
