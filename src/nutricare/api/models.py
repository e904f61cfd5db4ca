"""Pydantic models for API requests and responses."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutricare.domain.alternatives import AlternativeFood
from nutricare.domain.chat import ChatMessage
from nutricare.domain.health import NutrientAlert, ScoreBand
from nutricare.domain.nutrition import NutritionRecord, ParseSource
from nutricare.domain.profile import Language, Profile


class ApiModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CreateSessionRequest(ApiModel):
    """Profile form submission."""

    profile: Profile
    language: Language | None = None


class LanguageRequest(ApiModel):
    """Language switch."""

    language: Language


class AnalysisRequest(ApiModel):
    """Meal image as a data URL or bare base64 string."""

    image: str | None = None


class ChatRequest(ApiModel):
    """User chat message."""

    text: str = Field(min_length=1)
    image: str | None = None


class SessionResponse(ApiModel):
    """Current session state."""

    id: UUID
    profile: Profile
    language: Language
    analysis: NutritionRecord | None
    has_image: bool
    message_count: int
    busy: bool


class AnalysisResponse(ApiModel):
    """Scored analysis of one meal."""

    analysis: NutritionRecord
    source: ParseSource
    fields_found: list[str]
    confidence: float
    score_band: ScoreBand
    score_label: str
    alerts: list[NutrientAlert]
    notice: str


class AlternativesResponse(ApiModel):
    """Alternative foods for the current analysis."""

    alternatives: list[AlternativeFood]
    no_alternatives_needed: bool
    notice: str | None = None


class ChatReply(ApiModel):
    """Assistant reply for one chat turn."""

    message: ChatMessage


class ChatHistory(ApiModel):
    """Ordered chat messages for a session."""

    messages: list[ChatMessage]


class ProfileOptions(ApiModel):
    """Predefined choices for the profile form."""

    conditions: list[str]
    allergies: list[str]
    dietary_restrictions: list[str]


class ChatSuggestions(ApiModel):
    """Predefined questions for an empty chat."""

    questions: list[str]
