"""Domain models for analysis sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from nutricare.domain.chat import ChatMessage
from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import Language, Profile


@dataclass(frozen=True)
class SessionRecord:
    """Represents one browser session's in-memory state."""

    id: UUID
    profile: Profile
    language: Language
    expires_at: datetime
    analysis: NutritionRecord | None = None
    image: str | None = None
    messages: tuple[ChatMessage, ...] = ()
