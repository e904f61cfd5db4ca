"""Session lifecycle for profile, analysis and chat state."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from nutricare.domain.chat import ChatMessage
from nutricare.domain.errors import NutriCareError
from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import Language, Profile
from nutricare.domain.sessions import SessionRecord

_logger = logging.getLogger(__name__)


class SessionNotFoundError(NutriCareError):
    """The session does not exist or has expired."""


class SessionBusyError(NutriCareError):
    """Another request for the session is still in flight."""


class AnalysisRequiredError(NutriCareError):
    """The operation needs a completed food analysis."""


class SessionRepository(Protocol):
    """Storage interface for session records."""

    def save_session(self, session: SessionRecord) -> None:
        """Insert or replace a session."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def delete_session(self, session_id: UUID) -> None:
        """Remove a session, if present."""

    def purge_expired(self, now: datetime) -> int:
        """Remove sessions that expired at or before now; return how many."""


@dataclass
class SessionService:
    """Create, read and update session state with sliding expiry."""

    repository: SessionRepository
    ttl_seconds: int = 3600
    _busy: set[UUID] = field(default_factory=set, init=False)

    def start_session(self, profile: Profile, language: Language) -> SessionRecord:
        """Create a session for a submitted profile."""
        purged = self.repository.purge_expired(datetime.now(tz=UTC))
        if purged:
            _logger.info("Purged expired sessions: %s", purged)
        session = SessionRecord(
            id=uuid4(),
            profile=profile,
            language=language,
            expires_at=self._next_expiry(),
        )
        self.repository.save_session(session)
        _logger.info("Session started: %s", session.id)
        return session

    def get_session(self, session_id: UUID) -> SessionRecord:
        """Return a live session or raise SessionNotFoundError."""
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        if datetime.now(tz=UTC) >= session.expires_at:
            self.repository.delete_session(session_id)
            self._busy.discard(session_id)
            raise SessionNotFoundError(str(session_id))
        return session

    def replace_profile(self, session_id: UUID, profile: Profile) -> SessionRecord:
        """Swap in a new profile and clear the analysis scored against the old one."""
        return self._update(session_id, profile=profile, analysis=None, image=None)

    def set_language(self, session_id: UUID, language: Language) -> SessionRecord:
        """Change the session language."""
        return self._update(session_id, language=language)

    def record_analysis(
        self, session_id: UUID, analysis: NutritionRecord, image: str
    ) -> SessionRecord:
        """Store the latest analysis and its image."""
        return self._update(session_id, analysis=analysis, image=image)

    def reset_analysis(self, session_id: UUID) -> SessionRecord:
        """Forget the current analysis so a new food can be analyzed."""
        return self._update(session_id, analysis=None, image=None)

    def require_analysis(self, session_id: UUID) -> tuple[SessionRecord, NutritionRecord]:
        """Return the session and its analysis or raise AnalysisRequiredError."""
        session = self.get_session(session_id)
        if session.analysis is None:
            raise AnalysisRequiredError(str(session_id))
        return session, session.analysis

    def append_message(self, session_id: UUID, message: ChatMessage) -> SessionRecord:
        """Append a chat message to the session history."""
        session = self.get_session(session_id)
        return self._update(session_id, messages=(*session.messages, message))

    def list_messages(self, session_id: UUID) -> list[ChatMessage]:
        """Return chat history in order."""
        return list(self.get_session(session_id).messages)

    @asynccontextmanager
    async def exclusive(self, session_id: UUID) -> AsyncIterator[SessionRecord]:
        """Reject overlapping submissions for one session while a request runs."""
        session = self.get_session(session_id)
        if session_id in self._busy:
            raise SessionBusyError(str(session_id))
        self._busy.add(session_id)
        try:
            yield session
        finally:
            self._busy.discard(session_id)

    def is_busy(self, session_id: UUID) -> bool:
        """Return true while a request for the session is in flight."""
        return session_id in self._busy

    def _update(self, session_id: UUID, **changes: object) -> SessionRecord:
        session = self.get_session(session_id)
        updated = replace(session, expires_at=self._next_expiry(), **changes)
        self.repository.save_session(updated)
        return updated

    def _next_expiry(self) -> datetime:
        return datetime.now(tz=UTC) + timedelta(seconds=self.ttl_seconds)
