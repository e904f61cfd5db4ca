"""Process-local session storage."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from nutricare.domain.sessions import SessionRecord
from nutricare.services.sessions import SessionRepository


@dataclass
class InMemorySessionRepository(SessionRepository):
    """Session repository kept in a dict for the life of the process."""

    sessions: dict[UUID, SessionRecord] = field(default_factory=dict)

    def save_session(self, session: SessionRecord) -> None:
        """Insert or replace a session."""
        self.sessions[session.id] = session

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        return self.sessions.get(session_id)

    def delete_session(self, session_id: UUID) -> None:
        """Remove a session, if present."""
        self.sessions.pop(session_id, None)

    def purge_expired(self, now: datetime) -> int:
        """Remove sessions that expired at or before now; return how many."""
        expired = [
            session_id
            for session_id, session in self.sessions.items()
            if session.expires_at <= now
        ]
        for session_id in expired:
            del self.sessions[session_id]
        return len(expired)
