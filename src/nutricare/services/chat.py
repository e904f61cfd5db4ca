"""Chat turns routed to the remote assistant or the offline responder."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from nutricare.domain.chat import ChatMessage, ChatRole
from nutricare.services.assistant import AssistantService
from nutricare.services.chat_responder import ChatResponder
from nutricare.services.sessions import SessionService


class ChatBackend(StrEnum):
    """Where chat answers come from."""

    ASSISTANT = "assistant"
    HEURISTIC = "heuristic"


@dataclass
class ChatService:
    """Run one chat turn and record both messages in the session."""

    session_service: SessionService
    assistant_service: AssistantService
    responder: ChatResponder
    backend: ChatBackend = ChatBackend.ASSISTANT

    async def send(
        self,
        session_id: UUID,
        text: str,
        *,
        image: str | None = None,
        api_key: str | None = None,
    ) -> ChatMessage:
        """Append the user's message, answer it and return the reply."""
        async with self.session_service.exclusive(session_id) as session:
            self.session_service.append_message(
                session_id, ChatMessage(role=ChatRole.USER, text=text, image=image)
            )
            if self.backend == ChatBackend.HEURISTIC:
                reply = self.responder.respond(text, session.profile, session.analysis)
            else:
                reply = await self.assistant_service.ask(
                    text,
                    session.profile,
                    language=session.language,
                    analysis=session.analysis,
                    image=image,
                    api_key=api_key,
                )
            message = ChatMessage(role=ChatRole.ASSISTANT, text=reply)
            self.session_service.append_message(session_id, message)
        return message
