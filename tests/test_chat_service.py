"""Tests for chat turns."""

import asyncio

from nutricare.domain.chat import ChatRole
from nutricare.domain.profile import Language, Profile
from nutricare.services.assistant import AssistantService
from nutricare.services.chat import ChatBackend, ChatService
from nutricare.services.chat_responder import ChatResponder
from nutricare.services.sessions import SessionService
from tests.conftest import FakeAssistantClient


def test_assistant_backend_records_both_messages(
    session_service: SessionService,
    assistant_service: AssistantService,
    assistant_client: FakeAssistantClient,
    profile: Profile,
) -> None:
    assistant_client.reply = "Try grilled fish."
    service = ChatService(
        session_service=session_service,
        assistant_service=assistant_service,
        responder=ChatResponder(),
    )
    session = session_service.start_session(profile, Language.UR)

    reply = asyncio.run(service.send(session.id, "Dinner?", api_key="browser-key"))

    assert reply.role == ChatRole.ASSISTANT
    assert reply.text == "Try grilled fish."
    assert assistant_client.calls[0]["api_key"] == "browser-key"
    assert "صارف کا طبی پروفائل" in assistant_client.calls[0]["prompt"]
    messages = session_service.list_messages(session.id)
    assert [message.role for message in messages] == [
        ChatRole.USER,
        ChatRole.ASSISTANT,
    ]
    assert messages[0].text == "Dinner?"
    assert not session_service.is_busy(session.id)


def test_heuristic_backend_answers_offline(
    session_service: SessionService,
    assistant_service: AssistantService,
    assistant_client: FakeAssistantClient,
    profile: Profile,
) -> None:
    service = ChatService(
        session_service=session_service,
        assistant_service=assistant_service,
        responder=ChatResponder(),
        backend=ChatBackend.HEURISTIC,
    )
    session = session_service.start_session(profile, Language.EN)

    reply = asyncio.run(service.send(session.id, "How much sodium is ok?"))

    assert "1500mg" in reply.text
    assert assistant_client.calls == []
    assert len(session_service.list_messages(session.id)) == 2
