"""Tests for session lifecycle."""

import asyncio
from uuid import uuid4

import pytest

from nutricare.adapters.in_memory_session_repository import InMemorySessionRepository
from nutricare.domain.chat import ChatMessage, ChatRole
from nutricare.domain.nutrition import NutritionRecord
from nutricare.domain.profile import Language, Profile
from nutricare.services.sessions import (
    AnalysisRequiredError,
    SessionBusyError,
    SessionNotFoundError,
    SessionService,
)


def test_start_and_get_session(session_service: SessionService, profile: Profile) -> None:
    session = session_service.start_session(profile, Language.EN)

    loaded = session_service.get_session(session.id)

    assert loaded.profile == profile
    assert loaded.analysis is None
    assert loaded.messages == ()


def test_unknown_session_raises(session_service: SessionService) -> None:
    with pytest.raises(SessionNotFoundError):
        session_service.get_session(uuid4())


def test_expired_session_is_removed(profile: Profile) -> None:
    repository = InMemorySessionRepository()
    service = SessionService(repository=repository, ttl_seconds=-1)
    session = service.start_session(profile, Language.EN)

    with pytest.raises(SessionNotFoundError):
        service.get_session(session.id)

    assert session.id not in repository.sessions


def test_updates_extend_expiry(session_service: SessionService, profile: Profile) -> None:
    session = session_service.start_session(profile, Language.EN)

    updated = session_service.set_language(session.id, Language.UR)

    assert updated.language == Language.UR
    assert updated.expires_at >= session.expires_at


def test_replace_profile_clears_analysis(
    session_service: SessionService, profile: Profile
) -> None:
    session = session_service.start_session(profile, Language.EN)
    session_service.record_analysis(
        session.id, NutritionRecord(food_name="Rice"), "data:image/png;base64,AAA"
    )

    updated = session_service.replace_profile(session.id, Profile(sodium_limit=1800))

    assert updated.profile.sodium_limit == 1800
    assert updated.analysis is None
    assert updated.image is None


def test_require_analysis(session_service: SessionService, profile: Profile) -> None:
    session = session_service.start_session(profile, Language.EN)

    with pytest.raises(AnalysisRequiredError):
        session_service.require_analysis(session.id)

    session_service.record_analysis(session.id, NutritionRecord(food_name="Rice"), "x")
    _, analysis = session_service.require_analysis(session.id)
    assert analysis.food_name == "Rice"

    session_service.reset_analysis(session.id)
    with pytest.raises(AnalysisRequiredError):
        session_service.require_analysis(session.id)


def test_messages_are_kept_in_order(
    session_service: SessionService, profile: Profile
) -> None:
    session = session_service.start_session(profile, Language.EN)

    session_service.append_message(
        session.id, ChatMessage(role=ChatRole.USER, text="first")
    )
    session_service.append_message(
        session.id, ChatMessage(role=ChatRole.ASSISTANT, text="second")
    )

    texts = [message.text for message in session_service.list_messages(session.id)]
    assert texts == ["first", "second"]


def test_exclusive_rejects_overlapping_requests(
    session_service: SessionService, profile: Profile
) -> None:
    session = session_service.start_session(profile, Language.EN)

    async def scenario() -> None:
        async with session_service.exclusive(session.id):
            assert session_service.is_busy(session.id)
            with pytest.raises(SessionBusyError):
                async with session_service.exclusive(session.id):
                    pass

    asyncio.run(scenario())

    assert not session_service.is_busy(session.id)


def test_starting_a_session_purges_abandoned_ones(profile: Profile) -> None:
    repository = InMemorySessionRepository()
    service = SessionService(repository=repository, ttl_seconds=0)

    for _ in range(101):
        latest = service.start_session(profile, Language.EN)

    assert list(repository.sessions) == [latest.id]


def test_purge_keeps_live_sessions(
    session_service: SessionService, profile: Profile
) -> None:
    first = session_service.start_session(profile, Language.EN)
    second = session_service.start_session(profile, Language.UR)

    assert session_service.get_session(first.id).id == first.id
    assert session_service.get_session(second.id).language == Language.UR
