"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from nutricare.adapters.in_memory_session_repository import InMemorySessionRepository
from nutricare.adapters.static_alternative_catalog import StaticAlternativeCatalog
from nutricare.config import Settings
from nutricare.containers import AppContainer
from nutricare.domain.profile import HIGH_BLOOD_PRESSURE, TYPE_2_DIABETES, Profile
from nutricare.services.alternatives import AlternativeService
from nutricare.services.analysis import AnalysisService
from nutricare.services.assistant import AssistantClient, AssistantService
from nutricare.services.chat import ChatBackend, ChatService
from nutricare.services.chat_responder import ChatResponder
from nutricare.services.images import ImagePayload
from nutricare.services.parser import ResponseParser
from nutricare.services.sessions import SessionService

RICE_REPLY = (
    "Here is the analysis:\n"
    '{"foodName":"Rice","calories":200,"sodium":50,"sugar":1,'
    '"carbs":45,"protein":4,"fiber":1}'
)

PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgo="


@dataclass
class FakeAssistantClient(AssistantClient):
    """Fake assistant client returning a fixed reply or raising an error."""

    reply: str = RICE_REPLY
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        api_key: str,
        model: str,
        prompt: str,
        image: ImagePayload | None,
    ) -> str:
        self.calls.append(
            {"api_key": api_key, "model": model, "prompt": prompt, "image": image}
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        openai_model="test-model",
        environment="test",
    )


@pytest.fixture
def profile() -> Profile:
    return Profile(
        conditions={HIGH_BLOOD_PRESSURE, TYPE_2_DIABETES},
        allergies={"Nuts"},
        target_calories=2000,
        sodium_limit=1500,
        sugar_limit=30,
        age=45,
        weight=80,
        height=175,
    )


@pytest.fixture
def assistant_client() -> FakeAssistantClient:
    return FakeAssistantClient()


@pytest.fixture
def session_service() -> SessionService:
    return SessionService(repository=InMemorySessionRepository())


@pytest.fixture
def assistant_service(
    settings: Settings, assistant_client: FakeAssistantClient
) -> AssistantService:
    return AssistantService(
        client=assistant_client,
        model=settings.openai_model,
        api_key=settings.openai_api_key,
    )


@pytest.fixture
def container(
    settings: Settings,
    session_service: SessionService,
    assistant_service: AssistantService,
) -> AppContainer:
    analysis_service = AnalysisService(
        assistant=assistant_service, parser=ResponseParser()
    )
    chat_service = ChatService(
        session_service=session_service,
        assistant_service=assistant_service,
        responder=ChatResponder(),
        backend=ChatBackend.ASSISTANT,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        session_service=session_service,
        assistant_service=assistant_service,
        analysis_service=analysis_service,
        alternative_service=AlternativeService(StaticAlternativeCatalog()),
        chat_service=chat_service,
        close_resources=close_resources,
    )
