"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutricare.adapters.in_memory_session_repository import InMemorySessionRepository
from nutricare.adapters.openai_assistant_client import OpenAIAssistantClient
from nutricare.adapters.static_alternative_catalog import StaticAlternativeCatalog
from nutricare.config import Settings
from nutricare.services.alternatives import AlternativeService
from nutricare.services.analysis import AnalysisService
from nutricare.services.assistant import AssistantService
from nutricare.services.chat import ChatService
from nutricare.services.chat_responder import ChatResponder
from nutricare.services.parser import ResponseParser
from nutricare.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    assistant_service: AssistantService
    analysis_service: AnalysisService
    alternative_service: AlternativeService
    chat_service: ChatService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    session_service = SessionService(
        repository=InMemorySessionRepository(),
        ttl_seconds=resolved_settings.session_ttl_seconds,
    )
    assistant_client = OpenAIAssistantClient.create(
        timeout_seconds=resolved_settings.openai_timeout_seconds,
        store=resolved_settings.openai_store,
        default_api_key=resolved_settings.openai_api_key,
    )
    assistant_service = AssistantService(
        client=assistant_client,
        model=resolved_settings.openai_model,
        api_key=resolved_settings.openai_api_key,
    )
    analysis_service = AnalysisService(
        assistant=assistant_service,
        parser=ResponseParser(),
    )
    alternative_service = AlternativeService(StaticAlternativeCatalog())
    chat_service = ChatService(
        session_service=session_service,
        assistant_service=assistant_service,
        responder=ChatResponder(),
        backend=resolved_settings.chat_backend,
    )

    async def close_resources() -> None:
        await assistant_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        assistant_service=assistant_service,
        analysis_service=analysis_service,
        alternative_service=alternative_service,
        chat_service=chat_service,
        close_resources=close_resources,
    )
