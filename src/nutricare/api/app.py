"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, Header, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from nutricare.api.models import (
    AlternativesResponse,
    AnalysisRequest,
    AnalysisResponse,
    ChatHistory,
    ChatReply,
    ChatRequest,
    ChatSuggestions,
    CreateSessionRequest,
    LanguageRequest,
    ProfileOptions,
    SessionResponse,
)
from nutricare.app_logging import configure_logging
from nutricare.config import parse_allowed_origins
from nutricare.containers import AppContainer
from nutricare.domain.health import SCORE_BAND_LABELS
from nutricare.domain.nutrition import ParsedNutrition
from nutricare.domain.profile import (
    COMMON_ALLERGIES,
    COMMON_CONDITIONS,
    COMMON_RESTRICTIONS,
    Language,
    Profile,
)
from nutricare.domain.sessions import SessionRecord
from nutricare.services.analysis import AnalysisFailedError, MissingImageError
from nutricare.services.images import to_data_url
from nutricare.services.localization import SUGGESTED_QUESTIONS, notice
from nutricare.services.scoring import nutrient_alerts, score_band
from nutricare.services.sessions import (
    AnalysisRequiredError,
    SessionBusyError,
    SessionNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    default_language = container.settings.default_language

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    origins = parse_allowed_origins(container.settings.cors_allow_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": notice("session_not_found", default_language)},
        )

    @app.exception_handler(SessionBusyError)
    async def session_busy(request: Request, exc: SessionBusyError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": notice("session_busy", default_language)},
        )

    @app.exception_handler(AnalysisRequiredError)
    async def analysis_required(
        request: Request, exc: AnalysisRequiredError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": notice("analysis_required", default_language)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile/options")
    async def profile_options() -> ProfileOptions:
        """Return the predefined profile form choices."""
        return ProfileOptions(
            conditions=list(COMMON_CONDITIONS),
            allergies=list(COMMON_ALLERGIES),
            dietary_restrictions=list(COMMON_RESTRICTIONS),
        )

    @app.get("/chat/suggestions")
    async def chat_suggestions(language: Language | None = None) -> ChatSuggestions:
        """Return predefined questions for an empty chat."""
        return ChatSuggestions(
            questions=list(SUGGESTED_QUESTIONS[language or default_language])
        )

    @app.post("/sessions", status_code=status.HTTP_201_CREATED)
    async def create_session(
        payload: CreateSessionRequest, request: Request
    ) -> SessionResponse:
        """Start a session from a submitted profile."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.start_session(
            payload.profile, payload.language or default_language
        )
        return _session_response(state_container, session)

    @app.get("/sessions/{session_id}")
    async def get_session(session_id: UUID, request: Request) -> SessionResponse:
        """Return the current session state."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.get_session(session_id)
        return _session_response(state_container, session)

    @app.put("/sessions/{session_id}/profile")
    async def replace_profile(
        session_id: UUID, profile: Profile, request: Request
    ) -> SessionResponse:
        """Replace the profile; the previous analysis is discarded."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.replace_profile(session_id, profile)
        return _session_response(state_container, session)

    @app.put("/sessions/{session_id}/language")
    async def set_language(
        session_id: UUID, payload: LanguageRequest, request: Request
    ) -> SessionResponse:
        """Switch the session language."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.set_language(
            session_id, payload.language
        )
        return _session_response(state_container, session)

    @app.post("/sessions/{session_id}/analysis")
    async def analyze_food(
        session_id: UUID,
        payload: AnalysisRequest,
        request: Request,
        x_api_key: str | None = Header(default=None),
    ) -> AnalysisResponse:
        """Analyze a meal image sent as a data URL."""
        return await _run_analysis(
            request.app.state.container, session_id, payload.image, x_api_key
        )

    @app.post("/sessions/{session_id}/analysis/upload")
    async def upload_food(
        session_id: UUID,
        request: Request,
        x_api_key: str | None = Header(default=None),
    ) -> AnalysisResponse:
        """Analyze a meal image sent as the raw request body."""
        body = await request.body()
        image = to_data_url(body) if body else None
        return await _run_analysis(
            request.app.state.container, session_id, image, x_api_key
        )

    @app.delete("/sessions/{session_id}/analysis")
    async def reset_analysis(session_id: UUID, request: Request) -> SessionResponse:
        """Clear the analysis to start over with a new food."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.reset_analysis(session_id)
        return _session_response(state_container, session)

    @app.get("/sessions/{session_id}/alternatives")
    async def alternatives(session_id: UUID, request: Request) -> AlternativesResponse:
        """Suggest better-scoring foods for the analyzed meal."""
        state_container: AppContainer = request.app.state.container
        session, analysis = state_container.session_service.require_analysis(
            session_id
        )
        suggestions = state_container.alternative_service.suggest(
            analysis, session.profile
        )
        return AlternativesResponse(
            alternatives=list(suggestions.alternatives),
            no_alternatives_needed=suggestions.no_alternatives_needed,
            notice=(
                notice("no_alternatives", session.language)
                if suggestions.no_alternatives_needed
                else None
            ),
        )

    @app.get("/sessions/{session_id}/chat")
    async def chat_history(session_id: UUID, request: Request) -> ChatHistory:
        """Return the chat history."""
        state_container: AppContainer = request.app.state.container
        return ChatHistory(
            messages=state_container.session_service.list_messages(session_id)
        )

    @app.post("/sessions/{session_id}/chat")
    async def send_chat(
        session_id: UUID,
        payload: ChatRequest,
        request: Request,
        x_api_key: str | None = Header(default=None),
    ) -> ChatReply:
        """Answer a chat message."""
        state_container: AppContainer = request.app.state.container
        message = await state_container.chat_service.send(
            session_id, payload.text, image=payload.image, api_key=x_api_key
        )
        return ChatReply(message=message)

    async def _run_analysis(
        state_container: AppContainer,
        session_id: UUID,
        image: str | None,
        api_key: str | None,
    ) -> AnalysisResponse:
        sessions = state_container.session_service
        async with sessions.exclusive(session_id) as session:
            language = session.language
            try:
                parsed = await state_container.analysis_service.analyze(
                    session.profile, image, language=language, api_key=api_key
                )
            except MissingImageError as exc:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=notice("upload_first", language),
                ) from exc
            except AnalysisFailedError as exc:
                logger.exception(
                    "Food analysis failed", extra={"session_id": str(session_id)}
                )
                raise HTTPException(
                    status_code=status.HTTP_502_BAD_GATEWAY,
                    detail=_format_error(
                        state_container, exc, notice("analysis_error", language)
                    ),
                ) from exc
            sessions.record_analysis(session_id, parsed.record, image or "")
        return _analysis_response(parsed, session.profile, language)

    return app


def _session_response(
    state_container: AppContainer, session: SessionRecord
) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        profile=session.profile,
        language=session.language,
        analysis=session.analysis,
        has_image=session.image is not None,
        message_count=len(session.messages),
        busy=state_container.session_service.is_busy(session.id),
    )


def _analysis_response(
    parsed: ParsedNutrition, profile: Profile, language: Language
) -> AnalysisResponse:
    record = parsed.record
    band = score_band(record.health_score)
    return AnalysisResponse(
        analysis=record,
        source=parsed.source,
        fields_found=sorted(parsed.fields_found),
        confidence=parsed.confidence,
        score_band=band,
        score_label=SCORE_BAND_LABELS[band],
        alerts=nutrient_alerts(record, profile),
        notice=notice("analysis_complete", language),
    )


def _format_error(state_container: AppContainer, exc: Exception, fallback: str) -> str:
    """Return a user-facing error message with local debug info."""
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            return f"{fallback} (debug: {detail})"
    return fallback
