"""Clair-X generation service: FastAPI application.

Endpoints
---------
========  ==========================  ========  ==============================
Method    Path                        Session   Purpose
========  ==========================  ========  ==============================
GET       ``/health``                 no        Liveness and version
POST      ``/api/generate-image``     yes       Generate images (with fallback)
POST      ``/api/generate-video``     yes       Mock video generation
GET       ``/api/user``               yes       Signed-in demo user
POST      ``/api/validate-api-key``   no        Validate a user's Gemini key
GET       ``/api/check-api-status``   no        Server key and model status
POST      ``/api/test-model``         no        Run one prompt on one model
POST      ``/api/moderate-content``   no        Denylist moderation check
POST      ``/api/agentforce``         no        CRM-based prompt enhancement
GET       ``/api/metrics``            no        In-memory generation metrics
========  ==========================  ========  ==============================

Usage
-----
CLI (installed entry point)::

    clairx

Direct invocation::

    python -m clairx.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from clairx import __version__
from clairx.api.auth import require_session
from clairx.api.errors import ApiError, register_exception_handlers
from clairx.config import Settings
from clairx.logging_config import configure_logging
from clairx.models.errors import ErrorCode
from clairx.models.requests import (
    AgentforceRequest,
    ApiKeyValidationRequest,
    ImageGenerationRequest,
    ModelTestRequest,
    ModerationRequest,
    VideoGenerationRequest,
)
from clairx.models.responses import (
    AgentforceResponse,
    ApiKeyValidationResponse,
    ApiStatusResponse,
    ImageGenerationResponse,
    ModelTestResponse,
    ModerationResult,
    UserInfo,
    VideoGenerationResponse,
)
from clairx.providers.base import ContentProvider
from clairx.providers.gemini_provider import GeminiProvider
from clairx.services.agentforce_service import enhance_prompt
from clairx.services.credential_service import resolve_credential
from clairx.services.image_service import ImageService
from clairx.services.key_check_service import check_server_status, run_model_test, validate_api_key
from clairx.services.metrics_service import MetricsService
from clairx.services.model_probe import ModelProber
from clairx.services.moderation_service import moderate
from clairx.services.video_service import VideoService

logger = logging.getLogger(__name__)

DEMO_USER = UserInfo(name="Demo User", email="user@example.com", image="/vibrant-street-market.png")

PROMPT_REJECTED_MESSAGE = (
    "Your prompt contains content that violates our guidelines. Please revise and try again."
)

router = APIRouter()


def _check_prompt(request: Request, prompt: str, content_type: str) -> None:
    """Reject prompts flagged by moderation when prompt moderation is on."""
    if not request.app.state.settings.moderate_prompts:
        return
    result = moderate(prompt, content_type)
    if not result.safe:
        raise ApiError(400, ErrorCode.CONTENT_REJECTED, PROMPT_REJECTED_MESSAGE)


# ---------------------------------------------------------------------------
# Session-gated endpoints.
# ---------------------------------------------------------------------------


@router.post("/api/generate-image", response_model=ImageGenerationResponse, response_model_exclude_none=True)
async def generate_image(
    body: ImageGenerationRequest,
    request: Request,
    _session: str = Depends(require_session),
) -> ImageGenerationResponse:
    """Generate images; degrades to placeholders instead of failing."""
    _check_prompt(request, body.prompt, "prompt")
    return await request.app.state.image_service.generate(body)


@router.post("/api/generate-video", response_model=VideoGenerationResponse, response_model_exclude_none=True)
async def generate_video(
    body: VideoGenerationRequest,
    request: Request,
    _session: str = Depends(require_session),
) -> VideoGenerationResponse:
    _check_prompt(request, body.prompt, "video-prompt")
    return await request.app.state.video_service.generate(body)


@router.get("/api/user", response_model=UserInfo)
async def get_user(_session: str = Depends(require_session)) -> UserInfo:
    return DEMO_USER


# ---------------------------------------------------------------------------
# Credential and model endpoints.
# ---------------------------------------------------------------------------


@router.post("/api/validate-api-key", response_model=ApiKeyValidationResponse, response_model_exclude_none=True)
async def validate_key(body: ApiKeyValidationRequest, request: Request) -> ApiKeyValidationResponse:
    state = request.app.state
    return await validate_api_key(body.api_key, state.prober, state.settings)


@router.get("/api/check-api-status", response_model=ApiStatusResponse, response_model_exclude_none=True)
async def check_api_status(request: Request) -> ApiStatusResponse:
    state = request.app.state
    return await check_server_status(state.prober, state.settings)


@router.post("/api/test-model", response_model=ModelTestResponse, response_model_exclude_none=True)
async def model_test(body: ModelTestRequest, request: Request) -> ModelTestResponse:
    state = request.app.state
    return await run_model_test(body, state.provider, state.settings)


# ---------------------------------------------------------------------------
# Content helpers.
# ---------------------------------------------------------------------------


@router.post("/api/moderate-content", response_model=ModerationResult)
async def moderate_content(body: ModerationRequest) -> ModerationResult:
    return moderate(body.content, body.content_type)


@router.post("/api/agentforce", response_model=AgentforceResponse)
async def agentforce(body: AgentforceRequest) -> AgentforceResponse:
    return enhance_prompt(body.customer_id, body.prompt)


@router.get("/api/metrics")
async def metrics(request: Request) -> dict[str, Any]:
    return request.app.state.metrics_service.summary()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and report which server key mode is active."""
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    logger.info(
        f"[API] Clair-X {__version__} started; server API key "
        f"{'configured' if resolve_credential(None, settings) else 'not configured'}"
    )
    yield
    logger.info("[API] Clair-X shutting down")


def create_app(settings: Optional[Settings] = None, provider: Optional[ContentProvider] = None) -> FastAPI:
    """
    Build the FastAPI application and its services.

    Args:
        settings: Service settings (loaded from the environment if not provided)
        provider: Content provider (a GeminiProvider if not provided)

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings()
    provider = provider or GeminiProvider(settings)

    app = FastAPI(
        title="Clair-X",
        description="Prompt-to-image generation with Gemini and placeholder fallback.",
        version=__version__,
        lifespan=lifespan,
    )

    metrics_service = MetricsService()
    prober = ModelProber(provider, settings)
    app.state.settings = settings
    app.state.provider = provider
    app.state.prober = prober
    app.state.metrics_service = metrics_service
    app.state.image_service = ImageService(settings, provider, prober=prober, metrics_service=metrics_service)
    app.state.video_service = VideoService(settings)

    # The browser client may be served from another port during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()


def main() -> None:
    """Launch the uvicorn ASGI server using the host and port from Settings."""
    import uvicorn

    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    uvicorn.run(
        "clairx.api.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
