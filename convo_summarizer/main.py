"""FastAPI application factory for the conversation summarizer."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from convo_summarizer import __version__ as app_version
from convo_summarizer.api.routes import router
from convo_summarizer.config import Settings, get_settings
from convo_summarizer.personalization.loader import get_preset_catalog
from convo_summarizer.summarizer.errors import InvalidInputError
from convo_summarizer.summarizer.service import get_orchestrator

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


def _error_body(detail: Any) -> Dict[str, Any]:
    if isinstance(detail, dict) and "error" in detail:
        return detail
    if detail == "There was an error parsing the body":
        return {"error": "invalid_json", "details": detail}
    return {"error": "http_error", "details": detail}


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the service as ``{"error": ..., "details": ...}``."""

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"error": "invalid_input", "details": str(exc)}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "validation_error", "details": exc.errors()},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    catalog = get_preset_catalog()
    orchestrator = get_orchestrator()
    plan = ", ".join(f"{p.model} x{p.attempts}" for p in orchestrator.attempt_plan)
    logger.info(
        f"Summarizer ready: {len(catalog.list_styles())} styles, "
        f"gateway={'none' if orchestrator.gateway is None else orchestrator.gateway.name}, "
        f"plan=[{plan}]"
    )
    yield


def create_application() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="AI summaries of conversations with multi-model fallback.",
        version=app_version,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/healthz", tags=["health"])
    async def healthz() -> Dict[str, Any]:
        return {
            "status": "ok",
            "version": app_version,
            "environment": settings.environment,
            "provider": settings.llm_provider,
            "models": [settings.primary_model, settings.fallback_model],
        }

    app.include_router(router)
    return app


app = create_application()
