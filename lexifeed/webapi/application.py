"""Application factory for the FastAPI backend."""

from __future__ import annotations

import os
import re
import time
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lexifeed import load_environment
from lexifeed import logging_manager as log_mgr
from lexifeed.errors import InitializationError, TranslationUnavailableError

from .dependencies import get_settings, reset_dependencies
from .routers.feed import router as feed_router
from .routers.health import router as health_router
from .routers.translation import router as translation_router
from .routers.vocabulary import router as vocabulary_router

load_environment()

LOGGER = log_mgr.get_logger().getChild("webapi")

DEFAULT_DEVSERVER_ORIGINS = (
    "http://localhost:8081",
    "http://127.0.0.1:8081",
    "http://localhost:19006",
    "http://127.0.0.1:19006",
)

TRANSLATION_UNAVAILABLE_DETAIL = "Translation service is temporarily unavailable. Please try again later."
INDEX_UNAVAILABLE_DETAIL = "Vocabulary index is not available."
REQUEST_ID_HEADER = "X-Request-ID"


def _parse_cors_origins(raw_value: str | None) -> tuple[list[str], bool]:
    """Return the allowed origins and whether credentials are supported."""

    if raw_value is None:
        return list(DEFAULT_DEVSERVER_ORIGINS), True

    tokens = [token.strip() for token in re.split(r"[\s,]+", raw_value) if token.strip()]
    if not tokens:
        return [], False
    if "*" in tokens:
        return ["*"], False
    return tokens, True


def _configure_cors(app: FastAPI) -> None:
    allowed_origins, allow_credentials = _parse_cors_origins(
        os.environ.get("LEXIFEED_API_CORS_ORIGINS")
    )
    if not allowed_origins:
        LOGGER.info("CORS middleware disabled; no allowed origins configured.")
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _install_request_context(app: FastAPI) -> None:
    """Bind a request id to every log record emitted while serving a request."""

    @app.middleware("http")
    async def _bind_request_id(request: Request, call_next):
        request_id = (
            request.headers.get("x-request-id")
            or request.headers.get("x-correlation-id")
            or uuid4().hex
        )
        started = time.perf_counter()
        with log_mgr.log_context(request_id=request_id):
            response = await call_next(request)
            LOGGER.debug(
                "%s %s",
                request.method,
                request.url.path,
                extra={
                    "event": "webapi.request",
                    "status": response.status_code,
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Map service failures onto HTTP responses."""

    @app.exception_handler(TranslationUnavailableError)
    async def _translation_unavailable(
        request: Request, exc: TranslationUnavailableError
    ) -> JSONResponse:
        LOGGER.warning(
            "Translation unavailable for %s",
            request.url.path,
            extra={"event": "webapi.translation.unavailable", "status": 503},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": TRANSLATION_UNAVAILABLE_DETAIL},
        )

    @app.exception_handler(InitializationError)
    async def _index_unavailable(request: Request, exc: InitializationError) -> JSONResponse:
        LOGGER.error(
            "Forms index unavailable: %s",
            exc,
            extra={"event": "webapi.index.unavailable", "status": 503},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": INDEX_UNAVAILABLE_DETAIL},
        )


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""

    settings = get_settings()
    log_mgr.configure_logging_level(debug_enabled=settings.debug)

    app = FastAPI(title="lexifeed API", version="0.1.0")

    register_exception_handlers(app)
    _install_request_context(app)

    @app.on_event("shutdown")
    async def _release_services() -> None:
        reset_dependencies()

    _configure_cors(app)

    app.include_router(health_router)
    app.include_router(vocabulary_router)
    app.include_router(translation_router)
    app.include_router(feed_router)

    return app


__all__ = ["create_app", "register_exception_handlers"]
