"""FastAPI app factory.

Endpoints are intentionally thin wrappers over `WorkflowService`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi.responses import JSONResponse

from workflow_state_engine import __version__
from workflow_state_engine.engine.config import EngineSettings
from workflow_state_engine.engine.service import WorkflowService
from workflow_state_engine.server.config import ServerSettings
from workflow_state_engine.server.routes import build_router

logger = logging.getLogger(__name__)


def create_app(
    settings: ServerSettings | None = None,
    engine_settings: EngineSettings | None = None,
    *,
    service: WorkflowService | None = None,
) -> FastAPI:
    settings = settings or ServerSettings()
    service = service or WorkflowService(engine_settings or EngineSettings())

    docs = settings.docs_enabled
    app = FastAPI(
        title="Workflow State Engine",
        version=__version__,
        description="Define finite-state workflows, start instances and drive them via actions.",
        openapi_url="/openapi.json" if docs else None,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
    )

    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.parsed_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)

    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.include_router(build_router())

    logger.info(
        "Application created",
        extra={
            "environment": settings.environment,
            "strict_definitions": service.settings.strict_definitions,
            "lock_final_states": service.settings.lock_final_states,
        },
    )
    return app


async def _request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    # Malformed bodies are client errors like any other rejected input: 400, not 422.
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    logger.info(
        "Request body rejected",
        extra={"path": request.url.path, "error_count": len(errors)},
    )
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "errors": _jsonable(errors)},
    )


def _jsonable(errors: list[dict[str, object]]) -> list[dict[str, object]]:
    # `ctx` may hold exception instances that json cannot encode.
    return [
        {key: value for key, value in err.items() if key in {"type", "loc", "msg"}}
        for err in errors
    ]
