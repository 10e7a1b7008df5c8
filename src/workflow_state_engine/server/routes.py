"""HTTP handlers and the dispatch table that registers them.

Handlers are plain functions: they pull the service off the app, call one engine
operation, and translate engine errors into HTTP responses. Routing is declared
once in `ROUTES` rather than through decorators.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from workflow_state_engine import __version__
from workflow_state_engine.engine.errors import (
    ActionRejected,
    ConcurrentModification,
    DefinitionIntegrityError,
    DefinitionNotFound,
    DuplicateId,
    InstanceNotFound,
    InvalidDefinition,
)
from workflow_state_engine.engine.service import WorkflowService
from workflow_state_engine.server.models import (
    ActionModel,
    ActionRejectedBody,
    DefinitionModel,
    ExecuteActionRequest,
    InstanceModel,
    StartInstanceRequest,
)


def _service(request: Request) -> WorkflowService:
    service = getattr(request.app.state, "service", None)
    if not isinstance(service, WorkflowService):
        # This should never happen for the real app, but keeps the API fail-fast.
        raise HTTPException(status_code=500, detail="Workflow service not configured")
    return service


def create_definition(
    definition: DefinitionModel, request: Request, response: Response
) -> DefinitionModel:
    try:
        created = _service(request).create_definition(definition.to_domain())
    except (InvalidDefinition, DuplicateId) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    response.headers["Location"] = f"/definitions/{created.id}"
    return DefinitionModel.from_domain(created)


def list_definitions(request: Request) -> list[DefinitionModel]:
    return [DefinitionModel.from_domain(d) for d in _service(request).list_definitions()]


def get_definition(definition_id: str, request: Request) -> DefinitionModel:
    try:
        return DefinitionModel.from_domain(_service(request).get_definition(definition_id))
    except DefinitionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


def start_instance(body: StartInstanceRequest, request: Request) -> InstanceModel:
    try:
        instance = _service(request).start_instance(body.definitionId)
    except DefinitionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except DefinitionIntegrityError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return InstanceModel.from_domain(instance)


def execute_action(
    instance_id: str, body: ExecuteActionRequest, request: Request
) -> InstanceModel | JSONResponse:
    try:
        instance = _service(request).execute_action(instance_id, body.actionId)
    except InstanceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ActionRejected as e:
        payload = ActionRejectedBody(detail=str(e), reason=e.reason)
        return JSONResponse(status_code=400, content=payload.model_dump())
    except ConcurrentModification as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except DefinitionIntegrityError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return InstanceModel.from_domain(instance)


def list_instances(request: Request) -> list[InstanceModel]:
    return [InstanceModel.from_domain(i) for i in _service(request).list_instances()]


def get_instance(instance_id: str, request: Request) -> InstanceModel:
    try:
        return InstanceModel.from_domain(_service(request).get_instance(instance_id))
    except InstanceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


def list_available_actions(instance_id: str, request: Request) -> list[ActionModel]:
    try:
        actions = _service(request).available_actions(instance_id)
    except InstanceNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except DefinitionIntegrityError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return [ActionModel.from_domain(a) for a in actions]


def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@dataclass(frozen=True, slots=True)
class Route:
    method: str
    path: str
    handler: Callable[..., Any]
    summary: str
    status_code: int = 200
    response_model: Any = None
    responses: dict[int | str, dict[str, Any]] = field(default_factory=dict)


ROUTES: tuple[Route, ...] = (
    Route(
        "POST",
        "/definitions",
        create_definition,
        "Define a new workflow.",
        status_code=201,
        response_model=DefinitionModel,
    ),
    Route(
        "GET",
        "/definitions",
        list_definitions,
        "List all workflow definitions.",
        response_model=list[DefinitionModel],
    ),
    Route(
        "GET",
        "/definitions/{definition_id}",
        get_definition,
        "Get a specific workflow definition.",
        response_model=DefinitionModel,
    ),
    Route(
        "POST",
        "/instances",
        start_instance,
        "Start a new workflow instance.",
        response_model=InstanceModel,
    ),
    Route(
        "GET",
        "/instances",
        list_instances,
        "List all workflow instances.",
        response_model=list[InstanceModel],
    ),
    Route(
        "GET",
        "/instances/{instance_id}",
        get_instance,
        "Get a specific workflow instance.",
        response_model=InstanceModel,
    ),
    Route(
        "POST",
        "/instances/{instance_id}/execute",
        execute_action,
        "Execute an action on an instance.",
        response_model=InstanceModel,
        responses={400: {"model": ActionRejectedBody}},
    ),
    Route(
        "GET",
        "/instances/{instance_id}/actions",
        list_available_actions,
        "List the actions executable from the instance's current state.",
        response_model=list[ActionModel],
    ),
    Route("GET", "/health", health, "Service health."),
)


def build_router(routes: tuple[Route, ...] = ROUTES) -> APIRouter:
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            route.handler,
            methods=[route.method],
            status_code=route.status_code,
            response_model=route.response_model,
            responses=route.responses or None,
            summary=route.summary,
        )
    return router
