"""Workflow engine core.

This package holds everything with real invariants:
- the immutable definition/instance model
- the definition validator
- the transition resolver (state machine)
- the concurrent in-memory stores and the lifecycle service that ties them together

It has no knowledge of HTTP; see `workflow_state_engine.server` for that.
"""

from __future__ import annotations

from .config import EngineSettings
from .errors import (
    ActionRejected,
    ConcurrentModification,
    DefinitionIntegrityError,
    DefinitionNotFound,
    DuplicateId,
    InstanceNotFound,
    InvalidDefinition,
    WorkflowEngineError,
)
from .models import Action, State, WorkflowDefinition, WorkflowInstance
from .service import WorkflowService

__all__ = [
    "Action",
    "ActionRejected",
    "ConcurrentModification",
    "DefinitionIntegrityError",
    "DefinitionNotFound",
    "DuplicateId",
    "EngineSettings",
    "InstanceNotFound",
    "InvalidDefinition",
    "State",
    "WorkflowDefinition",
    "WorkflowEngineError",
    "WorkflowInstance",
    "WorkflowService",
]
