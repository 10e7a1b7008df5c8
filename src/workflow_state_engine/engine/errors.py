"""Errors raised by the workflow engine.

Client errors (bad definitions, unknown ids, rejected actions) are kept apart
from :class:`DefinitionIntegrityError`, which signals a consistency bug rather
than bad input.
"""

from __future__ import annotations

from typing import Literal

RejectionReason = Literal[
    "action_unavailable",
    "wrong_source_state",
    "target_unavailable",
    "final_state",
]


class WorkflowEngineError(Exception):
    pass


class InvalidDefinition(WorkflowEngineError):
    def __init__(self, reasons: list[str]) -> None:
        self.reasons = list(reasons)
        super().__init__("Invalid definition: " + "; ".join(self.reasons))


class DuplicateId(WorkflowEngineError):
    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} ID '{entity_id}' already exists.")


class DefinitionNotFound(WorkflowEngineError):
    def __init__(self, definition_id: str) -> None:
        self.definition_id = definition_id
        super().__init__(f"Workflow definition '{definition_id}' not found.")


class InstanceNotFound(WorkflowEngineError):
    def __init__(self, instance_id: str) -> None:
        self.instance_id = instance_id
        super().__init__(f"Instance '{instance_id}' not found.")


class ActionRejected(WorkflowEngineError):
    def __init__(self, action_id: str, reason: RejectionReason, message: str) -> None:
        self.action_id = action_id
        self.reason = reason
        super().__init__(message)


class DefinitionIntegrityError(WorkflowEngineError):
    """Stored data is inconsistent (e.g. an instance points at a missing definition)."""


class ConcurrentModification(WorkflowEngineError):
    def __init__(self, instance_id: str, attempts: int) -> None:
        self.instance_id = instance_id
        self.attempts = attempts
        super().__init__(
            f"Instance '{instance_id}' was modified concurrently; gave up after {attempts} attempts."
        )
