"""Workflow definition and instance lifecycle.

`WorkflowService` wires the validator and the transition resolver to the two
stores. It is transport-agnostic: the HTTP layer only translates its results
and exceptions.
"""

from __future__ import annotations

import logging

from .config import EngineSettings
from .errors import (
    ConcurrentModification,
    DefinitionIntegrityError,
    DefinitionNotFound,
    DuplicateId,
    InstanceNotFound,
)
from .models import Action, WorkflowDefinition, WorkflowInstance, new_instance_id
from .state_machine import available_actions, find_initial_state, resolve_transition
from .store import InMemoryStore
from .validation import validate_definition

logger = logging.getLogger(__name__)


class WorkflowService:
    def __init__(
        self,
        settings: EngineSettings | None = None,
        *,
        definitions: InMemoryStore[str, WorkflowDefinition] | None = None,
        instances: InMemoryStore[str, WorkflowInstance] | None = None,
    ) -> None:
        self._settings = settings or EngineSettings()
        self._definitions = definitions if definitions is not None else InMemoryStore()
        self._instances = instances if instances is not None else InMemoryStore()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    # Definitions

    def create_definition(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        validate_definition(definition, strict=self._settings.strict_definitions)

        if not self._definitions.insert_if_absent(definition.id, definition):
            raise DuplicateId("definition", definition.id)

        logger.info(
            "Workflow definition created",
            extra={
                "definition_id": definition.id,
                "states": len(definition.states),
                "actions": len(definition.actions),
            },
        )
        return definition

    def list_definitions(self) -> list[WorkflowDefinition]:
        return self._definitions.values()

    def get_definition(self, definition_id: str) -> WorkflowDefinition:
        definition = self._definitions.get(definition_id)
        if definition is None:
            raise DefinitionNotFound(definition_id)
        return definition

    # Instances

    def start_instance(self, definition_id: str) -> WorkflowInstance:
        definition = self.get_definition(definition_id)
        initial = find_initial_state(definition)

        instance = WorkflowInstance(
            instance_id=new_instance_id(),
            definition_id=definition.id,
            current_state=initial.id,
        )
        self._instances.insert_if_absent(instance.instance_id, instance)

        logger.info(
            "Workflow instance started",
            extra={
                "instance_id": instance.instance_id,
                "definition_id": definition.id,
                "to_state": instance.current_state,
            },
        )
        return instance

    def list_instances(self) -> list[WorkflowInstance]:
        return self._instances.values()

    def get_instance(self, instance_id: str) -> WorkflowInstance:
        instance = self._instances.get(instance_id)
        if instance is None:
            raise InstanceNotFound(instance_id)
        return instance

    def execute_action(self, instance_id: str, action_id: str) -> WorkflowInstance:
        """Move an instance along `action_id`.

        The write is a compare-and-swap against the value that was validated. If
        another request replaced the instance in between, the whole resolution is
        repeated against the fresh value, so a transition is never applied on top
        of a state it was not checked against.
        """

        attempts = self._settings.max_transition_attempts
        for attempt in range(1, attempts + 1):
            instance = self.get_instance(instance_id)
            definition = self._definition_for(instance)

            updated = resolve_transition(
                definition,
                instance,
                action_id,
                lock_final_states=self._settings.lock_final_states,
            )

            if self._instances.compare_and_replace(instance_id, instance, updated):
                logger.info(
                    "Action executed",
                    extra={
                        "instance_id": instance_id,
                        "action_id": action_id,
                        "from_state": instance.current_state,
                        "to_state": updated.current_state,
                    },
                )
                return updated

            logger.info(
                "Instance changed concurrently; retrying",
                extra={"instance_id": instance_id, "action_id": action_id, "attempt": attempt},
            )

        raise ConcurrentModification(instance_id, attempts)

    def available_actions(self, instance_id: str) -> list[Action]:
        instance = self.get_instance(instance_id)
        definition = self._definition_for(instance)
        return available_actions(
            definition, instance, lock_final_states=self._settings.lock_final_states
        )

    def _definition_for(self, instance: WorkflowInstance) -> WorkflowDefinition:
        definition = self._definitions.get(instance.definition_id)
        if definition is None:
            # Definitions are never deleted, so this is a consistency bug.
            logger.error(
                "Instance references a missing definition",
                extra={
                    "instance_id": instance.instance_id,
                    "definition_id": instance.definition_id,
                },
            )
            raise DefinitionIntegrityError(
                f"Could not find definition '{instance.definition_id}' associated with "
                f"instance '{instance.instance_id}'."
            )
        return definition
