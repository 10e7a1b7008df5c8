"""Pydantic wire models for the REST server.

Field names are the JSON names clients send and receive. Deserializing into these
models is the field-level validation step; the engine's own validator runs on
the domain values they convert to.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, StrictBool

from workflow_state_engine.engine.errors import RejectionReason
from workflow_state_engine.engine.models import (
    Action,
    State,
    WorkflowDefinition,
    WorkflowInstance,
)

Identifier = Annotated[str, Field(min_length=1)]


class StateModel(BaseModel):
    id: Identifier
    isInitial: StrictBool = False
    isFinal: StrictBool = False
    enabled: StrictBool = True

    def to_domain(self) -> State:
        return State(
            id=self.id,
            is_initial=self.isInitial,
            is_final=self.isFinal,
            enabled=self.enabled,
        )

    @classmethod
    def from_domain(cls, state: State) -> StateModel:
        return cls(
            id=state.id,
            isInitial=state.is_initial,
            isFinal=state.is_final,
            enabled=state.enabled,
        )


class ActionModel(BaseModel):
    id: Identifier
    fromStates: list[Identifier] = Field(default_factory=list)
    toState: Identifier
    enabled: StrictBool = True

    def to_domain(self) -> Action:
        return Action(
            id=self.id,
            from_states=tuple(self.fromStates),
            to_state=self.toState,
            enabled=self.enabled,
        )

    @classmethod
    def from_domain(cls, action: Action) -> ActionModel:
        return cls(
            id=action.id,
            fromStates=list(action.from_states),
            toState=action.to_state,
            enabled=action.enabled,
        )


class DefinitionModel(BaseModel):
    id: Identifier
    states: list[StateModel] = Field(default_factory=list)
    actions: list[ActionModel] = Field(default_factory=list)

    def to_domain(self) -> WorkflowDefinition:
        return WorkflowDefinition(
            id=self.id,
            states=tuple(s.to_domain() for s in self.states),
            actions=tuple(a.to_domain() for a in self.actions),
        )

    @classmethod
    def from_domain(cls, definition: WorkflowDefinition) -> DefinitionModel:
        return cls(
            id=definition.id,
            states=[StateModel.from_domain(s) for s in definition.states],
            actions=[ActionModel.from_domain(a) for a in definition.actions],
        )


class InstanceModel(BaseModel):
    instanceId: str
    definitionId: str
    currentState: str

    @classmethod
    def from_domain(cls, instance: WorkflowInstance) -> InstanceModel:
        return cls(
            instanceId=instance.instance_id,
            definitionId=instance.definition_id,
            currentState=instance.current_state,
        )


class StartInstanceRequest(BaseModel):
    definitionId: Identifier


class ExecuteActionRequest(BaseModel):
    actionId: Identifier


class ActionRejectedBody(BaseModel):
    detail: str
    reason: RejectionReason
