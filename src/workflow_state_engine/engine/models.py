"""Domain types for workflow definitions and their running instances.

All values are immutable. A stored definition or instance is never mutated;
transitions produce a new :class:`WorkflowInstance` instead.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class State:
    id: str
    is_initial: bool = False
    is_final: bool = False
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class Action:
    """A directed transition rule: any of `from_states` -> `to_state`."""

    id: str
    from_states: tuple[str, ...]
    to_state: str
    enabled: bool = True

    def can_fire_from(self, state_id: str) -> bool:
        return state_id in self.from_states


@dataclass(frozen=True, slots=True)
class WorkflowDefinition:
    id: str
    states: tuple[State, ...] = ()
    actions: tuple[Action, ...] = ()

    def initial_states(self) -> list[State]:
        return [s for s in self.states if s.is_initial]

    def find_state(self, state_id: str) -> State | None:
        # First match wins when ids are duplicated (only possible in lenient mode).
        for state in self.states:
            if state.id == state_id:
                return state
        return None

    def find_action(self, action_id: str) -> Action | None:
        for action in self.actions:
            if action.id == action_id:
                return action
        return None


@dataclass(frozen=True, slots=True)
class WorkflowInstance:
    instance_id: str
    definition_id: str
    current_state: str

    def with_state(self, state_id: str) -> WorkflowInstance:
        return replace(self, current_state=state_id)


def new_instance_id() -> str:
    return str(uuid.uuid4())
