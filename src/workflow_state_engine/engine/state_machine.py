from __future__ import annotations

from .errors import ActionRejected, DefinitionIntegrityError
from .models import Action, State, WorkflowDefinition, WorkflowInstance


def find_initial_state(definition: WorkflowDefinition) -> State:
    for state in definition.states:
        if state.is_initial:
            return state
    # Validation guarantees an initial state, so reaching this is a data bug.
    raise DefinitionIntegrityError(
        f"Definition '{definition.id}' is invalid: no initial state found."
    )


def resolve_transition(
    definition: WorkflowDefinition,
    instance: WorkflowInstance,
    action_id: str,
    *,
    lock_final_states: bool = False,
) -> WorkflowInstance:
    """Decide the next state for `instance` or reject the action.

    Checks run in a fixed order and stop at the first failure. Nothing is
    written here: the caller stores the returned value.
    """

    if lock_final_states:
        current = definition.find_state(instance.current_state)
        if current is not None and current.is_final:
            raise ActionRejected(
                action_id,
                "final_state",
                f"Instance '{instance.instance_id}' is in final state "
                f"'{instance.current_state}'; no further actions may be executed.",
            )

    action = definition.find_action(action_id)
    if action is None or not action.enabled:
        raise ActionRejected(
            action_id, "action_unavailable", f"Action '{action_id}' not found or is disabled."
        )

    if not action.can_fire_from(instance.current_state):
        raise ActionRejected(
            action_id,
            "wrong_source_state",
            f"Action '{action_id}' cannot be executed from current state "
            f"'{instance.current_state}'.",
        )

    target = definition.find_state(action.to_state)
    if target is None or not target.enabled:
        raise ActionRejected(
            action_id,
            "target_unavailable",
            f"Target state '{action.to_state}' not found or is disabled.",
        )

    return instance.with_state(action.to_state)


def available_actions(
    definition: WorkflowDefinition,
    instance: WorkflowInstance,
    *,
    lock_final_states: bool = False,
) -> list[Action]:
    """Actions that :func:`resolve_transition` would currently accept."""

    out: list[Action] = []
    seen: set[str] = set()
    for action in definition.actions:
        # Only the first action with a given id is ever resolved.
        if action.id in seen:
            continue
        seen.add(action.id)
        try:
            resolve_transition(
                definition, instance, action.id, lock_final_states=lock_final_states
            )
        except ActionRejected:
            continue
        out.append(action)
    return out
