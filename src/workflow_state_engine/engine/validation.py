"""Structural checks run before a definition is accepted."""

from __future__ import annotations

from collections import Counter

from .errors import InvalidDefinition
from .models import WorkflowDefinition


def validate_definition(definition: WorkflowDefinition, *, strict: bool = False) -> None:
    """Raise :class:`InvalidDefinition` listing every rule the definition breaks.

    The initial-state rule is always enforced. Strict mode also requires unique
    ids and that every action only references declared states.

    Id uniqueness across definitions is not checked here; the store's atomic
    insert-if-absent decides that.
    """

    reasons: list[str] = []

    if len(definition.initial_states()) != 1:
        reasons.append("must have exactly one initial state")

    if strict:
        reasons.extend(_strict_reasons(definition))

    if reasons:
        raise InvalidDefinition(reasons)


def _strict_reasons(definition: WorkflowDefinition) -> list[str]:
    reasons: list[str] = []

    state_ids = [s.id for s in definition.states]
    for state_id, count in Counter(state_ids).items():
        if count > 1:
            reasons.append(f"duplicate state id '{state_id}'")

    for action_id, count in Counter(a.id for a in definition.actions).items():
        if count > 1:
            reasons.append(f"duplicate action id '{action_id}'")

    known = set(state_ids)
    for action in definition.actions:
        if not action.from_states:
            reasons.append(f"action '{action.id}' has no source states")
        for source in action.from_states:
            if source not in known:
                reasons.append(f"action '{action.id}' references unknown source state '{source}'")
        if action.to_state not in known:
            reasons.append(
                f"action '{action.id}' references unknown target state '{action.to_state}'"
            )

    return reasons
