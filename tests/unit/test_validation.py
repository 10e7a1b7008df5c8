"""Unit tests for definition validation."""

from __future__ import annotations

import pytest

from workflow_state_engine.engine.errors import InvalidDefinition
from workflow_state_engine.engine.models import Action, State, WorkflowDefinition
from workflow_state_engine.engine.validation import validate_definition


@pytest.mark.parametrize("initial_count", [0, 2, 3])
def test_rejects_wrong_initial_state_count(initial_count: int) -> None:
    states = tuple(State(id=f"s{i}", is_initial=i < initial_count) for i in range(4))
    definition = WorkflowDefinition(id="wf", states=states)

    with pytest.raises(InvalidDefinition) as exc_info:
        validate_definition(definition)

    assert exc_info.value.reasons == ["must have exactly one initial state"]


def test_rejects_definition_without_states() -> None:
    with pytest.raises(InvalidDefinition):
        validate_definition(WorkflowDefinition(id="empty"))


def test_accepts_well_formed_definition(doc_approval: WorkflowDefinition) -> None:
    validate_definition(doc_approval)
    validate_definition(doc_approval, strict=True)


def test_lenient_mode_accepts_dangling_references() -> None:
    definition = WorkflowDefinition(
        id="dangling",
        states=(State(id="start", is_initial=True),),
        actions=(Action(id="go", from_states=("nowhere",), to_state="missing"),),
    )

    validate_definition(definition)


def test_strict_mode_rejects_dangling_references() -> None:
    definition = WorkflowDefinition(
        id="dangling",
        states=(State(id="start", is_initial=True),),
        actions=(Action(id="go", from_states=("start", "nowhere"), to_state="missing"),),
    )

    with pytest.raises(InvalidDefinition) as exc_info:
        validate_definition(definition, strict=True)

    assert exc_info.value.reasons == [
        "action 'go' references unknown source state 'nowhere'",
        "action 'go' references unknown target state 'missing'",
    ]


def test_strict_mode_rejects_duplicate_ids_and_empty_sources() -> None:
    definition = WorkflowDefinition(
        id="dups",
        states=(State(id="a", is_initial=True), State(id="a"), State(id="b")),
        actions=(
            Action(id="go", from_states=("a",), to_state="b"),
            Action(id="go", from_states=(), to_state="b"),
        ),
    )

    with pytest.raises(InvalidDefinition) as exc_info:
        validate_definition(definition, strict=True)

    reasons = exc_info.value.reasons
    assert "duplicate state id 'a'" in reasons
    assert "duplicate action id 'go'" in reasons
    assert "action 'go' has no source states" in reasons


def test_reports_all_reasons_together() -> None:
    definition = WorkflowDefinition(
        id="bad",
        states=(State(id="a"),),
        actions=(Action(id="go", from_states=("a",), to_state="z"),),
    )

    with pytest.raises(InvalidDefinition) as exc_info:
        validate_definition(definition, strict=True)

    assert exc_info.value.reasons[0] == "must have exactly one initial state"
    assert len(exc_info.value.reasons) == 2
    assert "must have exactly one initial state" in str(exc_info.value)
