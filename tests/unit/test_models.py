"""Unit tests for the immutable workflow data model."""

from __future__ import annotations

import dataclasses
import uuid

import pytest

from workflow_state_engine.engine.models import (
    Action,
    State,
    WorkflowDefinition,
    WorkflowInstance,
    new_instance_id,
)


def test_with_state_copies_instead_of_mutating() -> None:
    original = WorkflowInstance(instance_id="i-1", definition_id="d", current_state="draft")

    moved = original.with_state("in-review")

    assert moved is not original
    assert moved == WorkflowInstance(
        instance_id="i-1", definition_id="d", current_state="in-review"
    )
    assert original.current_state == "draft"


def test_instances_are_frozen() -> None:
    instance = WorkflowInstance(instance_id="i-1", definition_id="d", current_state="draft")
    with pytest.raises(dataclasses.FrozenInstanceError):
        instance.current_state = "approved"  # type: ignore[misc]


def test_definition_lookups(doc_approval: WorkflowDefinition) -> None:
    assert [s.id for s in doc_approval.initial_states()] == ["draft"]
    assert doc_approval.find_state("approved") == State(id="approved", is_final=True)
    assert doc_approval.find_state("missing") is None
    assert doc_approval.find_action("approve") is not None
    assert doc_approval.find_action("missing") is None


def test_lookups_return_first_match_for_duplicate_ids() -> None:
    definition = WorkflowDefinition(
        id="dup",
        states=(State(id="a", is_initial=True), State(id="a", enabled=False)),
        actions=(
            Action(id="go", from_states=("a",), to_state="a"),
            Action(id="go", from_states=("b",), to_state="b", enabled=False),
        ),
    )

    assert definition.find_state("a") == State(id="a", is_initial=True)
    action = definition.find_action("go")
    assert action is not None and action.enabled


def test_action_membership() -> None:
    action = Action(id="approve", from_states=("in-review", "escalated"), to_state="approved")
    assert action.can_fire_from("escalated")
    assert not action.can_fire_from("draft")


def test_new_instance_id_is_unique_uuid() -> None:
    ids = {new_instance_id() for _ in range(100)}
    assert len(ids) == 100
    for value in ids:
        uuid.UUID(value)
