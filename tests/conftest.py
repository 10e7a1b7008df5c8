"""Test configuration and fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from workflow_state_engine.engine.config import EngineSettings
from workflow_state_engine.engine.models import Action, State, WorkflowDefinition
from workflow_state_engine.engine.service import WorkflowService
from workflow_state_engine.server.app import create_app
from workflow_state_engine.server.config import ServerSettings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep a developer's `.env` or shell variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "WORKFLOW_STRICT_DEFINITIONS",
        "WORKFLOW_LOCK_FINAL_STATES",
        "WORKFLOW_MAX_TRANSITION_ATTEMPTS",
        "WORKFLOW_ENV",
        "WORKFLOW_HTTPS_REDIRECT",
        "WORKFLOW_CORS_ORIGINS",
        "WORKFLOW_HOST",
        "WORKFLOW_PORT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def doc_approval() -> WorkflowDefinition:
    """The document approval workflow used throughout the tests."""
    return WorkflowDefinition(
        id="doc-approval",
        states=(
            State(id="draft", is_initial=True),
            State(id="in-review"),
            State(id="approved", is_final=True),
            State(id="rejected", is_final=True),
        ),
        actions=(
            Action(id="submit-for-review", from_states=("draft",), to_state="in-review"),
            Action(id="approve", from_states=("in-review",), to_state="approved"),
            Action(id="reject", from_states=("in-review",), to_state="rejected"),
        ),
    )


@pytest.fixture
def doc_approval_payload() -> dict[str, object]:
    """JSON body for the document approval workflow."""
    return {
        "id": "doc-approval",
        "states": [
            {"id": "draft", "isInitial": True, "isFinal": False, "enabled": True},
            {"id": "in-review", "isInitial": False, "isFinal": False, "enabled": True},
            {"id": "approved", "isInitial": False, "isFinal": True, "enabled": True},
            {"id": "rejected", "isInitial": False, "isFinal": True, "enabled": True},
        ],
        "actions": [
            {
                "id": "submit-for-review",
                "fromStates": ["draft"],
                "toState": "in-review",
                "enabled": True,
            },
            {"id": "approve", "fromStates": ["in-review"], "toState": "approved", "enabled": True},
            {"id": "reject", "fromStates": ["in-review"], "toState": "rejected", "enabled": True},
        ],
    }


@pytest.fixture
def service() -> WorkflowService:
    return WorkflowService(EngineSettings())


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ServerSettings(), EngineSettings()))
