"""
Enforcement Data Models — Lifecycle actions, test status, and audit records.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ActionType(str, Enum):
    COMMIT = "commit"
    SAVE = "save"
    AI_INTERACTION = "ai-interaction"
    DEPLOY = "deploy"
    BUILD = "build"
    TEST = "test"


# Actions that require a passing test suite
TEST_GATED_ACTIONS: frozenset[str] = frozenset(
    {ActionType.DEPLOY.value, ActionType.BUILD.value, ActionType.TEST.value}
)


class TestStatus(str, Enum):
    ALL_PASSING = "all-passing"
    FAILING = "failing"
    NOT_RUN = "not-run"
    UNKNOWN = "unknown"

    __test__ = False  # not a pytest test class


class Action(BaseModel):
    """A lifecycle event submitted by the host. Consumed exactly once."""

    type: str = Field(
        default="",
        description="commit | save | ai-interaction | deploy | build | test, "
        "or a compound descriptor such as 'deploy to production'",
    )
    payload: dict[str, Any] = Field(default_factory=dict)


class EnforcementStatus(BaseModel):
    """Which enforcement delegates are wired into a coordinator."""

    pre_commit_enabled: bool
    save_guard_enabled: bool
    test_enforcement_enabled: bool
    ai_verification_enabled: bool


class AuditEntry(BaseModel):
    """Audit metadata for one enforcement decision."""

    action_type: str
    allowed: bool
    reason: str = ""
    duration_ms: float = 0.0
