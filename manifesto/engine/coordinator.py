"""
Enforcement Coordinator — Single gate deciding whether a lifecycle action may proceed.

Routing by action type:
  commit                 → pre-commit hook (False or a raised reason blocks)
  save                   → advisory save guard (never blocks)
  ai-interaction         → AI compliance verifier
  deploy | build | test  → test execution enforcer; compound descriptors such
                           as "deploy to production" are routed here too
  anything else          → blocked as unknown

The coordinator keeps no state between calls beyond its delegates.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from manifesto.audit.logger import AuditLogger
from manifesto.engine.ai_verifier import AIComplianceVerifier
from manifesto.engine.pre_commit import ManifestoPreCommitHook
from manifesto.engine.save_guard import ManifestoSaveGuard
from manifesto.engine.test_enforcer import TestExecutionEnforcer
from manifesto.errors import EnforcementError, InvalidInputError
from manifesto.models.action_models import (
    TEST_GATED_ACTIONS,
    Action,
    ActionType,
    AuditEntry,
    EnforcementStatus,
)

logger = logging.getLogger("manifesto.enforcement")


def is_test_gated(action_type: str) -> bool:
    """True for deploy/build/test, including descriptors that start with one of them."""
    head = action_type.split(maxsplit=1)[0]
    return action_type in TEST_GATED_ACTIONS or head in TEST_GATED_ACTIONS


class EnforcementCoordinator:
    """Routes each action to its validator and turns failures into EnforcementError."""

    def __init__(
        self,
        pre_commit_hook: ManifestoPreCommitHook | None,
        save_guard: ManifestoSaveGuard | None,
        test_enforcer: TestExecutionEnforcer | None,
        ai_verifier: AIComplianceVerifier | None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        if not all((pre_commit_hook, save_guard, test_enforcer, ai_verifier)):
            raise InvalidInputError("All enforcement components are required")

        self.pre_commit_hook = pre_commit_hook
        self.save_guard = save_guard
        self.test_enforcer = test_enforcer
        self.ai_verifier = ai_verifier
        self.audit_logger = audit_logger

    async def enforce(self, action: Action | Mapping[str, Any] | None) -> None:
        """
        Decide whether an action may proceed.

        Returns None when allowed.

        Raises:
            InvalidInputError: missing action, type, or required payload field.
            EnforcementError: the action is blocked; the message is user-facing.
        """
        action = self._coerce(action)
        action_type = action.type.strip()
        if not action_type:
            raise InvalidInputError("Action type is required")

        start = time.monotonic()
        try:
            await self._route(action_type, action.payload)
        except EnforcementError as e:
            logger.warning(f"Blocked '{action_type}': {e}")
            self._audit(action_type, allowed=False, reason=str(e), start=start)
            raise

        logger.info(f"Allowed '{action_type}'")
        self._audit(action_type, allowed=True, reason="", start=start)

    @staticmethod
    def _coerce(action: Action | Mapping[str, Any] | None) -> Action:
        if action is None:
            raise InvalidInputError("Action cannot be null")
        if isinstance(action, Action):
            return action
        if isinstance(action, Mapping):
            try:
                return Action.model_validate(action)
            except ValidationError as e:
                raise InvalidInputError(f"Malformed action: {e}") from e
        raise InvalidInputError(f"Unsupported action object: {type(action).__name__}")

    async def _route(self, action_type: str, payload: dict[str, Any]) -> None:
        if action_type == ActionType.COMMIT.value:
            await self._enforce_commit()
        elif action_type == ActionType.SAVE.value:
            await self._enforce_save(payload)
        elif action_type == ActionType.AI_INTERACTION.value:
            await self._enforce_ai(payload)
        elif is_test_gated(action_type):
            await self.test_enforcer.enforce_tests_before_action(action_type)
        else:
            raise EnforcementError(f"Unknown action type: {action_type}")

    async def _enforce_commit(self) -> None:
        if not await self.pre_commit_hook.validate_before_commit():
            raise EnforcementError("Commit validation failed")

    async def _enforce_save(self, payload: dict[str, Any]) -> None:
        document = payload.get("document")
        if not document:
            raise InvalidInputError("Document is required for save actions")
        # Advisory only: warnings are surfaced by the host, the save proceeds
        await self.save_guard.on_will_save_document(document)

    async def _enforce_ai(self, payload: dict[str, Any]) -> None:
        response = payload.get("response")
        if not response:
            raise InvalidInputError("Response is required for AI actions")
        if not await self.ai_verifier.verify_ai_response(response):
            raise EnforcementError("AI response violates manifesto rules")

    def _audit(self, action_type: str, allowed: bool, reason: str, start: float) -> None:
        if self.audit_logger is None:
            return
        self.audit_logger.log(
            AuditEntry(
                action_type=action_type,
                allowed=allowed,
                reason=reason,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
        )

    def get_enforcement_status(self) -> EnforcementStatus:
        return EnforcementStatus(
            pre_commit_enabled=self.pre_commit_hook is not None,
            save_guard_enabled=self.save_guard is not None,
            test_enforcement_enabled=self.test_enforcer is not None,
            ai_verification_enabled=self.ai_verifier is not None,
        )
