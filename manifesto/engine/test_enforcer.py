"""
Test Execution Enforcer — Requires a passing test suite before build/deploy/test.

The test status comes from an oracle. Only `all-passing` lets the action through.
"""

from __future__ import annotations

import logging
from typing import Protocol

from manifesto.config import settings
from manifesto.engine.commands import run_command
from manifesto.errors import EnforcementError, InvalidInputError
from manifesto.models.action_models import TestStatus

logger = logging.getLogger("manifesto.enforcement.tests")


class TestStatusOracle(Protocol):
    """Anything that can report the current workspace test status."""

    async def get_test_status(self) -> TestStatus | str: ...


class StaticTestStatusOracle:
    """Reports a fixed status; the host updates it after its own test runs."""

    __test__ = False

    def __init__(self, status: TestStatus | str = TestStatus.UNKNOWN) -> None:
        self.status = status

    async def get_test_status(self) -> TestStatus | str:
        return self.status


class CommandTestStatusOracle:
    """Runs the configured test command and maps its exit code to a status."""

    __test__ = False

    def __init__(
        self,
        command: str | None = None,
        cwd: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.command = command if command is not None else settings.test_command
        self.cwd = cwd or settings.workspace_root
        self.timeout = timeout if timeout is not None else settings.test_timeout_seconds

    async def get_test_status(self) -> TestStatus:
        if not self.command:
            return TestStatus.NOT_RUN
        try:
            result = await run_command(self.command, cwd=self.cwd, timeout=self.timeout)
        except OSError as e:
            logger.error(f"Could not start test command '{self.command}': {e}")
            return TestStatus.UNKNOWN

        if result.timed_out:
            return TestStatus.UNKNOWN
        return TestStatus.ALL_PASSING if result.returncode == 0 else TestStatus.FAILING


class TestExecutionEnforcer:
    """Blocks an action unless the oracle reports all tests passing."""

    __test__ = False

    def __init__(self, oracle: TestStatusOracle | None = None) -> None:
        self.oracle = oracle or CommandTestStatusOracle()

    async def enforce_tests_before_action(self, action: str) -> None:
        """
        Raises:
            InvalidInputError: if no action descriptor is given.
            EnforcementError: "Cannot <action> with failing tests" for any status
                other than all-passing.
        """
        if not isinstance(action, str) or not action.strip():
            raise InvalidInputError("Action is required")

        status = await self.oracle.get_test_status()
        if status != TestStatus.ALL_PASSING:
            logger.warning(f"Blocking '{action}': test status is {getattr(status, 'value', status)}")
            raise EnforcementError(f"Cannot {action} with failing tests")
