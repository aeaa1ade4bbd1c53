"""
Pre-Commit Hook — Blocks commits unless tests, coverage, lint and git status are clean.

Each check raises EnforcementError with a user-facing reason; a commit that
passes every configured check returns True. Checks with no configured command
are skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from manifesto.config import settings
from manifesto.engine.commands import CommandResult, run_command
from manifesto.errors import EnforcementError

logger = logging.getLogger("manifesto.enforcement.commit")

# pytest summary line, e.g. "2 failed, 40 passed, 1 error in 3.2s"
_PASSED_RE = re.compile(r"(\d+) passed")
_FAILED_RE = re.compile(r"(\d+) failed")
_ERRORS_RE = re.compile(r"(\d+) errors?\b")
# coverage.py report, e.g. "TOTAL    812    64    92%"
_COVERAGE_TOTAL_RE = re.compile(r"^TOTAL\s+.*?(\d+(?:\.\d+)?)%\s*$", re.MULTILINE)

GIT_STATUS_COMMAND = "git status --porcelain"


@dataclass
class TestResults:
    __test__ = False

    passed: int = 0
    failed: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.errors


@dataclass
class CoverageResults:
    passed: bool
    percentage: float
    threshold: float


def parse_test_results(output: str) -> TestResults:
    """Parse counts from a pytest summary. Unrecognised output yields all zeros."""

    def _count(pattern: re.Pattern[str]) -> int:
        match = pattern.search(output)
        return int(match.group(1)) if match else 0

    return TestResults(
        passed=_count(_PASSED_RE),
        failed=_count(_FAILED_RE),
        errors=_count(_ERRORS_RE),
    )


def parse_coverage_percentage(output: str) -> float:
    """Total coverage from a coverage.py report; 0.0 when no TOTAL line is found."""
    match = _COVERAGE_TOTAL_RE.search(output)
    return float(match.group(1)) if match else 0.0


class ManifestoPreCommitHook:
    """Commit gate: runs the configured workspace checks in order."""

    def __init__(
        self,
        workspace_root: str | None = None,
        test_command: str | None = None,
        coverage_command: str | None = None,
        lint_command: str | None = None,
        coverage_threshold: float | None = None,
        timeout: float | None = None,
        check_git_status: bool = True,
    ) -> None:
        self.workspace_root = workspace_root or settings.workspace_root
        self.test_command = test_command if test_command is not None else settings.test_command
        self.coverage_command = (
            coverage_command if coverage_command is not None else settings.coverage_command
        )
        self.lint_command = lint_command if lint_command is not None else settings.lint_command
        self.coverage_threshold = (
            coverage_threshold if coverage_threshold is not None else settings.coverage_threshold
        )
        self.timeout = timeout if timeout is not None else settings.test_timeout_seconds
        self.check_git_status = check_git_status

    async def validate_before_commit(self) -> bool:
        """Run every check; raises EnforcementError on the first failure."""
        self._validate_workspace()
        await self.run_all_tests()
        await self.check_code_coverage()
        await self.validate_linting()
        await self.check_worktree_clean()
        logger.info("Pre-commit validation passed")
        return True

    def _validate_workspace(self) -> None:
        if not Path(self.workspace_root).is_dir():
            raise EnforcementError("No workspace folder found")

    async def _run(self, command: str, failure_message: str) -> CommandResult:
        try:
            result = await run_command(command, cwd=self.workspace_root, timeout=self.timeout)
        except OSError as e:
            logger.error(f"Could not start '{command}': {e}")
            raise EnforcementError(failure_message) from e
        if result.timed_out:
            raise EnforcementError(f"{command} timed out after {self.timeout}s")
        return result

    async def run_all_tests(self) -> TestResults | None:
        if not self.test_command:
            return None

        result = await self._run(self.test_command, "Test execution failed")
        results = parse_test_results(result.stdout)
        if results.failed > 0:
            raise EnforcementError(f"Cannot commit with {results.failed} failing tests")
        if not result.ok:
            raise EnforcementError("Test execution failed")
        return results

    async def check_code_coverage(self) -> CoverageResults | None:
        if not self.coverage_command:
            return None

        result = await self._run(self.coverage_command, "Coverage check failed")
        percentage = parse_coverage_percentage(result.stdout)
        if percentage < self.coverage_threshold:
            raise EnforcementError(
                f"Code coverage {percentage:g}% below required {self.coverage_threshold:g}%"
            )
        return CoverageResults(passed=True, percentage=percentage, threshold=self.coverage_threshold)

    async def validate_linting(self) -> None:
        if not self.lint_command:
            return

        result = await self._run(self.lint_command, "Linting failed with errors")
        if not result.ok:
            raise EnforcementError("Linting failed with errors")

    async def check_worktree_clean(self) -> None:
        if not self.check_git_status:
            return

        try:
            result = await run_command(
                GIT_STATUS_COMMAND, cwd=self.workspace_root, timeout=self.timeout
            )
        except OSError as e:
            logger.debug(f"git status unavailable: {e}")
            return

        # Not a git repository (or git missing): nothing to check
        if not result.ok:
            return
        if result.stdout.strip():
            raise EnforcementError("Uncommitted changes detected")
