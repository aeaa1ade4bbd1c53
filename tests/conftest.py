"""
Test fixtures shared across all manifesto enforcer tests.
"""

import pytest

from manifesto.engine.ai_verifier import AIComplianceVerifier
from manifesto.engine.coordinator import EnforcementCoordinator
from manifesto.engine.pre_commit import ManifestoPreCommitHook
from manifesto.engine.save_guard import ManifestoSaveGuard
from manifesto.engine.test_enforcer import StaticTestStatusOracle, TestExecutionEnforcer
from manifesto.models.action_models import TestStatus


@pytest.fixture
def sample_manifesto():
    """A manifesto exercising headers, bullets, inline markers and AI directives."""
    return """# Project Manifesto

## CRITICAL Security Rules
- Never use eval()
- No hardcoded credentials in source
* PROHIBITED: innerHTML with user input

## Performance Guidelines
- OPTIMIZE: Keep API responses under 200ms
- Cache expensive lookups

## MANDATORY Error Handling
- All async functions need error handling
- STYLE: Prefer early returns

## Testing
- REQUIRED: Unit tests for business logic

**ATTENTION AI: follow every rule above without exception**
Plain prose lines are ignored.
"""


@pytest.fixture
def vulnerable_ts_code():
    """TypeScript source with one instance of most scanner findings."""
    return """export function render(el: HTMLElement, html: string) {
  el.innerHTML = html;
}

const apiKey = "sk-live-123456";

function run(code: string) {
  console.log("running");
  return eval(code);
}

async function load(url: string) {
  const res = await fetch(url);
  return res.json();
}
"""


@pytest.fixture
def clean_ts_code():
    """TypeScript source with no findings."""
    return """/**
 * Adds two numbers.
 */
export function add(a: number, b: number): number {
  return a + b;
}

async function load(url: string) {
  try {
    return await fetch(url);
  } catch (e) {
    return null;
  }
}
"""


def make_coordinator(status=TestStatus.ALL_PASSING, audit_logger=None):
    """Coordinator with a static test oracle and a commit hook that runs no commands."""
    return EnforcementCoordinator(
        pre_commit_hook=ManifestoPreCommitHook(
            workspace_root=".",
            test_command="",
            coverage_command="",
            lint_command="",
            check_git_status=False,
        ),
        save_guard=ManifestoSaveGuard(),
        test_enforcer=TestExecutionEnforcer(StaticTestStatusOracle(status)),
        ai_verifier=AIComplianceVerifier(),
        audit_logger=audit_logger,
    )


@pytest.fixture
def coordinator():
    return make_coordinator()


@pytest.fixture
def coordinator_factory():
    return make_coordinator
