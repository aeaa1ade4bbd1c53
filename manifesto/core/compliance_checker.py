"""
Pattern Compliance Checker — Scores code text against compiled manifesto rules.

Text-driven, not tree-based: the wording of each rule selects which heuristic
runs against the raw code. It can under- and over-report; the
SyntaxViolationScanner is the precise, located counterpart.

Score = (total_rules - distinct_violated_rules) / total_rules × 100, rounded.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Callable

from manifesto.core.metrics import MetricsRecorder
from manifesto.errors import InvalidInputError
from manifesto.models.rule_models import ComplianceResult, Rule, RuleViolation

logger = logging.getLogger("manifesto.compliance")

DEBUG_PRINT_LITERAL = "console.log("

CREDENTIAL_LITERAL_RE = re.compile(
    r"""(password|apikey|secret|token)\s*[:=]\s*['"][^'"]+['"]""", re.IGNORECASE
)

# Header of an async function whose body starts at the trailing "{"
ASYNC_FUNCTION_RE = re.compile(
    r"async\s+function\s*\*?\s*(?P<name>[\w$]*)\s*\([^)]*\)\s*(?::[^{]*)?\{"
    r"|(?P<arrow>[\w$]+)?\s*=?\s*async\s*(?:\([^)]*\)|[\w$]+)\s*(?::[^=]*)?=>\s*\{"
)

PROTECTED_BLOCK_RE = re.compile(r"\b(?:try|catch)\b")


def compute_score(total_rules: int, violations: list[RuleViolation]) -> int:
    """Percentage of rules with no violation, 100 when there are no rules."""
    if total_rules <= 0:
        return 100
    violated = len({v.rule_id for v in violations})
    return round(((total_rules - violated) / total_rules) * 100)


def _block_end(code: str, open_brace: int) -> int:
    """Index just past the brace that closes the block opened at `open_brace`."""
    depth = 0
    for i in range(open_brace, len(code)):
        ch = code[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return len(code)


def find_async_bodies(code: str) -> list[tuple[str, str]]:
    """Return (function_name, body_text) for every async function found by regex."""
    bodies: list[tuple[str, str]] = []
    for match in ASYNC_FUNCTION_RE.finditer(code):
        open_brace = match.end() - 1
        body = code[open_brace:_block_end(code, open_brace)]
        name = match.group("name") or match.group("arrow") or "<anonymous>"
        bodies.append((name, body))
    return bodies


def _check_debug_print(code: str, rule: Rule) -> list[RuleViolation]:
    if "console.log" not in rule.text.lower() or DEBUG_PRINT_LITERAL not in code:
        return []
    return [
        RuleViolation(
            rule_id=rule.id,
            severity=rule.severity,
            message=f"console.log statement found in code: {rule.text}",
            suggestion="Remove console.log statements or route output through a logger",
        )
    ]


def _check_hardcoded_credentials(code: str, rule: Rule) -> list[RuleViolation]:
    text = rule.text.lower()
    if "hardcoded" not in text or "credential" not in text:
        return []
    match = CREDENTIAL_LITERAL_RE.search(code)
    if match is None:
        return []
    return [
        RuleViolation(
            rule_id=rule.id,
            severity=rule.severity,
            message=f"Hardcoded credential detected near '{match.group(1)}': {rule.text}",
            suggestion="Load credentials from environment variables or a secret store",
        )
    ]


def _check_async_error_handling(code: str, rule: Rule) -> list[RuleViolation]:
    text = rule.text.lower()
    if "error handling" not in text or "async" not in text:
        return []
    return [
        RuleViolation(
            rule_id=rule.id,
            severity=rule.severity,
            message=f"Async function '{name}' has no error handling (try/catch): {rule.text}",
            suggestion="Wrap awaited operations in try/catch and handle the failure",
        )
        for name, body in find_async_bodies(code)
        if not PROTECTED_BLOCK_RE.search(body)
    ]


def _check_pattern(code: str, rule: Rule) -> list[RuleViolation]:
    # Rules built with model_construct skip validation
    try:
        pattern = rule.compiled_pattern()
    except re.error as e:
        raise InvalidInputError(f"Invalid pattern in rule {rule.id}: {e}") from e
    if pattern is None or pattern.search(code):
        return []
    return [
        RuleViolation(
            rule_id=rule.id,
            severity=rule.severity,
            message=f"Code violates rule: {rule.text}",
            suggestion=f"Ensure your code follows: {rule.text}",
        )
    ]


HeuristicFn = Callable[[str, Rule], list[RuleViolation]]

# Independent heuristics; each decides from the rule's own text whether it applies
HEURISTICS: list[HeuristicFn] = [
    _check_debug_print,
    _check_hardcoded_credentials,
    _check_async_error_handling,
    _check_pattern,
]


class PatternComplianceChecker:
    """Runs every heuristic for every rule and aggregates a compliance score."""

    def __init__(self, metrics: MetricsRecorder | None = None) -> None:
        self.metrics = metrics if metrics is not None else MetricsRecorder()

    def check(self, code: str, rules: list[Rule]) -> ComplianceResult:
        """
        Validate code against a rule set.

        Raises:
            InvalidInputError: if code is not a non-empty string or rules is None.
        """
        if not isinstance(code, str) or not code:
            raise InvalidInputError("Invalid code content: must be non-empty string")
        if rules is None:
            raise InvalidInputError("Rules are required for compliance checking")

        start = time.monotonic()
        violations: list[RuleViolation] = []
        for rule in rules:
            for heuristic in HEURISTICS:
                violations.extend(heuristic(code, rule))

        score = compute_score(len(rules), violations)
        elapsed = (time.monotonic() - start) * 1000
        metric = self.metrics.record(elapsed, operation="check")

        if violations:
            logger.info(
                f"Compliance check: {len(violations)} violations across "
                f"{len({v.rule_id for v in violations})}/{len(rules)} rules, score {score}"
            )

        return ComplianceResult(
            is_compliant=not violations,
            violations=violations,
            score=score,
            metrics=metric,
        )
