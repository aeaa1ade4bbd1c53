"""
Tests for PatternComplianceChecker — rule-wording heuristics and scoring.
"""

import pytest

from manifesto.core.compliance_checker import (
    PatternComplianceChecker,
    compute_score,
    find_async_bodies,
)
from manifesto.errors import InvalidInputError
from manifesto.models.rule_models import (
    Category,
    ComplianceResult,
    Rule,
    RuleViolation,
    Severity,
)


def _rule(rule_id, text, pattern=None, severity=Severity.REQUIRED):
    return Rule(id=rule_id, text=text, severity=severity, pattern=pattern)


def _violation(rule_id):
    return RuleViolation(rule_id=rule_id, severity=Severity.REQUIRED, message="x")


def test_score_five_rules_two_violated():
    violations = [_violation("rule-1"), _violation("rule-1"), _violation("rule-3")]
    assert compute_score(5, violations) == 60


def test_score_without_rules_is_100():
    assert compute_score(0, []) == 100


def test_score_rounds():
    assert compute_score(3, [_violation("rule-1")]) == 67


def test_no_rules_is_compliant():
    result = PatternComplianceChecker().check("eval(x);", [])
    assert result.is_compliant
    assert result.score == 100
    assert result.violations == []


def test_debug_print_heuristic():
    rules = [_rule("rule-1", "No console.log in production")]
    result = PatternComplianceChecker().check('console.log("debug");', rules)
    assert not result.is_compliant
    assert len(result.violations) == 1
    assert result.violations[0].rule_id == "rule-1"
    assert result.violations[0].severity == Severity.REQUIRED
    assert result.score == 0


def test_debug_print_heuristic_needs_matching_rule_text():
    rules = [_rule("rule-1", "Keep functions small")]
    result = PatternComplianceChecker().check('console.log("debug");', rules)
    assert result.is_compliant
    assert result.score == 100


def test_hardcoded_credential_heuristic():
    rules = [_rule("rule-2", "Never commit hardcoded credentials")]
    checker = PatternComplianceChecker()

    flagged = checker.check('const password = "hunter2";', rules)
    assert len(flagged.violations) == 1
    assert "password" in flagged.violations[0].message

    clean = checker.check("const password = process.env.DB_PASSWORD;", rules)
    assert clean.is_compliant


def test_async_error_handling_one_violation_per_function():
    code = """
async function first() { await a(); }
async function second() {
  try { await b(); } catch (e) { log(e); }
}
const third = async (x) => { await c(x); };
"""
    rules = [_rule("rule-3", "All async functions need error handling")]
    result = PatternComplianceChecker().check(code, rules)
    assert len(result.violations) == 2
    messages = " ".join(v.message for v in result.violations)
    assert "'first'" in messages
    assert "'third'" in messages
    # Two violations of the same rule still count once in the score
    assert result.score == 0


def test_find_async_bodies_respects_nesting():
    code = "async function outer() { if (x) { y(); } try { z(); } catch {} }\nfoo();"
    bodies = find_async_bodies(code)
    assert len(bodies) == 1
    name, body = bodies[0]
    assert name == "outer"
    assert body.startswith("{") and body.endswith("}")
    assert "foo()" not in body


def test_pattern_rule():
    rules = [_rule("rule-4", "Use strict mode", pattern=r"['\"]use strict['\"]")]
    checker = PatternComplianceChecker()

    failing = checker.check("function f() {}", rules)
    assert len(failing.violations) == 1
    assert failing.violations[0].message == "Code violates rule: Use strict mode"
    assert failing.violations[0].suggestion == "Ensure your code follows: Use strict mode"

    assert checker.check('"use strict";\nfunction f() {}', rules).is_compliant


def test_mixed_rules_score():
    rules = [
        _rule("rule-1", "No console.log in production"),
        _rule("rule-2", "Never commit hardcoded credentials"),
        _rule("rule-3", "All async functions need error handling"),
        _rule("rule-4", "Keep functions small"),
        _rule("rule-5", "Prefer const"),
    ]
    code = 'console.log("x");\nasync function f() { await g(); }\n'
    result = PatternComplianceChecker().check(code, rules)
    assert {v.rule_id for v in result.violations} == {"rule-1", "rule-3"}
    assert result.score == 60


def test_result_carries_metric():
    result = PatternComplianceChecker().check("let a = 1;", [])
    assert result.metrics is not None
    assert result.metrics.operation == "check"
    assert result.metrics.response_time_ms >= 0


@pytest.mark.parametrize("bad", ["", None, 123])
def test_invalid_code_rejected(bad):
    with pytest.raises(InvalidInputError):
        PatternComplianceChecker().check(bad, [])


def test_missing_rules_rejected():
    with pytest.raises(InvalidInputError):
        PatternComplianceChecker().check("let a = 1;", None)


def test_compliance_invariant_enforced_by_model():
    with pytest.raises(ValueError):
        ComplianceResult(is_compliant=True, violations=[_violation("rule-1")], score=80)
    with pytest.raises(ValueError):
        ComplianceResult(is_compliant=False, violations=[], score=100)


def test_rule_rejects_uncompilable_pattern():
    with pytest.raises(ValueError, match="Invalid rule pattern"):
        Rule(id="rule-0", text="Match something", pattern="(")


def test_unvalidated_bad_pattern_is_invalid_input():
    rule = Rule.model_construct(
        id="rule-0",
        text="Match something",
        pattern="(",
        severity=Severity.REQUIRED,
        category=Category.GENERAL,
    )
    with pytest.raises(InvalidInputError, match="Invalid pattern in rule rule-0"):
        PatternComplianceChecker().check("x = 1", [rule])
