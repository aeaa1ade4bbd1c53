"""
Rule Data Models — Compiled manifesto rules, violations, and compliance results.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from manifesto.models.metrics_models import PerformanceMetric


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    MANDATORY = "MANDATORY"
    REQUIRED = "REQUIRED"
    OPTIMIZE = "OPTIMIZE"
    RECOMMENDED = "RECOMMENDED"

    @property
    def rank(self) -> int:
        """Priority rank, 0 is the strictest."""
        return _SEVERITY_RANKS[self]


class Category(str, Enum):
    SECURITY = "SECURITY"
    PERFORMANCE = "PERFORMANCE"
    CODE_QUALITY = "CODE_QUALITY"
    TESTING = "TESTING"
    ARCHITECTURE = "ARCHITECTURE"
    DOCUMENTATION = "DOCUMENTATION"
    ERROR_HANDLING = "ERROR_HANDLING"
    GENERAL = "GENERAL"


_SEVERITY_RANKS: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.MANDATORY: 1,
    Severity.REQUIRED: 2,
    Severity.OPTIMIZE: 3,
    Severity.RECOMMENDED: 4,
}


def severity_order(a: Severity, b: Severity) -> int:
    """Compare two severities: negative if `a` is stricter, 0 if equal, positive otherwise."""
    return a.rank - b.rank


def strictest(*severities: Severity) -> Severity:
    """Return the highest-priority severity. RECOMMENDED when none are given."""
    if not severities:
        return Severity.RECOMMENDED
    return min(severities, key=lambda s: s.rank)


@lru_cache(maxsize=256)
def _compile_pattern(source: str) -> re.Pattern[str]:
    return re.compile(source)


class Rule(BaseModel):
    """A single compiled manifesto rule. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="'rule-<lineIndex>', stable within one compilation")
    text: str = Field(..., description="Rule text with the bullet marker stripped")
    severity: Severity = Severity.RECOMMENDED
    category: Category = Category.GENERAL
    pattern: str | None = Field(
        default=None, description="Optional regex the code must match to comply"
    )

    @field_validator("pattern")
    @classmethod
    def _pattern_must_compile(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                _compile_pattern(value)
            except re.error as e:
                raise ValueError(f"Invalid rule pattern {value!r}: {e}") from e
        return value

    def compiled_pattern(self) -> re.Pattern[str] | None:
        if self.pattern is None:
            return None
        return _compile_pattern(self.pattern)


class RuleViolation(BaseModel):
    """A non-located finding from text/pattern compliance checking."""

    rule_id: str
    severity: Severity
    message: str
    suggestion: str = ""


class ComplianceResult(BaseModel):
    """Outcome of checking a piece of code against a rule set."""

    is_compliant: bool
    violations: list[RuleViolation] = Field(default_factory=list)
    score: int = Field(..., ge=0, le=100)
    metrics: PerformanceMetric | None = None

    @model_validator(mode="after")
    def _compliance_matches_violations(self) -> ComplianceResult:
        if self.is_compliant != (len(self.violations) == 0):
            raise ValueError("is_compliant must be True exactly when there are no violations")
        return self
