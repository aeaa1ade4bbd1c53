"""
Diagnostic Data Models — Located findings from syntax-tree analysis.

Diagnostics are produced fresh on every scan and never mutated.
Lines are 1-based, columns are 0-based.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from manifesto.models.rule_models import Severity


class DiagnosticSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"


class ViolationKind(str, Enum):
    """Closed catalog of structural violations the scanner knows about."""

    UNSAFE_SINK = "unsafe_sink"
    DYNAMIC_EVAL = "dynamic_eval"
    DEBUG_PRINT = "debug_print"
    HARDCODED_CREDENTIAL = "hardcoded_credential"
    MISSING_DOCUMENTATION = "missing_documentation"
    MISSING_ERROR_HANDLING = "missing_error_handling"
    EXCESSIVE_LENGTH = "excessive_length"


class Span(BaseModel):
    """Source range of the offending token or node."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(..., ge=1)
    start_column: int = Field(..., ge=0)
    end_line: int = Field(..., ge=1)
    end_column: int = Field(..., ge=0)


class Diagnostic(BaseModel):
    """A single located manifesto violation."""

    model_config = ConfigDict(frozen=True)

    rule_id: ViolationKind
    severity: DiagnosticSeverity
    rule_severity: Severity = Field(
        ..., description="Manifesto severity tier this finding corresponds to"
    )
    message: str
    suggestion: str = ""
    span: Span
    file: str = ""
