"""
API Request/Response Models — Public contract of the HTTP host surface.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from manifesto.models.diagnostic_models import Diagnostic
from manifesto.models.metrics_models import PerformanceMetric
from manifesto.models.rule_models import Rule


class CompileRequest(BaseModel):
    """Manifesto document to compile."""

    text: str = Field(..., description="Full manifesto markdown")


class CompileResponse(BaseModel):
    rules: list[Rule]
    count: int


class PromptRequest(BaseModel):
    message: str = Field(..., description="User request for the AI assistant")
    manifesto: str = Field(default="", description="Manifesto text; no rules when empty")


class PromptResponse(BaseModel):
    prompt: str
    rule_count: int


class ComplianceRequest(BaseModel):
    code: str = Field(..., description="Source text to check")
    rules: list[Rule] | None = Field(
        default=None, description="Pre-compiled rules; takes precedence over `manifesto`"
    )
    manifesto: str | None = Field(default=None, description="Manifesto text to compile first")


class DiagnosticsRequest(BaseModel):
    """A single document submitted for syntax-aware scanning."""

    path: str = Field(..., description="Document path; its extension selects the grammar")
    content: str = Field(..., description="Document source text")


class DiagnosticsResponse(BaseModel):
    path: str
    analyzed: bool
    diagnostics: list[Diagnostic]


class EnforceRequest(BaseModel):
    type: str = Field(..., description="Lifecycle action type")
    payload: dict[str, Any] = Field(default_factory=dict)


class EnforceResponse(BaseModel):
    allowed: bool
    action_type: str
    reason: str = ""


class MetricsResponse(BaseModel):
    """Performance samples per engine component, oldest first."""

    compiler: list[PerformanceMetric]
    checker: list[PerformanceMetric]
    scanner: list[PerformanceMetric]
