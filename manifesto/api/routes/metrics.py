"""
Metrics Route — GET /metrics

Recent performance samples of the shared compiler, checker and scanner.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from manifesto.api.dependencies import get_compliance_checker, get_rule_compiler, get_scanner
from manifesto.core.compliance_checker import PatternComplianceChecker
from manifesto.core.rule_compiler import RuleCompiler
from manifesto.core.scanner import SyntaxViolationScanner
from manifesto.models.api_models import MetricsResponse

router = APIRouter()


@router.get("/metrics", response_model=MetricsResponse)
async def metrics(
    compiler: RuleCompiler = Depends(get_rule_compiler),
    checker: PatternComplianceChecker = Depends(get_compliance_checker),
    scanner: SyntaxViolationScanner = Depends(get_scanner),
):
    return MetricsResponse(
        compiler=compiler.metrics.export(),
        checker=checker.metrics.export(),
        scanner=scanner.metrics.export(),
    )
