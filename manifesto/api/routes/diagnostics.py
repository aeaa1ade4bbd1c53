"""
Diagnostics Route — POST /diagnostics/scan

Scans one document with the syntax-aware scanner. Unsupported file types are
reported as not analyzed with an empty diagnostic list, never as an error.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from manifesto.api.dependencies import get_scanner
from manifesto.core.scanner import SyntaxViolationScanner
from manifesto.models.api_models import DiagnosticsRequest, DiagnosticsResponse

router = APIRouter(prefix="/diagnostics")


@router.post("/scan", response_model=DiagnosticsResponse)
async def scan_document(
    req: DiagnosticsRequest,
    scanner: SyntaxViolationScanner = Depends(get_scanner),
):
    analyzed = scanner.should_analyze(req.path)
    diagnostics = scanner.analyze_document(req.path, req.content) if analyzed else []
    return DiagnosticsResponse(path=req.path, analyzed=analyzed, diagnostics=diagnostics)
