"""
Compliance Route — POST /compliance/check

Accepts source text plus either pre-compiled rules or a manifesto to compile,
and returns the pattern-level compliance result with its score.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from manifesto.api.dependencies import get_compliance_checker, get_rule_compiler
from manifesto.core.compliance_checker import PatternComplianceChecker
from manifesto.core.rule_compiler import RuleCompiler
from manifesto.errors import InvalidInputError
from manifesto.models.api_models import ComplianceRequest
from manifesto.models.rule_models import ComplianceResult

logger = logging.getLogger("manifesto.api.compliance")
router = APIRouter(prefix="/compliance")


@router.post("/check", response_model=ComplianceResult)
async def check_compliance(
    req: ComplianceRequest,
    compiler: RuleCompiler = Depends(get_rule_compiler),
    checker: PatternComplianceChecker = Depends(get_compliance_checker),
):
    try:
        if req.rules is not None:
            rules = req.rules
        elif req.manifesto is not None:
            rules = compiler.compile(req.manifesto)
        else:
            raise InvalidInputError("Either rules or manifesto is required")
        return checker.check(req.code, rules)
    except InvalidInputError as e:
        logger.info(f"Rejected compliance request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
