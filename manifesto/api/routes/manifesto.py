"""
Manifesto Routes — compile a manifesto, build an AI prompt from it.

  POST /manifesto/compile → structured rules
  POST /manifesto/prompt  → prompt embedding the compiled rules
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from manifesto.api.dependencies import get_rule_compiler
from manifesto.core.rule_compiler import RuleCompiler
from manifesto.errors import InvalidInputError
from manifesto.llm.prompt_builder import generate_prompt
from manifesto.models.api_models import (
    CompileRequest,
    CompileResponse,
    PromptRequest,
    PromptResponse,
)

router = APIRouter(prefix="/manifesto")


@router.post("/compile", response_model=CompileResponse)
async def compile_manifesto(
    req: CompileRequest,
    compiler: RuleCompiler = Depends(get_rule_compiler),
):
    try:
        rules = compiler.compile(req.text)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CompileResponse(rules=rules, count=len(rules))


@router.post("/prompt", response_model=PromptResponse)
async def build_prompt(
    req: PromptRequest,
    compiler: RuleCompiler = Depends(get_rule_compiler),
):
    """Compile the optional manifesto and wrap the user message in the enforcement prompt."""
    try:
        rules = compiler.compile(req.manifesto) if req.manifesto.strip() else []
        prompt = generate_prompt(req.message, rules)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return PromptResponse(prompt=prompt, rule_count=len(rules))
