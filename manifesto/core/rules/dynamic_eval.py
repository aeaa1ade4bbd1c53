"""
Dynamic Eval Rule — Detects eval() calls.

Any string handed to eval() runs as code, so the call itself is the finding.
"""

from __future__ import annotations

from tree_sitter import Node

from manifesto.core.tree_utils import ScanContext
from manifesto.models.diagnostic_models import Diagnostic, DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity


RULE_ID = ViolationKind.DYNAMIC_EVAL

DANGEROUS_FUNCTIONS = {"eval"}


def check(node: Node, ctx: ScanContext) -> list[Diagnostic]:
    """Detect calls whose callee is the bare `eval` identifier."""
    if node.type != "call_expression":
        return []

    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "identifier":
        return []
    if ctx.text(callee) not in DANGEROUS_FUNCTIONS:
        return []

    return [
        ctx.diagnostic(
            RULE_ID,
            DiagnosticSeverity.ERROR,
            Severity.CRITICAL,
            "Manifesto Violation: eval() usage detected (code injection risk)",
            "Avoid eval() - use safer alternatives like JSON.parse() or proper function calls",
            ctx.node_span(callee),
        )
    ]
