"""
Missing Error Handling Rule — Async functions without any try/catch.

The whole subtree is searched, so a try block in a nested callback also
counts as handling.
"""

from __future__ import annotations

from tree_sitter import Node

from manifesto.core.tree_utils import (
    ARROW_FUNCTION_TYPE,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    METHOD_TYPE,
    ScanContext,
    async_keyword_end,
    contains_node_type,
    is_async,
)
from manifesto.models.diagnostic_models import Diagnostic, DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity


RULE_ID = ViolationKind.MISSING_ERROR_HANDLING

ASYNC_CAPABLE_TYPES = (
    FUNCTION_DECLARATION_TYPES
    | FUNCTION_EXPRESSION_TYPES
    | {METHOD_TYPE, ARROW_FUNCTION_TYPE}
)


def check(node: Node, ctx: ScanContext) -> list[Diagnostic]:
    if node.type not in ASYNC_CAPABLE_TYPES or not is_async(node):
        return []
    if contains_node_type(node, "try_statement"):
        return []

    return [
        ctx.diagnostic(
            RULE_ID,
            DiagnosticSeverity.WARNING,
            Severity.MANDATORY,
            "Manifesto Violation: Async function without error handling",
            "Add try-catch blocks to handle potential errors",
            ctx.span(tuple(node.start_point), async_keyword_end(node)),
        )
    ]
