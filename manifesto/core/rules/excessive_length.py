"""
Excessive Length Rule — Functions with too many top-level statements.
"""

from __future__ import annotations

from tree_sitter import Node

from manifesto.core.tree_utils import (
    FUNCTION_DECLARATION_TYPES,
    METHOD_TYPE,
    ScanContext,
    name_end,
)
from manifesto.models.diagnostic_models import Diagnostic, DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity


RULE_ID = ViolationKind.EXCESSIVE_LENGTH


def count_statements(body: Node) -> int:
    """Top-level statements in a statement block; comments do not count."""
    return sum(1 for child in body.named_children if child.type != "comment")


def check(node: Node, ctx: ScanContext) -> list[Diagnostic]:
    if node.type not in FUNCTION_DECLARATION_TYPES and node.type != METHOD_TYPE:
        return []

    body = node.child_by_field_name("body")
    if body is None or body.type != "statement_block":
        return []

    statement_count = count_statements(body)
    limit = ctx.max_function_statements
    if statement_count <= limit:
        return []

    return [
        ctx.diagnostic(
            RULE_ID,
            DiagnosticSeverity.INFORMATION,
            Severity.RECOMMENDED,
            f"Manifesto Violation: Function too long ({statement_count} statements, limit: {limit})",
            f"Function has {statement_count} statements (limit: {limit}). "
            "Consider breaking into smaller functions",
            ctx.span(tuple(node.start_point), name_end(node)),
        )
    ]
