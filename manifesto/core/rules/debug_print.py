"""
Debug Print Rule — Detects console.log() left in production code.

Test files (path contains a test indicator such as "test" or "spec") are
exempt.
"""

from __future__ import annotations

from tree_sitter import Node

from manifesto.core.tree_utils import ScanContext
from manifesto.models.diagnostic_models import Diagnostic, DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity


RULE_ID = ViolationKind.DEBUG_PRINT

LOGGING_OBJECT = "console"
DEBUG_METHOD = "log"


def check(node: Node, ctx: ScanContext) -> list[Diagnostic]:
    if node.type != "call_expression" or ctx.is_test_file:
        return []

    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return []

    obj = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    if obj is None or prop is None or obj.type != "identifier":
        return []
    if ctx.text(obj) != LOGGING_OBJECT or ctx.text(prop) != DEBUG_METHOD:
        return []

    return [
        ctx.diagnostic(
            RULE_ID,
            DiagnosticSeverity.WARNING,
            Severity.RECOMMENDED,
            "Manifesto Violation: console.log in production code",
            "Remove console.log statements before production deployment",
            ctx.node_span(callee),
        )
    ]
