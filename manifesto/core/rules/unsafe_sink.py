"""
Unsafe Sink Rule — Detects access to raw-markup DOM properties.

`element.innerHTML = userInput` renders attacker-controlled markup and is the
classic XSS sink.
"""

from __future__ import annotations

from tree_sitter import Node

from manifesto.core.tree_utils import ScanContext
from manifesto.models.diagnostic_models import Diagnostic, DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity


RULE_ID = ViolationKind.UNSAFE_SINK

UNSAFE_SINK_PROPERTIES = {"innerHTML", "outerHTML"}


def check(node: Node, ctx: ScanContext) -> list[Diagnostic]:
    """Flag `x.innerHTML` / `x.outerHTML` member access."""
    if node.type != "member_expression":
        return []

    prop = node.child_by_field_name("property")
    if prop is None:
        return []
    name = ctx.text(prop)
    if name not in UNSAFE_SINK_PROPERTIES:
        return []

    return [
        ctx.diagnostic(
            RULE_ID,
            DiagnosticSeverity.ERROR,
            Severity.CRITICAL,
            f"Manifesto Violation: {name} usage detected (XSS vulnerability)",
            "Use textContent, createElement, or safe DOM methods instead",
            ctx.node_span(node),
        )
    ]
