"""
Missing Documentation Rule — Public API without a /** ... */ block.

Covers exported function declarations, public methods (no private/protected
modifier, no #private name), and exported arrow functions assigned to a
const/let/var.
"""

from __future__ import annotations

from tree_sitter import Node

from manifesto.core.tree_utils import (
    ARROW_FUNCTION_TYPE,
    FUNCTION_DECLARATION_TYPES,
    METHOD_TYPE,
    ScanContext,
    name_end,
)
from manifesto.models.diagnostic_models import Diagnostic, DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity


RULE_ID = ViolationKind.MISSING_DOCUMENTATION

NON_PUBLIC_MODIFIERS = {"private", "protected"}
_DECLARATION_TYPES = {"lexical_declaration", "variable_declaration"}
# Siblings that may sit between a doc block and the declaration it documents
_LEADING_TRIVIA_TYPES = {"comment", "decorator"}


def _is_exported(node: Node | None) -> bool:
    return node is not None and node.parent is not None and node.parent.type == "export_statement"


def is_public_method(node: Node, ctx: ScanContext) -> bool:
    for child in node.children:
        if child.type == "accessibility_modifier" and ctx.text(child) in NON_PUBLIC_MODIFIERS:
            return False
    name = node.child_by_field_name("name")
    return name is None or name.type != "private_property_identifier"


def documentation_anchor(node: Node, ctx: ScanContext) -> Node | None:
    """The node a doc block must precede, or None if `node` is not public API."""
    if node.type in FUNCTION_DECLARATION_TYPES and _is_exported(node):
        return node.parent
    if node.type == METHOD_TYPE and is_public_method(node, ctx):
        return node
    if node.type == "variable_declarator":
        value = node.child_by_field_name("value")
        declaration = node.parent
        if (
            value is not None
            and value.type == ARROW_FUNCTION_TYPE
            and declaration is not None
            and declaration.type in _DECLARATION_TYPES
            and _is_exported(declaration)
        ):
            return declaration.parent
    return None


def has_doc_comment(anchor: Node, ctx: ScanContext) -> bool:
    """Check the comments immediately preceding `anchor` for a /** */ block."""
    sibling = anchor.prev_sibling
    while sibling is not None and sibling.type in _LEADING_TRIVIA_TYPES:
        if sibling.type == "comment":
            text = ctx.text(sibling)
            if text.startswith("/**") and text.endswith("*/"):
                return True
        sibling = sibling.prev_sibling
    return False


def check(node: Node, ctx: ScanContext) -> list[Diagnostic]:
    anchor = documentation_anchor(node, ctx)
    if anchor is None or has_doc_comment(anchor, ctx):
        return []

    return [
        ctx.diagnostic(
            RULE_ID,
            DiagnosticSeverity.INFORMATION,
            Severity.REQUIRED,
            "Manifesto Violation: Missing JSDoc-equivalent documentation",
            "Add JSDoc comments to document public functions",
            ctx.span(tuple(node.start_point), name_end(node)),
        )
    ]
