"""
Hardcoded Credential Rule — Detects secrets written as string literals.

Triggers on object properties, variable declarations, class fields and
member assignments whose name looks like a credential and whose value is a
plain string literal.
"""

from __future__ import annotations

from tree_sitter import Node

from manifesto.core.tree_utils import ScanContext, string_literal_value
from manifesto.models.diagnostic_models import Diagnostic, DiagnosticSeverity, ViolationKind
from manifesto.models.rule_models import Severity


RULE_ID = ViolationKind.HARDCODED_CREDENTIAL

CREDENTIAL_MARKERS = ("password", "apikey", "api_key", "secret", "token")

# node type → (field holding the name, field holding the value)
_NAMED_VALUE_FIELDS: dict[str, tuple[str, str]] = {
    "pair": ("key", "value"),
    "variable_declarator": ("name", "value"),
    "public_field_definition": ("name", "value"),
    "field_definition": ("property", "value"),
    "assignment_expression": ("left", "right"),
}

_NAME_TYPES = {"identifier", "property_identifier", "shorthand_property_identifier"}


def is_credential_name(name: str) -> bool:
    lowered = name.lower()
    return any(marker in lowered for marker in CREDENTIAL_MARKERS)


def _target_name(name_node: Node, ctx: ScanContext) -> str:
    if name_node.type in _NAME_TYPES:
        return ctx.text(name_node)
    if name_node.type == "string":
        return string_literal_value(name_node, ctx.source)
    if name_node.type == "member_expression":
        prop = name_node.child_by_field_name("property")
        return ctx.text(prop) if prop is not None else ""
    return ""


def check(node: Node, ctx: ScanContext) -> list[Diagnostic]:
    fields = _NAMED_VALUE_FIELDS.get(node.type)
    if fields is None:
        return []

    name_node = node.child_by_field_name(fields[0])
    value_node = node.child_by_field_name(fields[1])
    if name_node is None or value_node is None or value_node.type != "string":
        return []

    name = _target_name(name_node, ctx)
    if not name or not is_credential_name(name):
        return []

    return [
        ctx.diagnostic(
            RULE_ID,
            DiagnosticSeverity.ERROR,
            Severity.CRITICAL,
            f"Manifesto Violation: Potential hardcoded credential '{name}'",
            "Use environment variables or secure configuration for credentials",
            ctx.node_span(node),
        )
    ]
