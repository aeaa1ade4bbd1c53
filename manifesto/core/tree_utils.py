"""
Syntax tree helpers shared by the scanner and its rule modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_sitter import Node

from manifesto.models.diagnostic_models import (
    Diagnostic,
    DiagnosticSeverity,
    Span,
    ViolationKind,
)
from manifesto.models.rule_models import Severity


FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
METHOD_TYPE = "method_definition"
ARROW_FUNCTION_TYPE = "arrow_function"
FUNCTION_EXPRESSION_TYPES = frozenset({"function_expression", "function"})


@dataclass
class ScanContext:
    """Per-file state handed to every rule check during one scan."""

    file_path: str
    source: bytes
    max_function_statements: int = 50
    test_path_indicators: list[str] = field(default_factory=lambda: ["test", "spec"])
    _line_starts: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._line_starts = line_start_offsets(self.source)

    @property
    def is_test_file(self) -> bool:
        path = self.file_path.lower()
        return any(indicator in path for indicator in self.test_path_indicators)

    def text(self, node: Node) -> str:
        return node_text(node, self.source)

    def char_point(self, point: tuple[int, int]) -> tuple[int, int]:
        """Convert a tree-sitter (row, byte column) point to (row, character column)."""
        row, byte_column = point
        if row >= len(self._line_starts):
            return (row, byte_column)
        start = self._line_starts[row]
        line_end = self._line_starts[row + 1] - 1 if row + 1 < len(self._line_starts) else len(self.source)
        prefix = self.source[start:min(start + byte_column, line_end)]
        return (row, len(prefix.decode("utf-8", errors="replace")))

    def span(self, start: tuple[int, int], end: tuple[int, int]) -> Span:
        return make_span(self.char_point(start), self.char_point(end))

    def node_span(self, node: Node) -> Span:
        return self.span(tuple(node.start_point), tuple(node.end_point))

    def diagnostic(
        self,
        kind: ViolationKind,
        severity: DiagnosticSeverity,
        rule_severity: Severity,
        message: str,
        suggestion: str,
        span: Span,
    ) -> Diagnostic:
        return Diagnostic(
            rule_id=kind,
            severity=severity,
            rule_severity=rule_severity,
            message=message,
            suggestion=suggestion,
            span=span,
            file=self.file_path,
        )


def node_text(node: Node, source: bytes) -> str:
    """Extract source text for a node."""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def line_start_offsets(source: bytes) -> list[int]:
    """Byte offset at which each line of `source` starts."""
    starts = [0]
    index = source.find(b"\n")
    while index != -1:
        starts.append(index + 1)
        index = source.find(b"\n", index + 1)
    return starts


def make_span(start: tuple[int, int], end: tuple[int, int]) -> Span:
    """Build a Span from 0-based (row, character column) points."""
    return Span(
        start_line=start[0] + 1,
        start_column=start[1],
        end_line=end[0] + 1,
        end_column=end[1],
    )


def name_end(node: Node) -> tuple[int, int]:
    """End of the declared name, so the span highlights `function foo` and not the body."""
    name = node.child_by_field_name("name")
    if name is not None:
        return tuple(name.end_point)
    row, column = node.start_point
    return (row, column + 20)


def async_keyword_end(node: Node) -> tuple[int, int]:
    """End of the `async` modifier of a function-like node."""
    for child in node.children:
        if child.type == "async":
            return tuple(child.end_point)
    row, column = node.start_point
    return (row, column + 5)


def is_async(node: Node) -> bool:
    return any(child.type == "async" for child in node.children)


def contains_node_type(node: Node, node_type: str) -> bool:
    """Check whether any descendant of `node` has the given type."""
    stack = list(node.children)
    while stack:
        current = stack.pop()
        if current.type == node_type:
            return True
        stack.extend(current.children)
    return False


def string_literal_value(node: Node, source: bytes) -> str:
    """Text of a `string` node without its quotes."""
    text = node_text(node, source)
    if len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
        return text[1:-1]
    return text
