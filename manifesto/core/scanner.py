"""
Syntax Violation Scanner — Walks a JS/TS syntax tree and reports manifesto violations.

A single pre-order walk visits every node; at each node every rule of the
fixed catalog runs. Rules are independent, so several may fire on the same
node. No manifesto is needed: the catalog is built in.

The scanner never raises. An unsupported file or a failed parse yields an
empty diagnostic list.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from tree_sitter import Node, Tree

from manifesto.cache.diagnostic_cache import DiagnosticCache
from manifesto.config import settings
from manifesto.core.languages import is_supported
from manifesto.core.metrics import MetricsRecorder
from manifesto.core.parser import SourceParser
from manifesto.core.tree_utils import ScanContext
from manifesto.errors import ParseFailureError
from manifesto.models.diagnostic_models import Diagnostic, ViolationKind

# Import all rule modules
from manifesto.core.rules import (
    debug_print,
    dynamic_eval,
    excessive_length,
    hardcoded_credential,
    missing_documentation,
    missing_error_handling,
    unsafe_sink,
)

logger = logging.getLogger("manifesto.scanner")

# Type for a rule check function
RuleCheckFn = Callable[[Node, ScanContext], list[Diagnostic]]

# One check per violation kind, evaluated in this order at every node
RULE_REGISTRY: dict[ViolationKind, RuleCheckFn] = {
    unsafe_sink.RULE_ID: unsafe_sink.check,
    dynamic_eval.RULE_ID: dynamic_eval.check,
    debug_print.RULE_ID: debug_print.check,
    hardcoded_credential.RULE_ID: hardcoded_credential.check,
    missing_documentation.RULE_ID: missing_documentation.check,
    missing_error_handling.RULE_ID: missing_error_handling.check,
    excessive_length.RULE_ID: excessive_length.check,
}


class SyntaxViolationScanner:
    """
    Structural scanner for JavaScript/TypeScript sources.

    Idempotent and side-effect free apart from the optional diagnostic cache,
    whose entry for a document is replaced on every pass.
    """

    def __init__(
        self,
        parser: SourceParser | None = None,
        cache: DiagnosticCache | None = None,
        metrics: MetricsRecorder | None = None,
        max_function_statements: int | None = None,
        test_path_indicators: list[str] | None = None,
    ) -> None:
        self.parser = parser or SourceParser()
        self.cache = cache
        self.metrics = metrics if metrics is not None else MetricsRecorder()
        self.rules = RULE_REGISTRY
        self.max_function_statements = (
            max_function_statements
            if max_function_statements is not None
            else settings.max_function_statements
        )
        self.test_path_indicators = (
            test_path_indicators
            if test_path_indicators is not None
            else list(settings.test_path_indicators)
        )

    def should_analyze(self, file_path: str) -> bool:
        """Only files whose extension is in the language registry are scanned."""
        return isinstance(file_path, str) and bool(file_path) and is_supported(file_path)

    def scan(self, source: str, file_path: str) -> list[Diagnostic]:
        """
        Parse and scan one source file.

        Args:
            source: Raw file text.
            file_path: Path used for the language lookup and test-file detection.

        Returns:
            Fresh list of diagnostics (empty when skipped or unparseable).
        """
        if not self.should_analyze(file_path):
            logger.debug(f"Skipping unsupported file: {file_path}")
            return []

        if not isinstance(source, str):
            logger.error(f"Cannot scan {file_path}: source is {type(source).__name__}, not str")
            return []

        if len(source.encode("utf-8", errors="replace")) > settings.max_file_size_bytes:
            logger.warning(f"Skipping {file_path}: exceeds {settings.max_file_size_bytes} bytes")
            return []

        try:
            tree, source_bytes = self.parser.parse(source, file_path)
        except ParseFailureError as e:
            logger.error(f"Syntax tree construction failed: {e}")
            return []

        return self.scan_tree(tree, source_bytes, file_path)

    def scan_tree(self, tree: Tree, source_bytes: bytes, file_path: str) -> list[Diagnostic]:
        """Run the rule catalog over an already parsed tree."""
        start = time.monotonic()
        ctx = ScanContext(
            file_path=file_path,
            source=source_bytes,
            max_function_statements=self.max_function_statements,
            test_path_indicators=self.test_path_indicators,
        )

        diagnostics: list[Diagnostic] = []
        # Pre-order: children pushed in reverse so the first child is visited next
        stack: list[Node] = [tree.root_node]
        while stack:
            node = stack.pop()
            diagnostics.extend(self._check_node(node, ctx))
            stack.extend(reversed(node.children))

        elapsed = (time.monotonic() - start) * 1000
        self.metrics.record(elapsed, operation="scan")
        logger.debug(f"{file_path}: {len(diagnostics)} diagnostics ({elapsed:.1f}ms)")
        return diagnostics

    def _check_node(self, node: Node, ctx: ScanContext) -> list[Diagnostic]:
        found: list[Diagnostic] = []
        for kind, check_fn in self.rules.items():
            try:
                found.extend(check_fn(node, ctx))
            except Exception as e:
                # Rule failures should not crash the scan
                logger.warning(
                    f"Rule '{kind.value}' failed on {ctx.file_path}:"
                    f"{node.start_point[0] + 1}: {type(e).__name__}: {e}"
                )
        return found

    def analyze_document(self, file_path: str, source: str) -> list[Diagnostic]:
        """
        Scan a document and replace its stored diagnostic set.

        Redundant calls on unchanged content reuse the stored set.
        """
        if self.cache is None or not isinstance(source, str):
            return self.scan(source, file_path)

        cached = self.cache.get(file_path, source)
        if cached is not None:
            logger.debug(f"Cache hit: {file_path}")
            return list(cached.diagnostics)

        diagnostics = self.scan(source, file_path)
        self.cache.put(file_path, source, diagnostics)
        return diagnostics
