"""
Manifesto Enforcer — JavaScript/TypeScript source parser using tree-sitter.
"""

from __future__ import annotations

import logging

from tree_sitter import Parser, Tree

from manifesto.core.languages import language_for_path, load_grammar
from manifesto.errors import ParseFailureError

logger = logging.getLogger("manifesto.parser")


class SourceParser:
    """Thin wrapper around tree-sitter, one Parser per grammar."""

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    def _parser_for(self, grammar: str) -> Parser:
        parser = self._parsers.get(grammar)
        if parser is None:
            parser = Parser(load_grammar(grammar))
            self._parsers[grammar] = parser
        return parser

    def parse(self, code: str, file_path: str) -> tuple[Tree, bytes]:
        """Parse source and return (tree, source_bytes).

        tree-sitter recovers from local syntax errors, so a tree containing
        ERROR nodes is still returned. Raises ParseFailureError when the
        file type is unsupported or no tree can be built at all.
        """
        config = language_for_path(file_path)
        if config is None:
            raise ParseFailureError(f"No grammar registered for '{file_path}'")

        try:
            source_bytes = code.encode("utf-8")
            tree = self._parser_for(config.grammar).parse(source_bytes)
        except (UnicodeEncodeError, ValueError) as e:
            raise ParseFailureError(f"Failed to parse {file_path}: {e}") from e

        if tree is None:
            raise ParseFailureError(f"Failed to parse {file_path}: no tree produced")
        if tree.root_node.has_error:
            logger.debug(f"{file_path}: syntax errors present, scanning recovered tree")
        return tree, source_bytes
