"""
Supported-language registry for the syntax scanner.

Only languages with a loaded tree-sitter grammar are listed. A file is
analyzed only when its extension appears here.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePath

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language


@dataclass(frozen=True)
class LanguageConfig:
    """A scannable language and the grammar that parses it."""

    name: str
    file_extensions: tuple[str, ...]
    grammar: str = ""


LANGUAGE_CONFIGURATIONS: tuple[LanguageConfig, ...] = (
    LanguageConfig(
        name="TypeScript",
        file_extensions=("ts", "mts", "cts"),
        grammar="typescript",
    ),
    LanguageConfig(
        name="TSX",
        file_extensions=("tsx",),
        grammar="tsx",
    ),
    LanguageConfig(
        name="JavaScript",
        file_extensions=("js", "jsx", "mjs", "cjs"),
        grammar="javascript",
    ),
)


def extension_of(file_path: str) -> str:
    return PurePath(file_path).suffix.lstrip(".").lower()


def language_for_path(file_path: str) -> LanguageConfig | None:
    """Look up the language registered for a file's extension."""
    ext = extension_of(file_path)
    if not ext:
        return None
    for config in LANGUAGE_CONFIGURATIONS:
        if ext in config.file_extensions:
            return config
    return None


def is_supported(file_path: str) -> bool:
    return language_for_path(file_path) is not None


@lru_cache
def load_grammar(grammar: str) -> Language:
    """Load (once) the tree-sitter Language for a grammar name."""
    if grammar == "typescript":
        return Language(tstypescript.language_typescript())
    if grammar == "tsx":
        return Language(tstypescript.language_tsx())
    if grammar == "javascript":
        return Language(tsjavascript.language())
    raise ValueError(f"Unknown grammar: {grammar}")
