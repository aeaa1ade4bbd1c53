"""
Keyword heuristics over free text (AI responses, documents about to be saved).

Deliberately coarse substring checks; the syntax scanner does the precise work.
"""

from __future__ import annotations

UNSAFE_SINK_MARKER = "innerHTML"
LOOSE_TYPE_MARKER = ": any"
ASYNC_MARKER = "async "
PROTECTED_BLOCK_MARKERS = ("try", "catch")


def uses_unsafe_sink(text: str) -> bool:
    return UNSAFE_SINK_MARKER in text


def uses_loose_type(text: str) -> bool:
    return LOOSE_TYPE_MARKER in text


def async_without_error_handling(text: str) -> bool:
    return ASYNC_MARKER in text and not any(m in text for m in PROTECTED_BLOCK_MARKERS)
