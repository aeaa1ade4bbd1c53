"""
Save Guard — Advisory manifesto check for documents about to be saved.

Never blocks a save: findings are logged and returned for the host to show.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from manifesto.engine.text_checks import (
    async_without_error_handling,
    uses_loose_type,
    uses_unsafe_sink,
)
from manifesto.errors import InvalidInputError

logger = logging.getLogger("manifesto.enforcement.save")


def document_text(document: Any) -> str:
    """Text of a host document: a plain string, a mapping with 'text'/'content', or an object with `.text`."""
    if isinstance(document, str):
        return document
    if isinstance(document, Mapping):
        text = document.get("text", document.get("content"))
    else:
        text = getattr(document, "text", None)
    if not isinstance(text, str):
        raise InvalidInputError("Document has no text content")
    return text


def document_name(document: Any) -> str:
    if isinstance(document, Mapping):
        return str(document.get("path", "<unsaved>"))
    return str(getattr(document, "path", "<unsaved>"))


class ManifestoSaveGuard:
    """Checks a document before save and reports, without blocking."""

    async def on_will_save_document(self, document: Any) -> list[str]:
        """Return the manifesto warnings for a document about to be saved."""
        if not document:
            raise InvalidInputError("Document is required")

        try:
            text = document_text(document)
        except InvalidInputError as e:
            # Advisory path: an unreadable document is reported, the save proceeds
            logger.warning(f"{document_name(document)}: {e}; manifesto checks skipped")
            return [f"SKIPPED: {e}"]

        warnings = self.check_manifesto_compliance(text)
        if warnings:
            logger.warning(
                f"{document_name(document)} violates {len(warnings)} manifesto rules: {warnings}"
            )
        return warnings

    @staticmethod
    def check_manifesto_compliance(text: str) -> list[str]:
        warnings: list[str] = []
        if uses_unsafe_sink(text):
            warnings.append("PROHIBITED: innerHTML usage detected")
        if uses_loose_type(text):
            warnings.append("CRITICAL: any type usage detected")
        if async_without_error_handling(text):
            warnings.append("MANDATORY: Missing error handling in async function")
        return warnings
