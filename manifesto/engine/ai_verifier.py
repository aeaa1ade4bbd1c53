"""
AI Compliance Verifier — Checks AI assistant responses before they are applied.
"""

from __future__ import annotations

import logging

from manifesto.engine.text_checks import (
    async_without_error_handling,
    uses_loose_type,
    uses_unsafe_sink,
)
from manifesto.errors import InvalidInputError

logger = logging.getLogger("manifesto.enforcement.ai")


def scan_for_violations(response: str) -> list[str]:
    """Describe every prohibited pattern found in an AI response."""
    violations: list[str] = []
    if uses_unsafe_sink(response):
        violations.append("AI suggested prohibited innerHTML usage")
    if uses_loose_type(response):
        violations.append("AI suggested prohibited any type usage")
    if async_without_error_handling(response):
        violations.append("AI suggested async code without error handling")
    return violations


class AIComplianceVerifier:
    """Rejects AI responses that contain prohibited patterns."""

    async def verify_ai_response(self, response: str) -> bool:
        """Return True when the response is compliant."""
        if not isinstance(response, str) or not response:
            raise InvalidInputError("Response is required")

        violations = scan_for_violations(response)
        if violations:
            logger.warning(f"AI compliance violations: {violations}")
            return False
        return True
