"""
Error taxonomy for the compliance engine.

Compliance failures are normally returned as data (RuleViolation, Diagnostic).
Only the enforcement coordinator turns them into a raised EnforcementError.
"""

from __future__ import annotations


class ManifestoError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(ManifestoError, ValueError):
    """Missing, empty or wrong-typed argument. Never retried."""


class EnforcementError(ManifestoError):
    """A lifecycle action was blocked. The message is shown to the user verbatim."""


class ParseFailureError(ManifestoError):
    """Syntax tree construction failed. Recovered by the scanner."""
