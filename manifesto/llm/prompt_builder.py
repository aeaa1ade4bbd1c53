"""
Prompt Builder — Embeds compiled manifesto rules into an AI assistant prompt.

The host forwards the prompt to whichever AI coding assistant it talks to;
no network call happens here.
"""

from __future__ import annotations

from manifesto.errors import InvalidInputError
from manifesto.models.rule_models import Rule, strictest


SYSTEM_PROMPT = """\
You are a senior software architect and development agent. You MUST strictly follow the development manifesto below. This is non-negotiable and overrides any default behavior."""

CRITICAL_INSTRUCTIONS = """\
- Follow EVERY principle in the manifesto above
- Write code directly to project files when requested
- Enforce all coding standards mentioned
- Apply all architecture principles listed
- Follow all testing requirements specified
- Reject any code that violates these principles
- CRITICAL: Implement comprehensive error handling for all operations
- OPTIMIZE: Ensure all operations complete under 200ms when possible
- REQUIRED: Include unit tests for all business logic"""


def format_rules(rules: list[Rule]) -> str:
    """One `- **SEVERITY**: text` line per rule, strictest rules first, document order kept within a tier."""
    ordered = sorted(rules, key=lambda r: r.severity.rank)
    return "\n".join(f"- **{rule.severity.value}**: {rule.text}" for rule in ordered)


def generate_prompt(user_message: str, rules: list[Rule]) -> str:
    """
    Build the full prompt for an AI interaction.

    Args:
        user_message: The user's request, appended verbatim.
        rules: Compiled manifesto rules; may be empty.

    Returns:
        Complete prompt string.

    Raises:
        InvalidInputError: if user_message is not a non-empty string.
    """
    if not isinstance(user_message, str) or not user_message.strip():
        raise InvalidInputError("Invalid user message: must be non-empty string")

    manifesto_section = format_rules(rules) if rules else ""
    top = strictest(*(r.severity for r in rules)).value if rules else "NONE"

    return f"""{SYSTEM_PROMPT}

## MANDATORY DEVELOPMENT MANIFESTO (MUST FOLLOW, strictest tier: {top}):
{manifesto_section}

## CRITICAL INSTRUCTIONS:
{CRITICAL_INSTRUCTIONS}

## USER REQUEST:
{user_message}

Respond as a development agent who strictly enforces the manifesto principles above."""
