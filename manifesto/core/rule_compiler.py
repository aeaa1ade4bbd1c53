"""
Rule Compiler — Turns a free-form manifesto document into structured rules.

Line oriented:
  `## Header`          → sets the current category and fallback severity
  `- rule` / `* rule`  → one rule, bullet stripped
  `**ATTENTION AI…`    → AI directive, kept verbatim, always CRITICAL
  `**REMEMBER:…`         (same)

Pure and deterministic: the same text always yields the same rule list.
"""

from __future__ import annotations

import logging
import re
import time

from manifesto.core.metrics import MetricsRecorder
from manifesto.errors import InvalidInputError
from manifesto.models.rule_models import Category, Rule, Severity

logger = logging.getLogger("manifesto.compiler")

HEADER_MARKER = "##"
AI_DIRECTIVE_MARKERS: tuple[str, str] = ("**ATTENTION AI", "**REMEMBER:")

_BULLET_RE = re.compile(r"^[-*]\s+")

# Header keyword → category, first match wins
_CATEGORY_KEYWORDS: list[tuple[tuple[str, ...], Category]] = [
    (("security",), Category.SECURITY),
    (("performance",), Category.PERFORMANCE),
    (("test",), Category.TESTING),
    (("code", "quality"), Category.CODE_QUALITY),
    (("architecture",), Category.ARCHITECTURE),
    (("documentation",), Category.DOCUMENTATION),
    (("error",), Category.ERROR_HANDLING),
]

# Header keyword → section severity, first match wins
_HEADER_SEVERITIES: list[tuple[str, Severity]] = [
    ("CRITICAL", Severity.CRITICAL),
    ("MANDATORY", Severity.MANDATORY),
    ("REQUIRED", Severity.REQUIRED),
    ("OPTIMIZE", Severity.OPTIMIZE),
]

# Inline markers inside rule text, checked in this order
_INLINE_MARKERS: list[tuple[re.Pattern[str], Severity]] = [
    (re.compile(r"\b(?:CRITICAL|PROHIBITED):"), Severity.CRITICAL),
    (re.compile(r"\bMANDATORY:"), Severity.MANDATORY),
    (re.compile(r"\bREQUIRED:"), Severity.REQUIRED),
    (re.compile(r"\b(?:ENFORCE|HANDLE|DOCUMENT):"), Severity.REQUIRED),
    (re.compile(r"\bOPTIMIZE:"), Severity.OPTIMIZE),
    (re.compile(r"\bSTYLE:"), Severity.RECOMMENDED),
]


def detect_category(header: str) -> Category:
    lowered = header.lower()
    for keywords, category in _CATEGORY_KEYWORDS:
        if any(k in lowered for k in keywords):
            return category
    return Category.GENERAL


def detect_header_severity(header: str) -> Severity:
    upper = header.upper()
    for keyword, severity in _HEADER_SEVERITIES:
        if keyword in upper:
            return severity
    return Severity.RECOMMENDED


def is_ai_directive(line: str) -> bool:
    return line.startswith(AI_DIRECTIVE_MARKERS)


def detect_inline_severity(text: str) -> Severity:
    """Severity carried by the rule text itself; RECOMMENDED when unmarked."""
    if is_ai_directive(text):
        return Severity.CRITICAL
    for marker, severity in _INLINE_MARKERS:
        if marker.search(text):
            return severity
    return Severity.RECOMMENDED


def resolve_severity(text: str, section_severity: Severity) -> Severity:
    """Inline marker wins; an unmarked (RECOMMENDED) rule inherits the section severity."""
    inline = detect_inline_severity(text)
    if inline is Severity.RECOMMENDED:
        return section_severity
    return inline


class RuleCompiler:
    """Compiles manifesto text into an ordered list of rules."""

    def __init__(self, metrics: MetricsRecorder | None = None) -> None:
        self.metrics = metrics if metrics is not None else MetricsRecorder()

    def compile(self, document_text: str) -> list[Rule]:
        """
        Compile a manifesto document.

        Args:
            document_text: Full manifesto text.

        Returns:
            Rules in document order, ids derived from 0-based line indices.

        Raises:
            InvalidInputError: if the document is not a non-empty string.
        """
        if not isinstance(document_text, str) or not document_text.strip():
            raise InvalidInputError("Invalid manifesto content: must be non-empty string")

        start = time.monotonic()
        rules: list[Rule] = []
        current_category = Category.GENERAL
        current_severity = Severity.RECOMMENDED

        for index, raw_line in enumerate(document_text.splitlines()):
            line = raw_line.strip()
            if not line:
                continue

            if line.startswith(HEADER_MARKER):
                current_category = detect_category(line)
                current_severity = detect_header_severity(line)
                continue

            bullet = _BULLET_RE.match(line)
            if bullet:
                text = line[bullet.end():].strip()
            elif is_ai_directive(line):
                text = line
            else:
                continue

            if not text:
                continue

            rules.append(
                Rule(
                    id=f"rule-{index}",
                    text=text,
                    severity=resolve_severity(text, current_severity),
                    category=current_category,
                )
            )

        elapsed = (time.monotonic() - start) * 1000
        self.metrics.record(elapsed, operation="compile")
        logger.debug(f"Compiled {len(rules)} rules in {elapsed:.2f}ms")
        return rules
