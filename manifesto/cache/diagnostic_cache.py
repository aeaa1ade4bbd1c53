"""
Diagnostic Cache — Per-document diagnostic sets keyed by content hash.

Each document path holds exactly one entry. Storing a new analysis pass
replaces the previous set for that path; sets are never merged.
Unchanged documents (same SHA-256) reuse the stored set instead of re-scanning.
"""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass, field
from typing import Any

from manifesto.config import settings
from manifesto.models.diagnostic_models import Diagnostic


@dataclass
class CacheEntry:
    """The latest analysis result for a single document."""

    content_hash: str
    diagnostics: list[Diagnostic]
    timestamp: float = field(default_factory=time.time)
    ttl_seconds: int = field(default_factory=lambda: settings.cache_ttl_seconds)

    @property
    def is_expired(self) -> bool:
        return (time.time() - self.timestamp) > self.ttl_seconds


class DiagnosticCache:
    """
    In-memory diagnostic collection keyed by document path.
    """

    def __init__(self, ttl_seconds: int | None = None) -> None:
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.cache_ttl_seconds
        self._store: dict[str, CacheEntry] = {}

    @staticmethod
    def hash_content(content: str) -> str:
        """Compute SHA-256 hash of document content."""
        return hashlib.sha256(content.encode("utf-8")).hexdigest()

    def get(self, file_path: str, content: str) -> CacheEntry | None:
        """
        Look up the stored result for a document.

        Returns None if nothing is stored, the entry expired, or the content changed.
        """
        entry = self._store.get(file_path)
        if entry is None:
            return None

        if entry.is_expired:
            del self._store[file_path]
            return None

        if entry.content_hash != self.hash_content(content):
            return None

        return entry

    def put(self, file_path: str, content: str, diagnostics: list[Diagnostic]) -> None:
        """Replace the diagnostic set stored for a document."""
        self._store[file_path] = CacheEntry(
            content_hash=self.hash_content(content),
            diagnostics=list(diagnostics),
            ttl_seconds=self.ttl_seconds,
        )

    def diagnostics_for(self, file_path: str) -> list[Diagnostic]:
        """Current diagnostic set for a document, empty if none is stored."""
        entry = self._store.get(file_path)
        return list(entry.diagnostics) if entry is not None else []

    def invalidate(self, file_path: str) -> bool:
        """Drop the entry for a document. Returns True if one was stored."""
        return self._store.pop(file_path, None) is not None

    def clear(self) -> None:
        """Clear all stored entries."""
        self._store.clear()

    @property
    def size(self) -> int:
        """Number of documents with a stored diagnostic set."""
        return len(self._store)

    def stats(self) -> dict[str, Any]:
        """Document and diagnostic counts, split by whether entries are still live."""
        live = [e for e in self._store.values() if not e.is_expired]
        return {
            "documents": len(self._store),
            "expired_documents": len(self._store) - len(live),
            "diagnostics": sum(len(e.diagnostics) for e in live),
        }
