"""
Audit Trail — JSON-lines record of enforcement decisions.

One line per `enforce()` call: UTC timestamp, action type, allowed/blocked,
the rejection message, and the decision time in milliseconds.
"""

from __future__ import annotations

import json
import logging
import threading
from collections import deque
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

from manifesto.config import settings
from manifesto.models.action_models import AuditEntry

logger = logging.getLogger("manifesto.audit")


class AuditLogger:
    """Append-only decision log; writers are serialized by a lock."""

    def __init__(self, log_path: str | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)
        self._write_lock = threading.Lock()

    def log(self, entry: AuditEntry) -> None:
        """Append one decision. I/O failures are logged, never raised."""
        line = json.dumps(
            {"timestamp": datetime.now(timezone.utc).isoformat(), **entry.model_dump()}
        )
        try:
            with self._write_lock, self.log_path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as e:
            logger.error(f"Audit write to {self.log_path} failed: {e}")

    def _records(self) -> Iterator[dict]:
        with self.log_path.open(encoding="utf-8") as fh:
            for raw in fh:
                if not raw.strip():
                    continue
                try:
                    yield json.loads(raw)
                except json.JSONDecodeError:
                    logger.debug(f"Skipping corrupt audit line: {raw[:80]!r}")

    def read_recent(self, count: int = 50) -> list[dict]:
        """The last `count` decisions, oldest first."""
        if count <= 0 or not self.log_path.exists():
            return []
        try:
            return list(deque(self._records(), maxlen=count))
        except OSError as e:
            logger.error(f"Audit read from {self.log_path} failed: {e}")
            return []

    def blocked(self, count: int = 50) -> list[dict]:
        """The last `count` decisions that blocked an action."""
        return [r for r in self.read_recent(count) if not r.get("allowed", True)]
