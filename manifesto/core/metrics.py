"""
Metrics Recorder — Bounded FIFO of timing/memory samples for self-monitoring.

Not behaviorally load-bearing: nothing in the engine reads these samples
back to make decisions.
"""

from __future__ import annotations

import threading
from collections import deque

import psutil

from manifesto.config import settings
from manifesto.models.metrics_models import PerformanceMetric


class MetricsRecorder:
    """Keeps the last `capacity` samples; the oldest sample is evicted first."""

    def __init__(self, capacity: int | None = None) -> None:
        self.capacity = capacity or settings.metrics_capacity
        self._samples: deque[PerformanceMetric] = deque(maxlen=self.capacity)
        self._lock = threading.Lock()
        self._process = psutil.Process()

    def record(self, response_time_ms: float, operation: str = "") -> PerformanceMetric:
        """Sample current memory usage and append a metric."""
        metric = PerformanceMetric(
            operation=operation,
            response_time_ms=max(0.0, response_time_ms),
            memory_bytes=self._process.memory_info().rss,
        )
        with self._lock:
            self._samples.append(metric)
        return metric

    def export(self) -> list[PerformanceMetric]:
        """Point-in-time copy of the stored samples, oldest first."""
        with self._lock:
            return list(self._samples)

    def clear(self) -> None:
        with self._lock:
            self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)
