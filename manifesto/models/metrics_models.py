"""
Performance Metric Model — Self-monitoring samples.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class PerformanceMetric(BaseModel):
    """One timing/memory sample."""

    operation: str = Field(default="", description="Label of the measured operation")
    response_time_ms: float = Field(..., ge=0.0)
    memory_bytes: int = Field(default=0, ge=0, description="Process RSS when sampled")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
