"""
Core type definitions for toyen.

Provides the result types the pipeline uses to report what each phase did.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class StageStatus(str, Enum):
    """Status of a pipeline stage."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StageResult(BaseModel):
    """Result of a pipeline stage execution."""

    stage_name: str = Field(description="Name of the pipeline stage")
    status: StageStatus = Field(default=StageStatus.RUNNING, description="Execution status")
    started_at: datetime = Field(default_factory=_now)
    completed_at: datetime | None = Field(default=None)
    duration_seconds: float = Field(default=0.0)
    errors: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def mark_completed(self, **metadata: Any) -> None:
        """Mark stage as successfully completed."""
        self.status = StageStatus.COMPLETED
        self.completed_at = _now()
        self.metadata.update(metadata)
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    def mark_failed(self, errors: list[str]) -> None:
        """Mark stage as failed."""
        self.status = StageStatus.FAILED
        self.completed_at = _now()
        self.errors = errors
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()
