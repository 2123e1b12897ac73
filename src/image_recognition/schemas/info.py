"""Run metadata info schema."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class RunInfo(BaseModel):
    """Artifacts and context a recognition result was produced with."""

    graph_path: str
    labels_path: str
    vocabulary_size: int
    created_at: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat())
