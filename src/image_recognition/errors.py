"""Typed errors raised by the recognition pipeline.

Every error names the stage that raised it so a failed run can be
attributed to the artifacts, the network, the image content or the
model graph.
"""

from __future__ import annotations


class RecognitionError(Exception):
    """Base class for all pipeline failures."""

    stage = "recognition"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class ArtifactError(RecognitionError):
    """Graph or label file missing, unreadable, or malformed."""

    stage = "artifacts"


class FetchError(RecognitionError):
    """Image retrieval failed."""

    stage = "fetch"


class DecodeError(RecognitionError):
    """Image bytes are not a decodable JPEG."""

    stage = "preprocessing"


class ExecutionError(RecognitionError):
    """A computation graph failed to execute.

    ``stage`` is required: it is either ``"preprocessing"`` or
    ``"classification"``.
    """

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(message, stage=stage)


class RankingError(RecognitionError):
    """Fewer usable scored labels than the requested top-K."""

    stage = "ranking"
