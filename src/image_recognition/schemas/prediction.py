"""Scored label and recognition result schemas.

One result per recognized image, holding the top-K labels sorted by
probability.
"""

from __future__ import annotations

from pydantic import BaseModel

from image_recognition.schemas.info import RunInfo


class ScoredLabel(BaseModel, frozen=True):
    """A label paired with the probability the model assigned to it.

    ``class_id`` is the label's position in the model output vector.
    """

    class_id: int
    label: str
    probability: float

    def as_tuple(self) -> tuple[str, float]:
        return (self.label, self.probability)


class RecognitionResult(BaseModel):
    """Full result for a single image."""

    url: str
    info: RunInfo
    predictions: list[ScoredLabel]
