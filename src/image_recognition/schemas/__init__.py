"""Recognition result schemas."""

from image_recognition.schemas.info import RunInfo
from image_recognition.schemas.prediction import RecognitionResult, ScoredLabel

__all__ = [
    "RecognitionResult",
    "RunInfo",
    "ScoredLabel",
]
