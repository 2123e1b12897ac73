"""Image classification against a label vocabulary."""

from image_recognition.inference.base import BaseImageClassifier
from image_recognition.inference.classifier import (
    ImageClassifier,
    classify,
    rank_labels,
)

__all__ = [
    "BaseImageClassifier",
    "ImageClassifier",
    "classify",
    "rank_labels",
]
