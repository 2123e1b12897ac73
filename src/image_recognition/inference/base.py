"""Abstract base class for image classifiers."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from image_recognition.preprocessing import normalize
from image_recognition.schemas.prediction import ScoredLabel


class BaseImageClassifier(ABC):
    """Base class for image classifiers.

    Subclasses implement ``classify`` on an already normalized tensor;
    ``predict`` chains preprocessing in front of it. Both return labels
    sorted by descending probability.
    """

    image_size: int = 224
    mean: float = 117.0

    @abstractmethod
    def classify(
        self,
        tensor: np.ndarray,  # type: ignore[type-arg]
    ) -> list[ScoredLabel]:
        """Classify a ``[1, H, W, 3]`` normalized tensor."""

    def predict(self, image: bytes) -> list[ScoredLabel]:
        """Normalize encoded image bytes, then classify them."""
        tensor = normalize(image, image_size=self.image_size, mean=self.mean)
        return self.classify(tensor)
