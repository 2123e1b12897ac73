"""End-to-end recognition of a single remote image."""

from __future__ import annotations

import time

from loguru import logger

from image_recognition.config import RecognitionConfig
from image_recognition.fetch import fetch_image
from image_recognition.inference.classifier import ImageClassifier
from image_recognition.schemas.info import RunInfo
from image_recognition.schemas.prediction import RecognitionResult


def recognize(url: str, config: RecognitionConfig | None = None) -> RecognitionResult:
    """Fetch ``url``, classify it and return the top-K labels.

    Stages run strictly in order (fetch, artifact loading,
    preprocessing, classification). Any :class:`RecognitionError`
    propagates unchanged; nothing is returned for a failed run.
    """
    config = config or RecognitionConfig()
    start = time.perf_counter()

    image = fetch_image(url, timeout=config.fetch_timeout)
    classifier = ImageClassifier(config)
    predictions = classifier.predict(image)

    logger.info(
        f"Classified {url} in {time.perf_counter() - start:.2f}s, "
        f"top label '{predictions[0].label}'"
    )
    return RecognitionResult(
        url=url,
        info=RunInfo(
            graph_path=config.graph_path,
            labels_path=config.labels_path,
            vocabulary_size=len(classifier.labels),
        ),
        predictions=predictions,
    )
