"""Classification graph execution and top-K label ranking."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from image_recognition.artifacts import load_graph, load_labels
from image_recognition.config import RecognitionConfig
from image_recognition.errors import ExecutionError, RankingError
from image_recognition.graph import ComputationGraph
from image_recognition.inference.base import BaseImageClassifier
from image_recognition.schemas.prediction import ScoredLabel

STAGE = "classification"


def rank_labels(
    probabilities: Sequence[float] | np.ndarray,  # type: ignore[type-arg]
    labels: Sequence[str],
    top_k: int = 5,
) -> list[ScoredLabel]:
    """Pair probabilities with labels and keep the ``top_k`` highest.

    Only the first ``min(len(probabilities), len(labels))`` positions
    take part; the tail of the longer sequence is ignored. Equal
    probabilities keep their original index order.

    Raises:
        RankingError: If fewer than ``top_k`` labeled scores remain.
    """
    probs = np.asarray(probabilities, dtype=np.float64).reshape(-1)
    usable = min(len(probs), len(labels))
    if usable < top_k:
        raise RankingError(
            f"only {usable} labeled scores available "
            f"({len(probs)} probabilities, {len(labels)} labels), need {top_k}"
        )
    if len(probs) != len(labels):
        logger.debug(
            f"Truncating to {usable} entries "
            f"({len(probs)} probabilities, {len(labels)} labels)"
        )

    # Stable sort on the negated scores: descending, ties by index.
    order = np.argsort(-probs[:usable], kind="stable")[:top_k]
    return [
        ScoredLabel(class_id=int(idx), label=labels[idx], probability=float(probs[idx]))
        for idx in order
    ]


def classify(
    graph: ComputationGraph,
    tensor: np.ndarray,  # type: ignore[type-arg]
    labels: Sequence[str],
    top_k: int = 5,
    input_name: str = "input",
    output_name: str = "output",
) -> list[ScoredLabel]:
    """Run ``graph`` on ``tensor`` and rank its first output row.

    Raises:
        ExecutionError: If the graph fails or its output is not
            ``[batch, classes]``.
        RankingError: If fewer than ``top_k`` labeled scores remain.
    """
    (output,) = graph.run({input_name: tensor}, [output_name], stage=STAGE)
    if output.ndim < 2 or output.shape[0] == 0:
        raise ExecutionError(
            STAGE,
            f"output '{output_name}' has shape {output.shape}, "
            "expected [batch, classes]",
        )
    probabilities = output[0].reshape(-1)
    logger.debug(f"Graph '{graph.name}' produced {probabilities.size} scores")
    return rank_labels(probabilities, labels, top_k=top_k)


class ImageClassifier(BaseImageClassifier):
    """Classify images with a pre-trained graph and its label file.

    Loads both artifacts once at construction. The graph's input and
    output node names, the expected image size and the normalization
    mean all come from ``config``.

    Args:
        config: Artifact paths and model input contract.

    Raises:
        ArtifactError: If the graph or labels cannot be loaded.
    """

    def __init__(self, config: RecognitionConfig) -> None:
        self.config = config
        self.image_size = config.image_size
        self.mean = config.mean
        self.graph = load_graph(config.graph_path)
        self.labels = load_labels(config.labels_path)
        logger.info(
            f"Loaded graph {config.graph_path} with {len(self.labels)} labels"
        )

    def classify(
        self,
        tensor: np.ndarray,  # type: ignore[type-arg]
    ) -> list[ScoredLabel]:
        """Rank the graph's output for ``tensor`` against the vocabulary."""
        return classify(
            self.graph,
            tensor,
            self.labels,
            top_k=self.config.top_k,
            input_name=self.config.input_name,
            output_name=self.config.output_name,
        )
