"""Loading of the pre-trained graph and its label vocabulary."""

from __future__ import annotations

from pathlib import Path

import onnx
from google.protobuf.message import DecodeError as ProtobufDecodeError
from loguru import logger

from image_recognition.errors import ArtifactError
from image_recognition.graph import ComputationGraph


def load_graph(path: str | Path) -> ComputationGraph:
    """Read a serialized ONNX classification graph from disk.

    Raises:
        ArtifactError: If the file is missing, unreadable, not an ONNX
            model, or holds no operations.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ArtifactError(f"cannot read graph file {path}: {exc}") from exc

    try:
        model = onnx.load_model_from_string(data)
    except ProtobufDecodeError as exc:
        raise ArtifactError(f"graph file {path} is not a valid ONNX model") from exc
    if not model.graph.node:
        raise ArtifactError(f"graph file {path} contains no operations")

    logger.debug(f"Loaded graph {path} ({len(model.graph.node)} nodes)")
    return ComputationGraph(name=path.name, serialized=data)


def load_labels(path: str | Path) -> list[str]:
    """Read a label vocabulary, one label per line.

    Order is preserved and blank lines are kept as empty labels so each
    line stays aligned with its position in the model output. A trailing
    newline does not add an extra label.

    Raises:
        ArtifactError: If the file is missing, unreadable, or not UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ArtifactError(f"cannot read labels file {path}: {exc}") from exc

    labels = [line.rstrip("\r") for line in text.split("\n")]
    if labels and labels[-1] == "":
        labels.pop()
    logger.debug(f"Loaded {len(labels)} labels from {path}")
    return labels
