"""Shared pytest fixtures for image_recognition tests."""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np
import onnx
import pytest
from onnx import TensorProto, helper
from PIL import Image

STUB_PROBABILITIES = [0.05, 0.05, 0.05, 0.05, 0.05, 0.75]
STUB_LABELS = ["a", "b", "c", "d", "e", "f"]


def make_jpeg(width: int, height: int, seed: int = 0) -> bytes:
    """Encode a random RGB image of the given size as JPEG."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, (height, width, 3), dtype=np.uint8)
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="JPEG", quality=95)
    return buf.getvalue()


def make_probability_model(
    probabilities: Sequence[float],
    input_name: str = "input",
    output_name: str = "output",
) -> onnx.ModelProto:
    """Stub classification graph that ignores pixel values.

    Takes a float ``[1, 224, 224, 3]`` input and always returns
    ``probabilities`` as a ``[1, K]`` output. The input still flows
    through the graph so a mis-shaped tensor fails to execute.
    """
    num_classes = len(probabilities)
    nodes = [
        helper.make_node(
            "ReduceMean", [input_name], ["pooled"], axes=[1, 2, 3], keepdims=1
        ),
        helper.make_node("Reshape", ["pooled", "row_shape"], ["row"]),
        helper.make_node("Mul", ["row", "zero"], ["silenced"]),
        helper.make_node("Add", ["silenced", "stub_probs"], [output_name]),
    ]
    initializers = [
        helper.make_tensor("row_shape", TensorProto.INT64, [2], [1, 1]),
        helper.make_tensor("zero", TensorProto.FLOAT, [], [0.0]),
        helper.make_tensor(
            "stub_probs", TensorProto.FLOAT, [1, num_classes], list(probabilities)
        ),
    ]
    graph = helper.make_graph(
        nodes,
        "stub_classifier",
        [
            helper.make_tensor_value_info(
                input_name, TensorProto.FLOAT, [1, 224, 224, 3]
            )
        ],
        [
            helper.make_tensor_value_info(
                output_name, TensorProto.FLOAT, [1, num_classes]
            )
        ],
        initializer=initializers,
    )
    model = helper.make_model(graph, opset_imports=[helper.make_opsetid("", 17)])
    model.ir_version = 8
    return model


@pytest.fixture()
def jpeg_factory() -> Callable[..., bytes]:
    return make_jpeg


@pytest.fixture()
def write_graph(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a stub classification graph into ``tmp_path``."""

    def _write(
        probabilities: Sequence[float] = STUB_PROBABILITIES,
        name: str = "model.onnx",
        **kwargs: str,
    ) -> Path:
        path = tmp_path / name
        onnx.save(make_probability_model(probabilities, **kwargs), str(path))
        return path

    return _write


@pytest.fixture()
def write_labels(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a label file, one label per line."""

    def _write(labels: Sequence[str] = STUB_LABELS, name: str = "labels.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{label}\n" for label in labels))
        return path

    return _write


@pytest.fixture()
def model_factory() -> Callable[..., onnx.ModelProto]:
    return make_probability_model
