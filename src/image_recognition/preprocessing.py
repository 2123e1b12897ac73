"""Image preprocessing: JPEG bytes to the normalized model input.

Decoding is done with Pillow (libjpeg); the remaining steps run as a
small ONNX graph so interpolation follows the runtime's operator
semantics rather than hand-written pixel math:

    image (uint8 [H, W, 3])
      -> Cast(float) -> ExpandDims(0) -> ResizeBilinear(size x size)
      -> Sub(mean) -> normalized (float32 [1, size, size, 3])
"""

from __future__ import annotations

import io

import numpy as np
import onnx
from loguru import logger
from onnx import TensorProto, helper
from PIL import Image

from image_recognition.errors import DecodeError, ExecutionError
from image_recognition.graph import ComputationGraph

INPUT_NAME = "image"
OUTPUT_NAME = "normalized"
OPSET_VERSION = 17
# IR version matching opset 17, readable by older onnxruntime releases.
IR_VERSION = 8

STAGE = "preprocessing"


def build_normalization_graph(
    image_size: int = 224, mean: float = 117.0
) -> ComputationGraph:
    """Build the preprocessing graph for a square ``image_size`` input.

    Resize uses linear interpolation with the ``asymmetric`` coordinate
    transform (source = destination * in / out, no half-pixel offset),
    which is what the classic ``ResizeBilinear`` op computes. The resize
    runs on an NCHW view so only the spatial axes are interpolated.
    """
    nodes = [
        helper.make_node("Cast", [INPUT_NAME], ["as_float"], to=TensorProto.FLOAT),
        helper.make_node("Unsqueeze", ["as_float", "batch_axis"], ["batched"]),
        helper.make_node("Transpose", ["batched"], ["nchw"], perm=[0, 3, 1, 2]),
        helper.make_node(
            "Resize",
            ["nchw", "", "", "size"],
            ["resized"],
            mode="linear",
            coordinate_transformation_mode="asymmetric",
        ),
        helper.make_node("Transpose", ["resized"], ["nhwc"], perm=[0, 2, 3, 1]),
        helper.make_node("Sub", ["nhwc", "mean"], [OUTPUT_NAME]),
    ]
    initializers = [
        helper.make_tensor("batch_axis", TensorProto.INT64, [1], [0]),
        helper.make_tensor(
            "size", TensorProto.INT64, [4], [1, 3, image_size, image_size]
        ),
        helper.make_tensor("mean", TensorProto.FLOAT, [], [mean]),
    ]
    graph = helper.make_graph(
        nodes,
        "normalize_image",
        [
            helper.make_tensor_value_info(
                INPUT_NAME, TensorProto.UINT8, ["height", "width", 3]
            )
        ],
        [
            helper.make_tensor_value_info(
                OUTPUT_NAME, TensorProto.FLOAT, [1, image_size, image_size, 3]
            )
        ],
        initializer=initializers,
    )
    model = helper.make_model(
        graph,
        opset_imports=[helper.make_opsetid("", OPSET_VERSION)],
        producer_name="image_recognition",
    )
    model.ir_version = IR_VERSION
    onnx.checker.check_model(model)
    return ComputationGraph.from_model(model, name="normalize_image")


def decode_jpeg(data: bytes) -> np.ndarray:  # type: ignore[type-arg]
    """Decode JPEG bytes to a uint8 ``[H, W, 3]`` array.

    Grayscale and CMYK images are converted to RGB.

    Raises:
        DecodeError: If ``data`` is empty, not a JPEG, or corrupt.
    """
    if not data:
        raise DecodeError("image is empty")
    try:
        with Image.open(io.BytesIO(data)) as image:
            if image.format != "JPEG":
                raise DecodeError(f"image is {image.format}, not JPEG")
            rgb = image.convert("RGB")
    except (OSError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"image is not a valid JPEG: {exc}") from exc
    return np.asarray(rgb, dtype=np.uint8)


def normalize(
    data: bytes, image_size: int = 224, mean: float = 117.0
) -> np.ndarray:  # type: ignore[type-arg]
    """Turn raw JPEG bytes into the classifier's input tensor.

    Returns:
        float32 array of shape ``[1, image_size, image_size, 3]``.

    Raises:
        DecodeError: If the bytes cannot be decoded as JPEG.
        ExecutionError: If the preprocessing graph fails to run.
    """
    pixels = decode_jpeg(data)
    logger.debug(f"Decoded image with shape {pixels.shape}")

    graph = build_normalization_graph(image_size=image_size, mean=mean)
    (normalized,) = graph.run({INPUT_NAME: pixels}, [OUTPUT_NAME], stage=STAGE)

    expected = (1, image_size, image_size, 3)
    if normalized.shape != expected:
        raise ExecutionError(
            STAGE, f"expected output shape {expected}, got {normalized.shape}"
        )
    return normalized.astype(np.float32, copy=False)
