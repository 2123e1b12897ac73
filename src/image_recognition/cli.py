"""Command-line entrypoint for image_recognition.

Usage::

    recog https://example.com/cat.jpg
    recog https://example.com/cat.jpg --graph model/inception.onnx \\
        --labels model/labels.txt --output result.json
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from image_recognition.config import (
    DEFAULT_GRAPH_PATH,
    DEFAULT_LABELS_PATH,
    RecognitionConfig,
)
from image_recognition.errors import RecognitionError
from image_recognition.io.result import ResultWriter
from image_recognition.pipeline import recognize
from image_recognition.schemas.prediction import ScoredLabel

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def format_prediction(prediction: ScoredLabel) -> str:
    """Render one label line, probability as a percentage."""
    return (
        f"Label: {prediction.label}, "
        f"Probability: {prediction.probability * 100:.2f}%"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recog", description="Classify a remote image with a pre-trained model"
    )
    parser.add_argument("url", help="URL of the JPEG image to classify")
    parser.add_argument(
        "--graph",
        default=DEFAULT_GRAPH_PATH,
        help=f"Path to the ONNX classification graph (default: {DEFAULT_GRAPH_PATH})",
    )
    parser.add_argument(
        "--labels",
        default=DEFAULT_LABELS_PATH,
        help=f"Path to the label file (default: {DEFAULT_LABELS_PATH})",
    )
    parser.add_argument(
        "--top-k", type=int, default=5, help="Number of labels to print (default: 5)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="HTTP timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Also write the result as JSON to this path",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Log level for stderr (default: INFO)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one recognition and print the top labels.

    Returns the process exit status: 0 on success, 1 on any failure.
    """
    args = _build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    try:
        config = RecognitionConfig(
            graph_path=args.graph,
            labels_path=args.labels,
            top_k=args.top_k,
            fetch_timeout=args.timeout,
        )
    except ValidationError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 1

    logger.info(f"url: {args.url}")
    try:
        result = recognize(args.url, config)
    except RecognitionError as exc:
        logger.error(f"{exc.stage} failed: {exc.message}")
        return 1

    if args.output is not None:
        try:
            out_path = ResultWriter(args.output).write(result)
        except OSError as exc:
            logger.error(f"Could not write result to {args.output}: {exc}")
            return 1
        logger.info(f"Result saved to {out_path}")

    for prediction in result.predictions:
        print(format_prediction(prediction))
    return 0


if __name__ == "__main__":
    sys.exit(main())
