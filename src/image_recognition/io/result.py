"""Recognition result writer using orjson."""

from __future__ import annotations

from pathlib import Path

import orjson

from image_recognition.schemas.prediction import RecognitionResult


class ResultWriter:
    """Write a recognition result as indented JSON to ``output_path``.

    Parent directories are created as needed.
    """

    def __init__(self, output_path: Path) -> None:
        self.output_path = output_path

    def write(self, result: RecognitionResult) -> Path:
        """Write ``result`` to disk. Returns the output path."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        data = orjson.dumps(result.model_dump(), option=orjson.OPT_INDENT_2)
        self.output_path.write_bytes(data)
        return self.output_path
