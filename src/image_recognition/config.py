"""Pydantic frozen configuration models for image_recognition."""

from pydantic import BaseModel, model_validator

DEFAULT_GRAPH_PATH = "/model/inception.onnx"
DEFAULT_LABELS_PATH = "/model/imagenet_comp_graph_label_strings.txt"


class RecognitionConfig(BaseModel, frozen=True):
    """Configuration for a single recognition run.

    Artifact paths and the model's input contract are injected here
    instead of being fixed in code, so tests and embedding callers can
    point the pipeline at their own graphs. Frozen — no mutation after
    creation.
    """

    graph_path: str = DEFAULT_GRAPH_PATH
    labels_path: str = DEFAULT_LABELS_PATH
    input_name: str = "input"
    output_name: str = "output"
    image_size: int = 224
    mean: float = 117.0
    top_k: int = 5
    fetch_timeout: float | None = 30.0

    @model_validator(mode="after")
    def _check_ranges(self) -> "RecognitionConfig":
        if self.image_size <= 0:
            raise ValueError(f"image_size must be positive, got {self.image_size}")
        if self.top_k < 1:
            raise ValueError(f"top_k must be at least 1, got {self.top_k}")
        if self.fetch_timeout is not None and self.fetch_timeout <= 0:
            raise ValueError(
                f"fetch_timeout must be positive when set, got {self.fetch_timeout}"
            )
        return self
