"""Immutable computation graphs executed with onnxruntime."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

import numpy as np
import onnx
import onnxruntime as ort
from loguru import logger

from image_recognition.errors import ExecutionError

# Deterministic CPU execution; GPU placement is left to callers.
_PROVIDERS = ["CPUExecutionProvider"]


@dataclass(frozen=True)
class ComputationGraph:
    """A named, serialized ONNX graph.

    The graph is only held as bytes; every execution opens its own
    :class:`onnxruntime.InferenceSession` through :meth:`session`, so no
    runtime state outlives a single run.

    Args:
        name: Human-readable name used in log and error messages.
        serialized: The ONNX ``ModelProto`` in wire format.
    """

    name: str
    serialized: bytes

    @classmethod
    def from_model(cls, model: onnx.ModelProto, name: str) -> ComputationGraph:
        return cls(name=name, serialized=model.SerializeToString())

    @contextmanager
    def session(self, stage: str) -> Iterator[ort.InferenceSession]:
        """Open an inference session scoped to the ``with`` block.

        The session is not cached on the graph; it is freed once the
        caller drops its reference.
        """
        options = ort.SessionOptions()
        options.log_severity_level = 3
        try:
            sess = ort.InferenceSession(
                self.serialized, sess_options=options, providers=_PROVIDERS
            )
        except Exception as exc:
            raise ExecutionError(
                stage, f"could not load graph '{self.name}': {exc}"
            ) from exc
        logger.debug(f"Opened session for graph '{self.name}'")
        yield sess

    def run(
        self,
        feeds: Mapping[str, np.ndarray],  # type: ignore[type-arg]
        output_names: Sequence[str],
        stage: str,
    ) -> list[np.ndarray]:  # type: ignore[type-arg]
        """Execute the graph once and return the requested outputs.

        Raises:
            ExecutionError: If the session cannot be created or the run
                fails (unknown input/output node, shape or dtype mismatch).
        """
        with self.session(stage) as sess:
            try:
                outputs = sess.run(list(output_names), dict(feeds))
            except Exception as exc:
                raise ExecutionError(
                    stage, f"graph '{self.name}' failed to execute: {exc}"
                ) from exc
        return [np.asarray(out) for out in outputs]
