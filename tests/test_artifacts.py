"""Tests for graph and label loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from image_recognition.artifacts import load_graph, load_labels
from image_recognition.errors import ArtifactError
from image_recognition.graph import ComputationGraph


class TestLoadGraph:
    def test_loads_valid_graph(self, write_graph: Callable[..., Path]) -> None:
        path = write_graph()
        graph = load_graph(path)
        assert isinstance(graph, ComputationGraph)
        assert graph.name == "model.onnx"
        assert graph.serialized == path.read_bytes()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactError, match="cannot read graph"):
            load_graph(tmp_path / "missing.onnx")

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "corrupt.onnx"
        path.write_bytes(b"not an onnx model")
        with pytest.raises(ArtifactError, match="not a valid ONNX model"):
            load_graph(path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.onnx"
        path.write_bytes(b"")
        with pytest.raises(ArtifactError, match="no operations"):
            load_graph(path)


class TestLoadLabels:
    def test_order_preserved(self, write_labels: Callable[..., Path]) -> None:
        path = write_labels(["zebra", "apple", "mango"])
        assert load_labels(path) == ["zebra", "apple", "mango"]

    def test_blank_lines_keep_alignment(self, tmp_path: Path) -> None:
        path = tmp_path / "labels.txt"
        path.write_text("dummy\n\nkit fox\n")
        assert load_labels(path) == ["dummy", "", "kit fox"]

    def test_crlf_and_no_trailing_newline(self, tmp_path: Path) -> None:
        path = tmp_path / "labels.txt"
        path.write_bytes(b"cat\r\ndog")
        assert load_labels(path) == ["cat", "dog"]

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "labels.txt"
        path.write_text("")
        assert load_labels(path) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactError):
            load_labels(tmp_path / "missing.txt")

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "labels.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(ArtifactError):
            load_labels(path)
