"""Top-K image recognition with pre-trained ONNX classification graphs."""

__version__ = "0.0.1"
