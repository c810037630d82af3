"""Shape-checked matrix helpers."""
from __future__ import annotations

from typing import Sequence

from torch import Tensor


class ShapeMismatchError(ValueError):
    """Raised when two matrices cannot be combined because of their shapes."""


def _format_shape(shape: Sequence[int]) -> str:
    return "[" + "×".join(str(dim) for dim in shape) + "]"


def matmul(a: Tensor, b: Tensor, *, op: str) -> Tensor:
    """Multiply two 2-D tensors, failing fast on non-conformant shapes."""

    if a.ndim != 2 or b.ndim != 2:
        raise ShapeMismatchError(
            f"{op}: expected 2-D operands, got {_format_shape(a.shape)} and {_format_shape(b.shape)}"
        )
    if a.shape[1] != b.shape[0]:
        raise ShapeMismatchError(
            f"{op}: cannot multiply {_format_shape(a.shape)} by {_format_shape(b.shape)} "
            f"(inner dimensions {a.shape[1]} != {b.shape[0]})"
        )
    return a @ b


def check_shape(tensor: Tensor, expected: Sequence[int], *, name: str) -> None:
    """Raise :class:`ShapeMismatchError` unless ``tensor`` has ``expected`` shape."""

    if tuple(tensor.shape) != tuple(expected):
        raise ShapeMismatchError(
            f"{name}: expected shape {_format_shape(expected)}, got {_format_shape(tensor.shape)}"
        )
