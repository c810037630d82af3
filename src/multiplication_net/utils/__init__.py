"""Utility helpers for the multiplication network."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .math_utils import ShapeMismatchError, check_shape, matmul
    from .visualization import plot_loss_history

__all__ = [
    "ShapeMismatchError",
    "check_shape",
    "matmul",
    "plot_loss_history",
]


def __getattr__(name: str):  # pragma: no cover - small wrapper
    if name == "plot_loss_history":
        return getattr(import_module("multiplication_net.utils.visualization"), name)
    if name in {"ShapeMismatchError", "check_shape", "matmul"}:
        return getattr(import_module("multiplication_net.utils.math_utils"), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
