"""Element-wise sigmoid activation and its derivative."""
from __future__ import annotations

import torch
from torch import Tensor


def sigmoid(x: Tensor) -> Tensor:
    """Return ``1 / (1 + exp(-x))`` element-wise."""

    return torch.sigmoid(x)


def sigmoid_derivative(y: Tensor) -> Tensor:
    """Derivative of the sigmoid expressed through its output ``y = sigmoid(x)``.

    The argument is the already-activated value, not the pre-activation.
    """

    return y * (1.0 - y)


__all__ = ["sigmoid", "sigmoid_derivative"]
