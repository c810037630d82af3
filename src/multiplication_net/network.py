"""Two-layer sigmoid perceptron with hand-written backpropagation.

The network has no biases and fixed layer sizes: ``INPUT_NEURONS`` inputs feed
``HIDDEN_NEURONS`` sigmoid units, which feed ``OUTPUT_NEURONS`` sigmoid output.
Weights are stored as ``[fan_out, fan_in]`` matrices so a batch ``X`` of shape
``[n, fan_in]`` is propagated with ``X @ W.T``.

All functions below are pure except :func:`apply_gradients`, which mutates the
weights it is given in place.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import torch
from torch import Tensor

from .activations import sigmoid, sigmoid_derivative
from .data import TARGET_SCALE
from .utils.math_utils import check_shape, matmul

INPUT_NEURONS = 2
HIDDEN_NEURONS = 3
OUTPUT_NEURONS = 1

HIDDEN_SHAPE = (HIDDEN_NEURONS, INPUT_NEURONS)
OUTPUT_SHAPE = (OUTPUT_NEURONS, HIDDEN_NEURONS)


@dataclass
class NetworkWeights:
    """Owned weight matrices of the hidden and output layers."""

    hidden: Tensor
    output: Tensor

    def __post_init__(self) -> None:
        self.check_shapes()

    def check_shapes(self) -> None:
        check_shape(self.hidden, HIDDEN_SHAPE, name="hidden weights")
        check_shape(self.output, OUTPUT_SHAPE, name="output weights")

    def clone(self) -> "NetworkWeights":
        return NetworkWeights(hidden=self.hidden.clone(), output=self.output.clone())


@dataclass(frozen=True)
class ForwardPass:
    """Intermediate tensors produced by :func:`forward`."""

    hidden_pre: Tensor
    hidden_act: Tensor
    output_pre: Tensor
    output: Tensor


@dataclass(frozen=True)
class Gradients:
    """Descent directions (negative loss gradients) for each weight matrix."""

    hidden: Tensor
    output: Tensor


def random_weight(
    rows: int,
    cols: int,
    *,
    generator: Optional[torch.Generator] = None,
    dtype: torch.dtype = torch.float64,
) -> Tensor:
    """Sample a ``[rows, cols]`` matrix uniformly from ``[-1, 1)``."""

    return torch.rand(rows, cols, generator=generator, dtype=dtype) * 2.0 - 1.0


def init_weights(
    *,
    generator: Optional[torch.Generator] = None,
    dtype: torch.dtype = torch.float64,
) -> NetworkWeights:
    hidden = random_weight(*HIDDEN_SHAPE, generator=generator, dtype=dtype)
    output = random_weight(*OUTPUT_SHAPE, generator=generator, dtype=dtype)
    return NetworkWeights(hidden=hidden, output=output)


def forward(weights: NetworkWeights, inputs: Tensor) -> ForwardPass:
    """Propagate ``inputs`` of shape ``[n, INPUT_NEURONS]`` through the network."""

    hidden_pre = matmul(inputs, weights.hidden.T, op="hidden_pre")
    hidden_act = sigmoid(hidden_pre)
    output_pre = matmul(hidden_act, weights.output.T, op="output_pre")
    output = sigmoid(output_pre)
    return ForwardPass(
        hidden_pre=hidden_pre,
        hidden_act=hidden_act,
        output_pre=output_pre,
        output=output,
    )


def backward(
    weights: NetworkWeights,
    inputs: Tensor,
    targets: Tensor,
    cache: ForwardPass,
) -> Gradients:
    """Backpropagate the squared error of ``cache.output`` against ``targets``.

    The returned directions are ``-dL/dW`` for ``L = 0.5 * sum((targets - output) ** 2)``
    and already have the shape of the weight matrix they update.
    """

    check_shape(targets, cache.output.shape, name="targets")
    error = targets - cache.output
    output_delta = error * sigmoid_derivative(cache.output)
    hidden_error = matmul(output_delta, weights.output, op="hidden_error")
    hidden_delta = sigmoid_derivative(cache.hidden_act) * hidden_error

    output_step = matmul(output_delta.T, cache.hidden_act, op="output_step")
    hidden_step = matmul(hidden_delta.T, inputs, op="hidden_step")
    return Gradients(hidden=hidden_step, output=output_step)


def squared_error(output: Tensor, targets: Tensor) -> float:
    """Half the summed squared error, the objective minimised by training."""

    check_shape(targets, output.shape, name="targets")
    return float(0.5 * torch.sum((targets - output) ** 2))


def loss(weights: NetworkWeights, inputs: Tensor, targets: Tensor) -> float:
    return squared_error(forward(weights, inputs).output, targets)


def apply_gradients(weights: NetworkWeights, grads: Gradients, learning_rate: float) -> None:
    """Update ``weights`` in place with ``W += learning_rate * step``."""

    check_shape(grads.hidden, HIDDEN_SHAPE, name="hidden step")
    check_shape(grads.output, OUTPUT_SHAPE, name="output step")
    weights.output.add_(grads.output, alpha=learning_rate)
    weights.hidden.add_(grads.hidden, alpha=learning_rate)
    weights.check_shapes()


def scale_output(output: Tensor) -> Tensor:
    """Map sigmoid outputs back to product space and round half away from zero."""

    scaled = output * TARGET_SCALE
    return (torch.sign(scaled) * torch.floor(scaled.abs() + 0.5)).to(torch.long)


def predict(weights: NetworkWeights, inputs: Tensor) -> Tensor:
    """Return rounded integer predictions of shape ``[n, OUTPUT_NEURONS]``."""

    return scale_output(forward(weights, inputs).output)


__all__ = [
    "INPUT_NEURONS",
    "HIDDEN_NEURONS",
    "OUTPUT_NEURONS",
    "HIDDEN_SHAPE",
    "OUTPUT_SHAPE",
    "NetworkWeights",
    "ForwardPass",
    "Gradients",
    "random_weight",
    "init_weights",
    "forward",
    "backward",
    "squared_error",
    "loss",
    "apply_gradients",
    "scale_output",
    "predict",
]
