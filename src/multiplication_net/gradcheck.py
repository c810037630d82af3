"""Finite-difference verification of the analytic backward pass."""
from __future__ import annotations

from dataclasses import dataclass

import torch
from torch import Tensor

from .data import MultiplicationDataset
from .network import NetworkWeights, backward, forward, loss


@dataclass(frozen=True)
class ParameterGradients:
    """Loss gradients ``dL/dW`` for each weight matrix."""

    hidden: Tensor
    output: Tensor


@dataclass(frozen=True)
class GradientCheckResult:
    """Largest absolute disagreement between analytic and numerical gradients."""

    hidden_error: float
    output_error: float

    @property
    def max_error(self) -> float:
        return max(self.hidden_error, self.output_error)

    def passed(self, tolerance: float = 1e-6) -> bool:
        return self.max_error <= tolerance


def analytic_gradients(weights: NetworkWeights, dataset: MultiplicationDataset) -> ParameterGradients:
    """Gradients of the loss obtained from :func:`~multiplication_net.network.backward`."""

    cache = forward(weights, dataset.inputs)
    steps = backward(weights, dataset.inputs, dataset.targets, cache)
    return ParameterGradients(hidden=-steps.hidden, output=-steps.output)


def _central_difference(
    weights: NetworkWeights,
    dataset: MultiplicationDataset,
    name: str,
    epsilon: float,
) -> Tensor:
    reference = getattr(weights, name)
    grad = torch.zeros_like(reference)
    for index in range(reference.numel()):
        row, col = divmod(index, reference.shape[1])
        plus = weights.clone()
        getattr(plus, name)[row, col] += epsilon
        minus = weights.clone()
        getattr(minus, name)[row, col] -= epsilon
        loss_plus = loss(plus, dataset.inputs, dataset.targets)
        loss_minus = loss(minus, dataset.inputs, dataset.targets)
        grad[row, col] = (loss_plus - loss_minus) / (2.0 * epsilon)
    return grad


def numerical_gradients(
    weights: NetworkWeights,
    dataset: MultiplicationDataset,
    epsilon: float = 1e-6,
) -> ParameterGradients:
    """Estimate ``dL/dW`` by perturbing each weight by ``±epsilon``."""

    if epsilon <= 0.0:
        raise ValueError("epsilon must be positive")
    return ParameterGradients(
        hidden=_central_difference(weights, dataset, "hidden", epsilon),
        output=_central_difference(weights, dataset, "output", epsilon),
    )


def check_gradients(
    weights: NetworkWeights,
    dataset: MultiplicationDataset,
    epsilon: float = 1e-6,
) -> GradientCheckResult:
    """Compare analytic and numerical gradients without modifying ``weights``."""

    analytic = analytic_gradients(weights, dataset)
    numerical = numerical_gradients(weights, dataset, epsilon)
    return GradientCheckResult(
        hidden_error=float(torch.max(torch.abs(analytic.hidden - numerical.hidden))),
        output_error=float(torch.max(torch.abs(analytic.output - numerical.output))),
    )


__all__ = [
    "GradientCheckResult",
    "ParameterGradients",
    "analytic_gradients",
    "check_gradients",
    "numerical_gradients",
]
