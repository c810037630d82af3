"""Embedded multiplication-table dataset."""

from __future__ import annotations

from dataclasses import dataclass

import torch
from torch import Tensor

FACTORS = (1, 2, 3)
TARGET_SCALE = 10.0


@dataclass(frozen=True)
class MultiplicationDataset:
    """Inputs ``(a, b)`` and their products for every pair drawn from :data:`FACTORS`.

    ``targets`` holds the products divided by :data:`TARGET_SCALE` so they fall
    strictly inside the sigmoid range; ``products`` keeps the raw integers.
    """

    inputs: Tensor
    targets: Tensor
    products: Tensor

    def __len__(self) -> int:
        return int(self.inputs.shape[0])


def make_dataset(*, dtype: torch.dtype = torch.float64) -> MultiplicationDataset:
    """Build the fixed 9-row dataset in row-major order ``(1,1), (1,2), ..., (3,3)``."""

    pairs = [(a, b) for a in FACTORS for b in FACTORS]
    inputs = torch.tensor(pairs, dtype=dtype)
    products = torch.tensor([[a * b] for a, b in pairs], dtype=torch.long)
    targets = products.to(dtype) / TARGET_SCALE
    return MultiplicationDataset(inputs=inputs, targets=targets, products=products)


__all__ = ["FACTORS", "TARGET_SCALE", "MultiplicationDataset", "make_dataset"]
