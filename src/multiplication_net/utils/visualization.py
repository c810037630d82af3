"""Plotting utilities for training curves."""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt


def plot_loss_history(epochs: Sequence[int], losses: Sequence[float]) -> None:
    """Plot sampled loss values against the epoch they were recorded at."""

    if len(epochs) != len(losses):
        raise ValueError("epochs and losses must have equal length")
    plt.figure()
    plt.plot(list(epochs), list(losses))
    plt.xlabel("Epoch")
    plt.ylabel("Loss")
    plt.yscale("log")
    plt.title("Training Loss")
    plt.tight_layout()
