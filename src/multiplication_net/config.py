"""Configuration dataclasses for the multiplication-table trainer."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class TrainerConfig:
    """Hyper-parameters of the full-batch training loop.

    Parameters
    ----------
    epochs:
        Number of full passes over the dataset. Training always runs the whole
        budget; there is no loss threshold or early stopping.
    learning_rate:
        Scalar multiplier applied to every weight update.
    seed:
        Seed for weight initialisation. ``None`` draws the seed from the
        wall-clock time, so repeated runs produce different networks.
    log_every:
        Interval, in epochs, at which the loss is recorded in the training
        history and logged at ``DEBUG``. ``0`` records only the first and last
        epochs.
    progress:
        Display a tqdm progress bar over epochs.
    """

    epochs: int = 20000
    learning_rate: float = 0.5
    seed: Optional[int] = None
    log_every: int = 1000
    progress: bool = False

    def __post_init__(self) -> None:
        if self.epochs <= 0:
            raise ValueError("epochs must be positive")
        if self.learning_rate <= 0.0:
            raise ValueError("learning_rate must be positive")
        if self.log_every < 0:
            raise ValueError("log_every must be non-negative")


def resolve_seed(seed: Optional[int]) -> int:
    """Return ``seed`` or, when it is ``None``, the current time in nanoseconds."""

    if seed is None:
        return time.time_ns()
    return int(seed)


__all__ = ["TrainerConfig", "resolve_seed"]
