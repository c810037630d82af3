"""Training utilities for the multiplication network."""

from .trainer import CONVERGED, TRAINING, Trainer, TrainingHistory

__all__ = [
    "CONVERGED",
    "TRAINING",
    "Trainer",
    "TrainingHistory",
]
