"""Fixed-budget, full-batch training loop."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import torch
from torch import Tensor
from tqdm.auto import tqdm

from ..config import TrainerConfig, resolve_seed
from ..data import MultiplicationDataset, make_dataset
from ..network import (
    NetworkWeights,
    apply_gradients,
    backward,
    forward,
    init_weights,
    predict,
    squared_error,
)

logger = logging.getLogger(__name__)

TRAINING = "training"
CONVERGED = "converged"


@dataclass
class TrainingHistory:
    """Container storing the loss samples collected during :meth:`Trainer.fit`."""

    seed: int
    epochs: int = 0
    state: str = TRAINING
    loss_epochs: List[int] = field(default_factory=list)
    losses: List[float] = field(default_factory=list)


class Trainer:
    """Owns the network weights and runs gradient descent over the dataset."""

    def __init__(
        self,
        config: Optional[TrainerConfig] = None,
        *,
        dataset: Optional[MultiplicationDataset] = None,
        weights: Optional[NetworkWeights] = None,
    ) -> None:
        self.config = config or TrainerConfig()
        self.dataset = dataset or make_dataset()
        self.seed = resolve_seed(self.config.seed)
        self.generator = torch.Generator().manual_seed(self.seed)
        dtype = self.dataset.inputs.dtype
        self.weights = weights if weights is not None else init_weights(generator=self.generator, dtype=dtype)
        self.state = TRAINING

    def train_step(self) -> float:
        """Run one epoch and return the loss measured before the update."""

        inputs = self.dataset.inputs
        targets = self.dataset.targets
        cache = forward(self.weights, inputs)
        grads = backward(self.weights, inputs, targets, cache)
        apply_gradients(self.weights, grads, self.config.learning_rate)
        return squared_error(cache.output, targets)

    def fit(self) -> TrainingHistory:
        """Run the full epoch budget and return the sampled loss history."""

        cfg = self.config
        history = TrainingHistory(seed=self.seed)
        logger.info(
            "Training for %d epochs (learning_rate=%s, seed=%d)",
            cfg.epochs,
            cfg.learning_rate,
            self.seed,
        )
        self.state = TRAINING
        epochs = range(1, cfg.epochs + 1)
        iterator = tqdm(epochs, desc="Training", disable=not cfg.progress)
        for epoch in iterator:
            epoch_loss = self.train_step()
            history.epochs = epoch
            if self._should_record(epoch):
                history.loss_epochs.append(epoch)
                history.losses.append(epoch_loss)
                logger.debug("epoch %d loss %.6e", epoch, epoch_loss)

        self.state = CONVERGED
        history.state = CONVERGED
        logger.info("Finished after %d epochs, loss %.6e", history.epochs, self.loss())
        return history

    def loss(self) -> float:
        """Loss of the current weights on the full dataset."""

        return squared_error(forward(self.weights, self.dataset.inputs).output, self.dataset.targets)

    def predict(self) -> Tensor:
        """Rounded integer predictions for every dataset row."""

        return predict(self.weights, self.dataset.inputs)

    def _should_record(self, epoch: int) -> bool:
        if epoch == 1 or epoch == self.config.epochs:
            return True
        every = self.config.log_every
        return every > 0 and epoch % every == 0


__all__ = ["CONVERGED", "TRAINING", "Trainer", "TrainingHistory"]
