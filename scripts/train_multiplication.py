#!/usr/bin/env python3
"""Train the 2-3-1 sigmoid network on the multiplication table and print predictions."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from multiplication_net.config import TrainerConfig
from multiplication_net.gradcheck import check_gradients
from multiplication_net.report import format_predictions
from multiplication_net.training import Trainer


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--epochs", type=int, default=20000)
    p.add_argument("--learning-rate", type=float, default=0.5)
    p.add_argument("--seed", type=int, default=None, help="Defaults to the wall-clock time")
    p.add_argument("--log-every", type=int, default=1000)
    p.add_argument("--progress", action="store_true", help="Show a progress bar")
    p.add_argument(
        "--check-gradients",
        action="store_true",
        help="Verify the backward pass with finite differences before training",
    )
    p.add_argument("--plot", type=Path, default=None, help="Save the loss curve to this path")
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = TrainerConfig(
        epochs=args.epochs,
        learning_rate=args.learning_rate,
        seed=args.seed,
        log_every=args.log_every,
        progress=args.progress,
    )
    trainer = Trainer(config)

    if args.check_gradients:
        result = check_gradients(trainer.weights, trainer.dataset)
        print(
            f"Gradient check: hidden={result.hidden_error:.3e} output={result.output_error:.3e}"
            f" ({'ok' if result.passed() else 'FAILED'})"
        )

    history = trainer.fit()
    print(format_predictions(trainer.predict()))
    print(f"Seed {history.seed}: loss {trainer.loss():.6e} after {history.epochs} epochs")

    if args.plot is not None:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from multiplication_net.utils.visualization import plot_loss_history

        plot_loss_history(history.loss_epochs, history.losses)
        plt.savefig(args.plot)
        plt.close()
        print(f"Saved loss curve to {args.plot}")


if __name__ == "__main__":
    main()
