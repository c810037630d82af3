"""Two-layer sigmoid network trained by backpropagation on a multiplication table.

The package is organised around a handful of small modules:
- ``data`` embeds the 9-row dataset,
- ``network`` holds the forward/backward passes and weight updates,
- ``training`` runs the fixed-budget gradient descent loop, and
- ``gradcheck`` verifies the backward pass with finite differences.
"""

__all__ = [
    "activations",
    "config",
    "data",
    "gradcheck",
    "network",
    "report",
    "training",
    "utils",
]
