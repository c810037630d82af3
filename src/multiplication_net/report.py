"""Text rendering of prediction matrices."""

from __future__ import annotations

from typing import List, Sequence, Union

from torch import Tensor

MatrixLike = Union[Tensor, Sequence[Sequence[float]]]

BANNER = "Predictions after training"
PREFIX = "    "


def _format_value(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _as_rows(values: MatrixLike) -> List[List[float]]:
    if isinstance(values, Tensor):
        if values.ndim != 2:
            raise ValueError("expected a 2-D tensor")
        return values.tolist()
    return [list(row) for row in values]


def format_matrix(values: MatrixLike, prefix: str = "") -> str:
    """Render ``values`` as a bracketed matrix.

    The first line carries no prefix so the result can follow a label such as
    ``"output = "``; every continuation line starts with ``prefix``.
    """

    rows = _as_rows(values)
    if not rows:
        return "[]"
    cells = [[_format_value(value) for value in row] for row in rows]
    num_cols = len(cells[0])
    if any(len(row) != num_cols for row in cells):
        raise ValueError("all rows must have the same length")
    widths = [max(len(row[col]) for row in cells) for col in range(num_cols)]

    lines = []
    last = len(cells) - 1
    for index, row in enumerate(cells):
        body = "  ".join(cell.rjust(widths[col]) for col, cell in enumerate(row))
        if last == 0:
            left, right = "[", "]"
        elif index == 0:
            left, right = "⎡", "⎤"
        elif index == last:
            left, right = "⎣", "⎦"
        else:
            left, right = "⎢", "⎥"
        lead = "" if index == 0 else prefix
        lines.append(f"{lead}{left}{body}{right}")
    return "\n".join(lines)


def format_predictions(
    predictions: MatrixLike,
    label: str = "output = ",
    prefix: str = PREFIX,
) -> str:
    """Banner line followed by ``label`` and the prediction matrix.

    Continuation rows are indented by ``prefix``, four spaces by default.
    """

    matrix = format_matrix(predictions, prefix=prefix)
    return f"{BANNER}\n{label}{matrix}"


__all__ = ["BANNER", "PREFIX", "format_matrix", "format_predictions"]
