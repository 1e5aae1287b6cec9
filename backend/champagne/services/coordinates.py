"""
Hole centre coordinates on the panel (mm, origin at the panel corner).

Grid cell (column, row) has its nominal centre at
  x = border + max_radius + 2 * max_radius * column
  y = border + max_radius + 2 * max_radius * row
Columns run along x (panel width), rows along y (panel length).

Jitter: one signed integer offset per hole, added to both axes, drawn uniformly
from the integers in [-bound, bound - 1] (bound = largest radius - hole radius).
"""

from __future__ import annotations

import math
import random


def jitter_offset(bound: float, rng: random.Random) -> int:
    """
    Random offset for a hole whose positional slack is `bound` mm.

    Uniform over the integers in [-bound, bound - 1]; 0 when that range holds no
    integer (bound <= 0, or a fractional bound below 1).
    """
    low = math.ceil(-bound)
    high = math.floor(bound - 1)
    if bound <= 0 or low > high:
        return 0
    return rng.randint(low, high)


def axis_position(index: int, border: float, max_radius: float) -> float:
    """Nominal centre along one axis for grid index `index`."""
    return border + max_radius + index * 2 * max_radius


def hole_center(
    column: int,
    row: int,
    border: float,
    max_radius: float,
    *,
    jitter: bool = False,
    bound: float = 0.0,
    rng: random.Random | None = None,
) -> tuple[float, float]:
    """
    Centre (x, y) of the hole at (column, row).

    With jitter enabled, `bound` is the largest schedule radius minus this hole's
    radius, so smaller holes get more slack. A fresh offset is drawn on every call.
    """
    offset = 0
    if jitter:
        offset = jitter_offset(bound, rng if rng is not None else random.Random())
    return (
        axis_position(column, border, max_radius) + offset,
        axis_position(row, border, max_radius) + offset,
    )
