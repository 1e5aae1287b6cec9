"""
Champagne panel layout: a rectangular grid of round holes of stepped radii.

Pipeline (each step a plain function, results passed forward as values):
- Grid: columns along x from panel width, rows along y from panel length;
  count = floor((dimension - 2 * border) / pitch), pitch = 2 * max_radius, never negative.
- Radii: max_radius minus the running sum of steps, kept while >= 0 (zero included).
- Assignment: radii dealt round-robin over columns * rows cells, optionally shuffled.
- Holes: rows outer, columns inner; cell (column, row) takes slot row * columns + column.
- Rectangles: outer = width x length; inner = inset by border when show_border.

Units: mm throughout.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from champagne.services.coordinates import hole_center
from champagne.services.errors import DEGENERATE_GRID, InvalidSchedule, InvalidSpec

logger = logging.getLogger(__name__)


def _require_finite(name: str, value: object) -> None:
    """InvalidSpec unless value is a real, finite number (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSpec(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidSpec(f"{name} must be a finite number, got {value}")


@dataclass(frozen=True)
class PanelSpec:
    """Panel parameters for one layout run; validated on construction."""

    length: float
    width: float
    border: float = 0.0
    show_border: bool = False
    shuffle: bool = False
    jitter: bool = False
    max_radius: float = 20.0
    steps: tuple[float, ...] = ()
    dedupe_radii: bool = False

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "steps", tuple(self.steps))
        except TypeError as exc:
            raise InvalidSpec(f"steps must be a sequence of numbers, got {self.steps!r}") from exc
        for name in ("length", "width", "border", "max_radius"):
            _require_finite(name, getattr(self, name))
        if self.length <= 0:
            raise InvalidSpec(f"length must be > 0, got {self.length}")
        if self.width <= 0:
            raise InvalidSpec(f"width must be > 0, got {self.width}")
        if self.border < 0:
            raise InvalidSpec(f"border must be >= 0, got {self.border}")
        if self.max_radius <= 0:
            raise InvalidSpec(f"max_radius must be > 0, got {self.max_radius}")
        for i, step in enumerate(self.steps):
            _require_finite(f"steps[{i}]", step)
            if step < 0:
                raise InvalidSpec(f"steps[{i}] must be >= 0, got {step}")

    @property
    def pitch(self) -> float:
        return 2 * self.max_radius

    @property
    def total_area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class GridDims:
    columns: int
    rows: int

    @property
    def hole_count(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class Hole:
    """Single hole: grid cell, centre in mm, radius in mm."""

    column: int
    row: int
    x: float
    y: float
    radius: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; offset is its lower-left corner."""

    width: float
    height: float
    offset: tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class Layout:
    """Result of layout computation."""

    holes: tuple[Hole, ...]
    outer_rect: Rect
    inner_rect: Rect | None
    grid: GridDims
    radii: tuple[float, ...]
    pitch: float
    warnings: tuple[str, ...] = ()

    @property
    def is_degenerate(self) -> bool:
        return self.grid.columns == 0 or self.grid.rows == 0


def radius_schedule(max_radius: float, steps: tuple[float, ...] | list[float]) -> list[float]:
    """
    Radii max_radius - (s0), max_radius - (s0 + s1), ... kept while >= 0.

    Zero is a valid radius. Equal radii from zero steps are kept; may be empty.
    """
    radii: list[float] = []
    offset = 0.0
    for step in steps:
        offset += step
        candidate = max_radius - offset
        if candidate >= 0:
            radii.append(candidate)
    return radii


def dedupe(radii: list[float]) -> list[float]:
    """Drop repeated radii, keeping first-occurrence order."""
    return list(dict.fromkeys(radii))


def grid_count(dimension: float, border: float, max_radius: float) -> int:
    """Holes that fit along one axis; 0 when the border leaves no room."""
    usable = dimension - 2 * border
    if usable <= 0:
        return 0
    return math.floor(usable / (2 * max_radius))


def grid_dims(spec: PanelSpec) -> GridDims:
    """Columns from width (x axis), rows from length (y axis)."""
    return GridDims(
        columns=grid_count(spec.width, spec.border, spec.max_radius),
        rows=grid_count(spec.length, spec.border, spec.max_radius),
    )


def distribute_radii(radii: list[float], hole_count: int) -> list[float]:
    """Round-robin radii over hole_count slots; counts differ by at most 1."""
    if not radii:
        raise InvalidSchedule("Cannot distribute an empty radius list")
    return [radii[i % len(radii)] for i in range(hole_count)]


def shuffle_radii(assignment: list[float], rng: random.Random) -> list[float]:
    """Fisher-Yates permutation of a copy; the input list is left untouched."""
    shuffled = list(assignment)
    rng.shuffle(shuffled)
    return shuffled


def _outer_rect(spec: PanelSpec) -> Rect:
    return Rect(width=spec.width, height=spec.length)


def _inner_rect(spec: PanelSpec) -> Rect:
    return Rect(
        width=max(0.0, spec.width - 2 * spec.border),
        height=max(0.0, spec.length - 2 * spec.border),
        offset=(spec.border, spec.border),
    )


def compute_layout(spec: PanelSpec, rng: random.Random | None = None) -> Layout:
    """
    Build the full hole layout for a panel.

    Raises InvalidSchedule when the steps leave no radius >= 0. A grid with zero
    columns or rows is not an error: the layout has no holes and carries the
    degenerate_grid warning.

    `rng` drives shuffle and jitter; pass a seeded random.Random for reproducible
    output. Neither is consumed when both flags are off.
    """
    if rng is None:
        rng = random.Random()

    dims = grid_dims(spec)
    radii = radius_schedule(spec.max_radius, spec.steps)
    if spec.dedupe_radii:
        radii = dedupe(radii)
    if not radii:
        raise InvalidSchedule(
            f"Steps {list(spec.steps)} leave no hole radius >= 0 "
            f"from max_radius {spec.max_radius}"
        )
    logger.debug(
        "Panel %sx%s: grid %dx%d, radii %s",
        spec.width, spec.length, dims.columns, dims.rows, radii,
    )

    assignment = distribute_radii(radii, dims.hole_count)
    if spec.shuffle:
        assignment = shuffle_radii(assignment, rng)

    largest = radii[0]
    holes: list[Hole] = []
    for row in range(dims.rows):
        for column in range(dims.columns):
            radius = assignment[row * dims.columns + column]
            x, y = hole_center(
                column,
                row,
                spec.border,
                spec.max_radius,
                jitter=spec.jitter,
                bound=largest - radius,
                rng=rng,
            )
            holes.append(Hole(column=column, row=row, x=x, y=y, radius=radius))

    warnings: tuple[str, ...] = ()
    if dims.columns == 0 or dims.rows == 0:
        logger.warning(
            "Degenerate grid %dx%d: border %s / max_radius %s leave no room on %sx%s panel",
            dims.columns, dims.rows, spec.border, spec.max_radius, spec.width, spec.length,
        )
        warnings = (DEGENERATE_GRID,)

    return Layout(
        holes=tuple(holes),
        outer_rect=_outer_rect(spec),
        inner_rect=_inner_rect(spec) if spec.show_border else None,
        grid=dims,
        radii=tuple(radii),
        pitch=spec.pitch,
        warnings=warnings,
    )
