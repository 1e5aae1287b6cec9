"""Pydantic schemas for Panels API (request/response)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from champagne.services.layout import grid_count

# Largest grid the stock parameter ranges allow: 2000 mm panel / 20 mm pitch, squared.
MAX_HOLE_COUNT = 10_000
MAX_STEP_MM = 20.0


class PanelRequestSchema(BaseModel):
    """POST body: panel parameters (mm). Defaults are the stock 610×290 drainer panel."""

    model_config = ConfigDict(extra="forbid")

    length: float = Field(610.0, gt=0, le=2000.0)
    width: float = Field(290.0, gt=0, le=2000.0)
    border: float = Field(5.0, ge=0, le=20.0)
    show_border: bool = False
    shuffle: bool = True
    jitter: bool = False
    max_radius: float = Field(20.0, gt=0, le=100.0)
    steps: list[float] = Field(default_factory=lambda: [5.0, 5.0, 4.0, 6.0, 6.0], max_length=20)
    dedupe_radii: bool = False
    seed: int | None = None

    @field_validator("steps")
    @classmethod
    def steps_in_range(cls, value: list[float]) -> list[float]:
        for i, step in enumerate(value):
            if step < 0 or step > MAX_STEP_MM:
                raise ValueError(f"steps[{i}] must be between 0 and {MAX_STEP_MM:g}")
        return value

    @model_validator(mode="after")
    def hole_count_within_limit(self) -> "PanelRequestSchema":
        columns = grid_count(self.width, self.border, self.max_radius)
        rows = grid_count(self.length, self.border, self.max_radius)
        if columns * rows > MAX_HOLE_COUNT:
            raise ValueError(
                f"Grid of {columns} x {rows} holes exceeds the limit of {MAX_HOLE_COUNT}; "
                "increase max_radius or reduce the panel size"
            )
        return self


class HoleSchema(BaseModel):
    """Single hole: grid cell, centre (mm), radius (mm)."""

    column: int
    row: int
    x: float
    y: float
    radius: float


class RectSchema(BaseModel):
    width: float
    height: float
    offset: tuple[float, float] = (0.0, 0.0)


class GridSchema(BaseModel):
    columns: int
    rows: int


class RadiusStatsSchema(BaseModel):
    radius: float
    count: int
    total_area: float
    percentage: int


class StatsSchema(BaseModel):
    """Per-radius breakdown (largest first) and panel totals."""

    per_radius: list[RadiusStatsSchema]
    total_hole_count: int
    total_hole_area: float
    total_area: float
    total_open_percentage: int


class LayoutResponseSchema(BaseModel):
    """Response: holes, border rectangles, grid, radii, warnings, stats."""

    holes: list[HoleSchema]
    outer_rect: RectSchema
    inner_rect: RectSchema | None
    grid: GridSchema
    radii: list[float]
    pitch: float
    warnings: list[str]
    stats: StatsSchema


class StatsResponseSchema(BaseModel):
    """Response: stats plus the rendered markdown notes."""

    stats: StatsSchema
    notes: str
