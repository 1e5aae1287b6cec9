"""Panels API: compute a champagne hole layout and its open-area stats."""

from __future__ import annotations

import logging
import random

from fastapi import APIRouter, Depends, HTTPException, status

from champagne.config import AppSettings, get_settings
from champagne.schemas.panels import (
    GridSchema,
    HoleSchema,
    LayoutResponseSchema,
    PanelRequestSchema,
    RadiusStatsSchema,
    RectSchema,
    StatsResponseSchema,
    StatsSchema,
)
from champagne.services.errors import LayoutError
from champagne.services.layout import Layout, PanelSpec, Rect, compute_layout
from champagne.services.stats import StatsSummary, render_notes, summarize

logger = logging.getLogger(__name__)

router = APIRouter()


def _rng_for(payload: PanelRequestSchema, settings: AppSettings) -> random.Random:
    """Request seed wins; else CHAMPAGNE_RANDOM_SEED; else unseeded."""
    seed = payload.seed
    if seed is None:
        seed = settings.random_seed
    return random.Random(seed)


def _spec_from_payload(payload: PanelRequestSchema) -> PanelSpec:
    return PanelSpec(
        length=payload.length,
        width=payload.width,
        border=payload.border,
        show_border=payload.show_border,
        shuffle=payload.shuffle,
        jitter=payload.jitter,
        max_radius=payload.max_radius,
        steps=tuple(payload.steps),
        dedupe_radii=payload.dedupe_radii,
    )


def _build(payload: PanelRequestSchema, settings: AppSettings) -> tuple[Layout, StatsSummary]:
    """Run layout + stats; LayoutError -> 422, anything else -> 500."""
    try:
        spec = _spec_from_payload(payload)
        layout = compute_layout(spec, rng=_rng_for(payload, settings))
        summary = summarize(layout, spec)
    except LayoutError as exc:
        logger.info("Panel rejected (%s): %s", exc.kind, exc.message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.to_detail(),
        ) from exc
    except Exception:
        logger.exception("Failed to compute panel layout.")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return layout, summary


def _rect_to_schema(r: Rect) -> RectSchema:
    return RectSchema(width=r.width, height=r.height, offset=r.offset)


def _stats_to_schema(s: StatsSummary) -> StatsSchema:
    return StatsSchema(
        per_radius=[
            RadiusStatsSchema(
                radius=item.radius,
                count=item.count,
                total_area=item.total_area,
                percentage=item.percentage,
            )
            for item in s.per_radius
        ],
        total_hole_count=s.total_hole_count,
        total_hole_area=s.total_hole_area,
        total_area=s.total_area,
        total_open_percentage=s.total_open_percentage,
    )


@router.post("/layout", response_model=LayoutResponseSchema)
def compute_layout_endpoint(
    payload: PanelRequestSchema,
    settings: AppSettings = Depends(get_settings),
) -> LayoutResponseSchema:
    """
    Compute hole centres and radii, border rectangles and stats for a panel.
    422 with detail.kind = invalid_spec | invalid_schedule when no layout can be built.
    """
    layout, summary = _build(payload, settings)
    return LayoutResponseSchema(
        holes=[
            HoleSchema(column=h.column, row=h.row, x=h.x, y=h.y, radius=h.radius)
            for h in layout.holes
        ],
        outer_rect=_rect_to_schema(layout.outer_rect),
        inner_rect=_rect_to_schema(layout.inner_rect) if layout.inner_rect is not None else None,
        grid=GridSchema(columns=layout.grid.columns, rows=layout.grid.rows),
        radii=list(layout.radii),
        pitch=layout.pitch,
        warnings=list(layout.warnings),
        stats=_stats_to_schema(summary),
    )


@router.post("/stats", response_model=StatsResponseSchema)
def panel_stats_endpoint(
    payload: PanelRequestSchema,
    settings: AppSettings = Depends(get_settings),
) -> StatsResponseSchema:
    """Open-area stats and the markdown notes table for a panel."""
    _, summary = _build(payload, settings)
    return StatsResponseSchema(
        stats=_stats_to_schema(summary),
        notes=render_notes(summary),
    )
