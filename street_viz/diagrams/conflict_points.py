"""Conflict points placed around each intersection, before and after."""

from __future__ import annotations

import math

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .layout import NEGATIVE, POSITIVE, Palette, delta_badge, format_number, palette_for, percent_delta
from .params import ConflictPointsParams
from .scene import Circle, Element, Path, Rect, Scene, Text, to_svg
from .shapes import SUBTLE, arrow_marker, badge, crossroads, period_heading, title

POINT_RADIUS = 35
BOX_SIZE = 100
BOX_TOP = 80


def ring_positions(count: int, cx: float, cy: float, radius: float = POINT_RADIUS) -> list[tuple[float, float]]:
    """``count`` points at equal angular spacing, starting at angle 0."""
    if count <= 0:
        return []
    return [
        (
            cx + math.cos(i / count * 2 * math.pi) * radius,
            cy + math.sin(i / count * 2 * math.pi) * radius,
        )
        for i in range(count)
    ]


def _intersection(center_x: float, label: str, points: int, palette: Palette) -> list[Element]:
    center_y = BOX_TOP + BOX_SIZE / 2
    elements: list[Element] = [period_heading(center_x, 55, label, palette)]
    elements += crossroads(center_x - BOX_SIZE / 2, BOX_TOP, BOX_SIZE, road_width=40, overhang=20)
    elements += [
        Circle(cx=x, cy=y, r=4, fill=palette.stroke, stroke=palette.text, stroke_width=1)
        for x, y in ring_positions(points, center_x, center_y)
    ]
    elements += [
        Text(
            x=center_x,
            y=205,
            text=format_number(points),
            font_size=18,
            font_weight="bold",
            fill=palette.stroke,
        ),
        Text(x=center_x, y=220, text="conflict points", font_size=10, fill=palette.muted),
    ]
    return elements


def build_scene(params: ConflictPointsParams) -> Scene:
    after_palette = palette_for(params.before_points, params.after_points)
    pct = percent_delta(params.before_points, params.after_points)

    scene = Scene(width=600, height=300)
    scene.define(arrow_marker("conflict-arrow"))
    scene.add(title("Conflict Point Reduction", 300))
    scene.add(*_intersection(150, "BEFORE", params.before_points, NEGATIVE))
    scene.add(Path(d="M 220 130 L 280 130", stroke=SUBTLE, stroke_width=3, marker_end="url(#conflict-arrow)"))
    scene.add(*_intersection(450, "AFTER", params.after_points, after_palette))
    # protected edges on the after layout
    scene.add(
        Rect(x=410, y=95, width=15, height=70, fill="#10b981", opacity=0.3, rx=2),
        Rect(x=475, y=95, width=15, height=70, fill="#10b981", opacity=0.3, rx=2),
    )
    scene.add(*badge(520, 130, 25, delta_badge(pct), after_palette.stroke))

    scene.add(
        Text(
            x=300,
            y=255,
            text="Conflict points represent locations where vehicle and pedestrian paths intersect",
            font_size=11,
            fill=SUBTLE,
        ),
        Circle(cx=220, cy=270, r=4, fill=NEGATIVE.stroke),
        Text(x=230, y=273, text="High risk", text_anchor="start", font_size=10, fill=SUBTLE),
        Circle(cx=320, cy=270, r=4, fill=POSITIVE.stroke),
        Text(x=330, y=273, text="Reduced risk", text_anchor="start", font_size=10, fill=SUBTLE),
    )
    return scene


def caption_for(params: ConflictPointsParams) -> str:
    before = format_number(params.before_points)
    after = format_number(params.after_points)
    if params.after_points < params.before_points:
        return (
            "Each conflict point represents a location where different traffic streams "
            f"intersect. Reducing these from {before} to {after} through protected "
            "infrastructure and signal phasing directly lowers crash probability and "
            "improves safety for vulnerable users."
        )
    return (
        "Each conflict point represents a location where different traffic streams "
        f"intersect. The proposed layout changes these from {before} to {after}, so "
        "crash exposure for vulnerable users is not reduced."
    )


def generate_conflict_points(params: ConflictPointsParams, description: str) -> Visualization:
    scene = build_scene(params)
    return Visualization(
        type=VisualizationType.CONFLICT_POINTS,
        content=to_svg(scene),
        description=description,
        caption=caption_for(params),
        scene=scene,
    )
