"""Pedestrian crossing exposure time, before and after."""

from __future__ import annotations

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .layout import NEGATIVE, Palette, delta_badge, format_number, palette_for, percent_delta
from .params import PedestrianExposureParams
from .scene import Path, Rect, Scene, Text, to_svg
from .shapes import SUBTLE, arrow_marker, badge, pedestrian, period_heading, title


def _exposure_panel(x: float, label: str, seconds: float, palette: Palette) -> list:
    cx = x + 100
    return [
        period_heading(cx, 55, label, palette),
        Rect(x=x, y=70, width=200, height=120, fill=palette.fill, stroke=palette.stroke, stroke_width=2, rx=4),
        *pedestrian(cx, 110, palette.stroke),
        Text(
            x=cx,
            y=180,
            text=f"{format_number(seconds)}s",
            font_size=20,
            font_weight="bold",
            fill=palette.stroke,
        ),
        Text(x=cx, y=195, text="exposure time", font_size=10, fill=palette.muted),
    ]


def build_scene(params: PedestrianExposureParams) -> Scene:
    after_palette = palette_for(params.before_time, params.after_time)
    pct = percent_delta(params.before_time, params.after_time)

    scene = Scene(width=500, height=250)
    scene.define(arrow_marker("exposure-arrow", size=8))
    scene.add(title("Pedestrian Crossing Exposure", 250))
    scene.add(*_exposure_panel(25, "BEFORE", params.before_time, NEGATIVE))
    scene.add(
        Path(d="M 235 130 L 265 130", stroke=SUBTLE, stroke_width=2, marker_end="url(#exposure-arrow)")
    )
    scene.add(*_exposure_panel(275, "AFTER", params.after_time, after_palette))
    scene.add(*badge(445, 130, 22, delta_badge(pct), after_palette.stroke))
    scene.add(
        Text(
            x=250,
            y=225,
            text=f"Crossing width: {format_number(params.crossing_width)} feet",
            font_size=11,
            fill=SUBTLE,
        )
    )
    return scene


def caption_for(params: PedestrianExposureParams) -> str:
    before = format_number(params.before_time)
    after = format_number(params.after_time)
    width = format_number(params.crossing_width)
    if params.after_time < params.before_time:
        return (
            f"Reducing pedestrian exposure time from {before} to {after} seconds across "
            f"the {width}-foot crossing means less time vulnerable to vehicle conflicts, "
            "especially critical for children and elderly crossing to schools or "
            "community centers."
        )
    return (
        f"Pedestrian exposure time changes from {before} to {after} seconds across the "
        f"{width}-foot crossing, so people on foot spend no less time exposed to "
        "vehicle conflicts."
    )


def generate_pedestrian_exposure(
    params: PedestrianExposureParams, description: str
) -> Visualization:
    scene = build_scene(params)
    return Visualization(
        type=VisualizationType.PEDESTRIAN_EXPOSURE,
        content=to_svg(scene),
        description=description,
        caption=caption_for(params),
        scene=scene,
    )
