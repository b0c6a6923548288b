"""Side-by-side before/after panels for speed and conflict count."""

from __future__ import annotations

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .layout import NEGATIVE, Palette, delta_badge, format_number, palette_for, percent_delta
from .params import BeforeAfterParams
from .scene import Path, Rect, Scene, Text, to_svg
from .shapes import arrow_marker, badge, period_heading, title

AMBER = Palette(fill="#fef3c7", stroke="#f59e0b", accent="#fde68a", text="#78350f", muted="#92400e")

PANEL_WIDTH = 200
PANEL_HEIGHT = 80
SPEED_ROW = 70
CONFLICT_ROW = 170


def _metric_panel(
    x: float, y: float, label: str, value: float, unit: str, palette: Palette
) -> list:
    cx = x + PANEL_WIDTH / 2
    return [
        Rect(
            x=x,
            y=y,
            width=PANEL_WIDTH,
            height=PANEL_HEIGHT,
            fill=palette.fill,
            stroke=palette.stroke,
            stroke_width=2,
            rx=4,
        ),
        Text(x=cx, y=y + 25, text=label, font_size=12, fill=palette.text),
        Text(
            x=cx,
            y=y + 50,
            text=format_number(value),
            font_size=32,
            font_weight="bold",
            fill=palette.stroke,
        ),
        Text(x=cx, y=y + 70, text=unit, font_size=12, fill=palette.muted),
    ]


def _change(pct: int, verb: str) -> str:
    if pct > 0:
        return f"{verb} by {pct}%"
    if pct < 0:
        return f"increased by {-pct}%"
    return "remained unchanged"


def caption_for(params: BeforeAfterParams) -> str:
    speed_pct = percent_delta(params.before_speed, params.after_speed)
    conflict_pct = percent_delta(params.before_conflicts, params.after_conflicts)
    speeds = _change(speed_pct, "reduced")
    conflicts = _change(conflict_pct, "decreased")
    if speed_pct > 0 and conflict_pct > 0:
        return (
            "Comparing current conditions to proposed improvements shows significant "
            f"safety gains: vehicle speeds {speeds} and conflict points {conflicts}, "
            "directly reducing crash risk for all road users."
        )
    return (
        "Comparing current conditions to the proposed changes: "
        f"vehicle speeds {speeds} and conflict points {conflicts}."
    )


def build_scene(params: BeforeAfterParams) -> Scene:
    speed_palette = palette_for(params.before_speed, params.after_speed)
    conflict_palette = palette_for(params.before_conflicts, params.after_conflicts)
    speed_pct = percent_delta(params.before_speed, params.after_speed)
    conflict_pct = percent_delta(params.before_conflicts, params.after_conflicts)

    scene = Scene(width=600, height=300)
    scene.define(arrow_marker("arrowhead"))
    scene.add(title("Before vs After Comparison", 300, size=18))

    scene.add(period_heading(150, 55, "BEFORE", NEGATIVE, size=14))
    scene.add(*_metric_panel(50, SPEED_ROW, "Average Speed", params.before_speed, "mph", NEGATIVE))
    scene.add(
        *_metric_panel(50, CONFLICT_ROW, "Conflict Points", params.before_conflicts, "intersections", AMBER)
    )

    scene.add(
        Path(d="M 270 150 L 320 150", stroke="#6b7280", stroke_width=3, fill="none", marker_end="url(#arrowhead)")
    )

    scene.add(period_heading(450, 55, "AFTER", speed_palette, size=14))
    scene.add(*_metric_panel(350, SPEED_ROW, "Average Speed", params.after_speed, "mph", speed_palette))
    scene.add(*badge(520, 100, 20, delta_badge(speed_pct), speed_palette.stroke, size=12))
    scene.add(
        *_metric_panel(
            350, CONFLICT_ROW, "Conflict Points", params.after_conflicts, "intersections", conflict_palette
        )
    )
    scene.add(*badge(520, 200, 20, delta_badge(conflict_pct), conflict_palette.stroke, size=12))
    return scene


def generate_before_after(params: BeforeAfterParams, description: str) -> Visualization:
    scene = build_scene(params)
    return Visualization(
        type=VisualizationType.BEFORE_AFTER,
        content=to_svg(scene),
        description=description,
        caption=caption_for(params),
        scene=scene,
    )
