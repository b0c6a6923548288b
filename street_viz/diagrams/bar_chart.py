"""Signed percentage bar chart normalized against the largest magnitude."""

from __future__ import annotations

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .layout import bar_color, format_number, round_half_up
from .params import BarChartParams
from .scene import Line, Rect, Scene, Text, to_svg
from .shapes import BODY, SUBTLE, title

BAR_WIDTH = 60
BAR_SPACING = 100
CHART_HEIGHT = 200
CHART_TOP = 50
START_X = 80
BASELINE = CHART_TOP + CHART_HEIGHT

CAPTION = (
    "This chart quantifies safety improvements across different user groups, "
    "demonstrating how the proposed design benefits pedestrians, cyclists, and "
    "drivers through reduced conflicts and enhanced infrastructure."
)


def value_label(value: float) -> str:
    prefix = "+" if value > 0 else ""
    return f"{prefix}{format_number(value)}%"


def bar_heights(values: tuple[float, ...]) -> list[float]:
    """Bar lengths proportional to |value| / max(|values|)."""
    max_abs = max((abs(v) for v in values), default=0)
    if not max_abs:
        return [0.0 for _ in values]
    return [abs(v) / max_abs * CHART_HEIGHT for v in values]


def build_scene(params: BarChartParams) -> Scene:
    count = len(params.categories)
    heights = bar_heights(params.values)
    max_abs = max((abs(v) for v in params.values), default=0)
    depth = max((h for h, v in zip(heights, params.values, strict=True) if v <= 0), default=0)
    axis_end = START_X + count * BAR_SPACING

    scene = Scene(width=axis_end + 50, height=300 + depth)
    scene.add(title(params.title, axis_end / 2))
    scene.add(
        Line(x1=START_X - 10, y1=CHART_TOP, x2=START_X - 10, y2=BASELINE + depth, stroke=SUBTLE, stroke_width=2),
        Line(x1=START_X - 10, y1=BASELINE, x2=axis_end, y2=BASELINE, stroke=SUBTLE, stroke_width=2),
    )

    for i, (category, value, height) in enumerate(
        zip(params.categories, params.values, heights, strict=True)
    ):
        x = START_X + i * BAR_SPACING
        color = bar_color(value)
        if value > 0:
            y = BASELINE - height
            label_y = y - 10
        else:
            y = BASELINE
            label_y = BASELINE + height + 16
        scene.add(
            Rect(
                x=x,
                y=y,
                width=BAR_WIDTH,
                height=height,
                fill=color,
                opacity=0.8,
                stroke=color,
                stroke_width=2,
                rx=4,
            ),
            Text(
                x=x + BAR_WIDTH / 2,
                y=label_y,
                text=value_label(value),
                font_size=14,
                font_weight="bold",
                fill=color,
            ),
            Text(x=x + BAR_WIDTH / 2, y=BASELINE + depth + 20, text=category, font_size=11, fill=BODY),
        )

    for y, label in (
        (CHART_TOP + 5, f"{format_number(max_abs)}%"),
        (CHART_TOP + CHART_HEIGHT / 2, f"{round_half_up(max_abs / 2)}%"),
        (BASELINE, "0%"),
    ):
        scene.add(Text(x=START_X - 20, y=y, text=label, text_anchor="end", font_size=10, fill=SUBTLE))
    return scene


def generate_bar_chart(params: BarChartParams, description: str) -> Visualization:
    scene = build_scene(params)
    return Visualization(
        type=VisualizationType.BAR_CHART,
        content=to_svg(scene),
        description=description,
        caption=CAPTION,
        scene=scene,
    )
