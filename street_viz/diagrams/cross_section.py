"""Street cross-section with proportionally scaled bands."""

from __future__ import annotations

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .layout import format_number, proportional_spans
from .params import CrossSectionParams
from .scene import Circle, Line, Marker, Path, Pattern, Rect, Scene, Text, to_svg
from .shapes import HEADING, title

CANVAS_WIDTH = 500
CANVAS_HEIGHT = 200
ORIGIN_X = 50
WIDTH_BUDGET = 400
BAND_TOP = 60
BAND_HEIGHT = 80

# name, fill, stroke, label colour, width colour
BAND_STYLES = (
    ("Sidewalk", "url(#sidewalk-pattern)", "#9ca3af", "#374151", "#6b7280"),
    ("Bike Lane", "#d1fae5", "#10b981", "#065f46", "#059669"),
    ("Travel Lane", "#f3f4f6", "#6b7280", "#374151", "#6b7280"),
    ("Parking", "#e0e7ff", "#6366f1", "#4338ca", "#6366f1"),
)


def build_scene(params: CrossSectionParams) -> Scene:
    widths = [
        params.sidewalk_width,
        params.bike_width,
        params.travel_width,
        params.parking_width,
    ]
    total = params.total_width
    spans = proportional_spans(widths, WIDTH_BUDGET, origin=ORIGIN_X)

    scene = Scene(width=CANVAS_WIDTH, height=CANVAS_HEIGHT)
    scene.define(
        Pattern(
            element_id="sidewalk-pattern",
            width=4,
            height=4,
            children=(
                Rect(x=0, y=0, width=4, height=4, fill="#e5e7eb"),
                Circle(cx=2, cy=2, r=0.5, fill="#9ca3af"),
            ),
        ),
        Pattern(
            element_id="bike-pattern",
            width=8,
            height=8,
            children=(
                Path(d="M0,4 L8,4", stroke="#10b981", stroke_width=0.5, stroke_dasharray="2,2"),
            ),
        ),
        Marker(
            element_id="dimension-arrow",
            marker_width=10,
            marker_height=10,
            ref_x=5,
            ref_y=5,
            children=(Path(d="M0,0 L0,10 L5,5 z", fill=HEADING),),
        ),
    )
    scene.add(title(f"Option {params.option} Cross-Section", CANVAS_WIDTH / 2, y=20))

    for span, width, (name, fill, stroke, label_color, width_color) in zip(
        spans, widths, BAND_STYLES, strict=True
    ):
        scene.add(
            Rect(
                x=span.offset,
                y=BAND_TOP,
                width=span.width,
                height=BAND_HEIGHT,
                fill=fill,
                stroke=stroke,
                stroke_width=2,
            )
        )
        if name == "Bike Lane":
            scene.add(
                Rect(x=span.offset, y=BAND_TOP, width=span.width, height=BAND_HEIGHT, fill="url(#bike-pattern)")
            )
        elif name == "Travel Lane":
            scene.add(
                Line(
                    x1=span.center,
                    y1=BAND_TOP,
                    x2=span.center,
                    y2=BAND_TOP + BAND_HEIGHT,
                    stroke="#fbbf24",
                    stroke_width=2,
                    stroke_dasharray="8,4",
                )
            )
        scene.add(
            Text(x=span.center, y=105, text=name, font_size=12, fill=label_color),
            Text(x=span.center, y=120, text=f"{format_number(width)}'", font_size=10, fill=width_color),
        )

    end = spans[-1].end
    scene.add(
        Line(
            x1=ORIGIN_X,
            y1=160,
            x2=end,
            y2=160,
            stroke=HEADING,
            stroke_width=2,
            marker_start="url(#dimension-arrow)",
            marker_end="url(#dimension-arrow)",
        ),
        Text(
            x=CANVAS_WIDTH / 2,
            y=180,
            text=f"Total: {format_number(total)} feet",
            font_size=12,
            fill=HEADING,
        ),
    )
    return scene


def generate_cross_section(params: CrossSectionParams, description: str) -> Visualization:
    scene = build_scene(params)
    total = format_number(params.total_width)
    return Visualization(
        type=VisualizationType.CROSS_SECTION,
        content=to_svg(scene),
        description=description,
        caption=(
            f"This cross-section illustrates the proposed {total}-foot street design "
            "with dedicated space for pedestrians, cyclists, vehicles, and parking, "
            "promoting safe multi-modal transportation."
        ),
        scene=scene,
    )
