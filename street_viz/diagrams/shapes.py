"""Reusable draw-command groups shared by several diagrams."""

from __future__ import annotations

from .layout import Palette
from .scene import Circle, Element, Line, Marker, Polygon, Rect, Text

HEADING = "#1f2937"
BODY = "#374151"
SUBTLE = "#6b7280"
FAINT = "#9ca3af"
ROAD = "#d1d5db"
PAVEMENT = "#f3f4f6"
CENTER_LINE = "#fbbf24"


def title(text: str, x: float, y: float = 25, size: float = 16) -> Text:
    return Text(x=x, y=y, text=text, font_size=size, font_weight="bold", fill=HEADING)


def arrow_marker(element_id: str, size: float = 10) -> Marker:
    """Triangular arrowhead referenced as ``url(#<element_id>)``."""
    half = size * 0.3 if size >= 10 else size / 2
    return Marker(
        element_id=element_id,
        marker_width=size,
        marker_height=size,
        ref_x=size - 1,
        ref_y=half,
        children=(
            Polygon(points=((0, 0), (size, half), (0, half * 2)), fill=SUBTLE),
        ),
    )


def period_heading(x: float, y: float, label: str, palette: Palette, size: float = 12) -> Text:
    return Text(x=x, y=y, text=label, font_size=size, font_weight="bold", fill=palette.stroke)


def badge(cx: float, cy: float, r: float, label: str, fill: str, size: float = 14) -> list[Element]:
    return [
        Circle(cx=cx, cy=cy, r=r, fill=fill),
        Text(x=cx, y=cy + 5, text=label, font_size=size, font_weight="bold", fill="white"),
    ]


def pedestrian(cx: float, top: float, color: str) -> list[Element]:
    """Stick figure with its head centred at (cx, top)."""
    neck = top + 8
    hip = top + 35
    arms = top + 15
    return [
        Circle(cx=cx, cy=top, r=8, fill=color),
        Line(x1=cx, y1=neck, x2=cx, y2=hip, stroke=color, stroke_width=3),
        Line(x1=cx, y1=arms, x2=cx - 15, y2=arms + 10, stroke=color, stroke_width=3),
        Line(x1=cx, y1=arms, x2=cx + 15, y2=arms + 10, stroke=color, stroke_width=3),
        Line(x1=cx, y1=hip, x2=cx - 15, y2=hip + 15, stroke=color, stroke_width=3),
        Line(x1=cx, y1=hip, x2=cx + 15, y2=hip + 15, stroke=color, stroke_width=3),
    ]


def vehicle(x: float, y: float, palette: Palette) -> list[Element]:
    return [
        Rect(x=x, y=y, width=15, height=25, fill=palette.stroke, stroke=palette.text, stroke_width=1, rx=2),
        Rect(x=x + 2, y=y + 3, width=11, height=8, fill=palette.accent, rx=1),
    ]


def crossroads(
    box_x: float, box_y: float, box_size: float, road_width: float, overhang: float
) -> list[Element]:
    """Intersection box with a vertical and a horizontal road through its centre."""
    cx = box_x + box_size / 2
    cy = box_y + box_size / 2
    return [
        Rect(x=box_x, y=box_y, width=box_size, height=box_size, fill=PAVEMENT, stroke=SUBTLE, stroke_width=2),
        Rect(
            x=cx - road_width / 2,
            y=box_y - overhang,
            width=road_width,
            height=box_size + 2 * overhang,
            fill=ROAD,
            opacity=0.5,
        ),
        Rect(
            x=box_x - overhang,
            y=cy - road_width / 2,
            width=box_size + 2 * overhang,
            height=road_width,
            fill=ROAD,
            opacity=0.5,
        ),
    ]
