"""Intersection schematic with recommended safety interventions."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .layout import (
    FLEX_BOLLARD_DISPLAY_LIMIT,
    RED_LIGHT_CAMERA_DISPLAY_LIMIT,
    SPEED_CAMERA_DISPLAY_LIMIT,
    STOP_SIGN_DISPLAY_LIMIT,
    cap_icons,
)
from .params import SolutionPlanningParams
from .scene import Circle, Element, Ellipse, Group, Line, Marker, Polygon, Rect, Scene, Text, to_svg
from .shapes import BODY, CENTER_LINE, HEADING, PAVEMENT, ROAD, SUBTLE, title

dataclass_kwargs = {"slots": True, "frozen": True}

SPEED_CAMERA_POSITIONS = ((250, 140, 1), (350, 260, -1))
STOP_SIGN_POSITIONS = ((230, 120), (380, 120), (230, 270))
RED_LIGHT_CAMERA_POSITIONS = ((375, 285),)
FLEX_BOLLARD_POSITIONS = ((265, 175), (335, 175), (265, 225), (335, 225))


@dataclass(**dataclass_kwargs)
class Intervention:
    key: str
    label: str
    function: str
    display_limit: int


INTERVENTIONS = (
    Intervention("speed_cameras", "Speed Camera", "Enforces speed limits", SPEED_CAMERA_DISPLAY_LIMIT),
    Intervention("stop_signs", "Stop Sign", "Controls intersection flow", STOP_SIGN_DISPLAY_LIMIT),
    Intervention(
        "red_light_cameras", "Red Light Camera", "Prevents signal violations", RED_LIGHT_CAMERA_DISPLAY_LIMIT
    ),
    Intervention("flex_bollards", "Flex Bollard", "Protects pedestrian zones", FLEX_BOLLARD_DISPLAY_LIMIT),
)


def _speed_camera(x: float, y: float, direction: int) -> list[Element]:
    return [
        Circle(cx=x, cy=y, r=12, fill="#3b82f6", stroke="#1e40af", stroke_width=2),
        Text(x=x, y=y + 5, text="SC", font_size=10, font_weight="bold", fill="white"),
        Line(
            x1=x,
            y1=y + 12 * direction,
            x2=x,
            y2=y + 30 * direction,
            stroke="#3b82f6",
            stroke_width=2,
            marker_end="url(#arrow-solution)",
        ),
    ]


def _stop_sign(x: float, y: float, scale: float = 1.0, label_size: float = 8) -> list[Element]:
    s = scale
    return [
        Polygon(
            points=((x - 10 * s, y), (x, y - 5 * s), (x + 10 * s, y), (x + 5 * s, y + 10 * s), (x - 5 * s, y + 10 * s)),
            fill="#dc2626",
            stroke="#7f1d1d",
            stroke_width=2 * s,
        ),
        Text(x=x, y=y + 5 * s, text="STOP", font_size=label_size, font_weight="bold", fill="white"),
    ]


def _red_light_camera(x: float, y: float) -> list[Element]:
    return [
        Rect(x=x - 10, y=y - 10, width=20, height=20, fill="#f59e0b", stroke="#d97706", stroke_width=2, rx=2),
        Circle(cx=x, cy=y, r=5, fill="#fef3c7"),
        Text(x=x, y=y + 3, text="RLC", font_size=6, font_weight="bold", fill="#78350f"),
    ]


def _flex_bollard(x: float, y: float, rx: float = 4, ry: float = 8) -> list[Element]:
    return [
        Ellipse(cx=x, cy=y, rx=rx, ry=ry, fill="#10b981", stroke="#14532d", stroke_width=1),
        Ellipse(cx=x, cy=y - 3, rx=rx - 1, ry=rx - 1, fill="#86efac"),
    ]


def _schematic() -> list[Element]:
    return [
        Rect(x=200, y=100, width=200, height=200, fill=PAVEMENT, stroke=SUBTLE, stroke_width=3, rx=4),
        Rect(x=280, y=60, width=40, height=280, fill=ROAD, opacity=0.7),
        Rect(x=160, y=180, width=280, height=40, fill=ROAD, opacity=0.7),
        Line(x1=300, y1=60, x2=300, y2=340, stroke=CENTER_LINE, stroke_width=2, stroke_dasharray="10,5"),
        Line(x1=160, y1=200, x2=440, y2=200, stroke=CENTER_LINE, stroke_width=2, stroke_dasharray="10,5"),
        Group(
            opacity=0.8,
            children=tuple(
                Rect(x=x, y=y, width=w, height=h, fill="white", stroke=BODY, stroke_width=1)
                for x, y, w, h in ((270, 95, 60, 8), (270, 297, 60, 8), (155, 190, 8, 20), (437, 190, 8, 20))
            ),
        ),
    ]


def _legend_icon(key: str) -> list[Element]:
    if key == "speed_cameras":
        return [
            Circle(cx=10, cy=0, r=8, fill="#3b82f6", stroke="#1e40af", stroke_width=1),
            Text(x=10, y=3, text="SC", font_size=7, font_weight="bold", fill="white"),
        ]
    if key == "stop_signs":
        return _stop_sign(15, 0, scale=0.5, label_size=6)
    if key == "red_light_cameras":
        return [
            Rect(x=5, y=-5, width=14, height=14, fill="#f59e0b", stroke="#d97706", stroke_width=1, rx=1),
            Circle(cx=12, cy=2, r=3, fill="#fef3c7"),
        ]
    return _flex_bollard(10, 0, rx=3, ry=6)


def legend_rows(params: SolutionPlanningParams) -> list[tuple[Intervention, int]]:
    """Every intervention category with its supplied count, zero included."""
    return [(item, getattr(params, item.key)) for item in INTERVENTIONS]


def _legend(params: SolutionPlanningParams) -> Group:
    offsets = ((0, 20), (150, 20), (300, 20), (0, 60))
    rows: list[Element] = [
        Text(x=0, y=0, text="Safety Interventions:", text_anchor="start", font_size=14, font_weight="bold", fill=HEADING)
    ]
    for (item, count), (dx, dy) in zip(legend_rows(params), offsets, strict=True):
        text_x = 30 if item.key == "stop_signs" else 25
        rows.append(
            Group(
                transform=f"translate({dx}, {dy})",
                children=(
                    *_legend_icon(item.key),
                    Text(x=text_x, y=4, text=f"{item.label} ({count})", text_anchor="start", font_size=11, fill=BODY),
                    Text(x=text_x, y=16, text=item.function, text_anchor="start", font_size=9, fill=SUBTLE),
                ),
            )
        )
    return Group(transform="translate(50, 360)", children=tuple(rows))


def build_scene(params: SolutionPlanningParams) -> tuple[Scene, dict[str, int]]:
    rows = {item.key: cap_icons(getattr(params, item.key), item.display_limit) for item in INTERVENTIONS}

    scene = Scene(width=600, height=500)
    scene.define(
        Marker(
            element_id="arrow-solution",
            marker_width=8,
            marker_height=8,
            ref_x=7,
            ref_y=4,
            children=(Polygon(points=((0, 0), (8, 4), (0, 8)), fill=SUBTLE),),
        )
    )
    scene.add(title("Safety Intervention Recommendations", 300, size=18))
    scene.add(Text(x=300, y=45, text=params.intersection_name, font_size=12, fill=SUBTLE))
    scene.add(Group(children=tuple(_schematic())))

    placements = (
        ("speed_cameras", [_speed_camera(x, y, d) for x, y, d in SPEED_CAMERA_POSITIONS]),
        ("stop_signs", [_stop_sign(x, y) for x, y in STOP_SIGN_POSITIONS]),
        ("red_light_cameras", [_red_light_camera(x, y) for x, y in RED_LIGHT_CAMERA_POSITIONS]),
        ("flex_bollards", [_flex_bollard(x, y) for x, y in FLEX_BOLLARD_POSITIONS]),
    )
    for key, icons in placements:
        shown = rows[key].shown
        if shown:
            scene.add(
                Group(
                    element_id=key.replace("_", "-"),
                    children=tuple(el for icon in icons[:shown] for el in icon),
                )
            )

    scene.add(_legend(params))
    overflow = {key: row.overflow for key, row in rows.items()}
    return scene, overflow


def caption_for(params: SolutionPlanningParams) -> str:
    return (
        "This schematic shows recommended placement of safety interventions including "
        f"{params.speed_cameras} speed camera(s), {params.stop_signs} stop sign(s), "
        f"{params.red_light_cameras} red-light camera(s), and {params.flex_bollards} "
        "flexible bollard(s) to enhance intersection safety and protect vulnerable users."
    )


def generate_solution_planning(params: SolutionPlanningParams, description: str) -> Visualization:
    scene, overflow = build_scene(params)
    return Visualization(
        type=VisualizationType.SOLUTION_PLANNING,
        content=to_svg(scene),
        description=description,
        caption=caption_for(params),
        scene=scene,
        overflow=overflow,
    )
