"""Fixed-width box-drawing street layout."""

from __future__ import annotations

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .params import AsciiDiagramParams

OUTER_WIDTH = 37
LANE_WIDTH = 31

CAPTION = (
    "This schematic diagram shows the basic street layout configuration with "
    "dedicated lanes for different transportation modes."
)


def _fit(label: str, width: int) -> str:
    label = " ".join(label.split())
    if len(label) > width - 2:
        label = label[: width - 3] + "…"
    return label.center(width)


def render_ascii(params: AsciiDiagramParams) -> str:
    blank = " " * OUTER_WIDTH
    lanes = [params.lane1, params.lane2, params.lane3]
    lines = [
        "┌" + "─" * OUTER_WIDTH + "┐",
        "│" + _fit(params.title, OUTER_WIDTH) + "│",
        "├" + "─" * OUTER_WIDTH + "┤",
        "│" + blank + "│",
        "│  ╔" + "═" * LANE_WIDTH + "╗  │",
    ]
    for i, lane in enumerate(lanes):
        if i:
            lines.append("│  ╠" + "═" * LANE_WIDTH + "╣  │")
        lines.append("│  ║" + _fit(lane, LANE_WIDTH) + "║  │")
    lines += [
        "│  ╚" + "═" * LANE_WIDTH + "╝  │",
        "│" + blank + "│",
        "└" + "─" * OUTER_WIDTH + "┘",
    ]
    return "\n".join(lines) + "\n"


def generate_ascii_diagram(params: AsciiDiagramParams, description: str) -> Visualization:
    return Visualization(
        type=VisualizationType.ASCII_DIAGRAM,
        content=render_ascii(params),
        description=description,
        caption=CAPTION,
    )
