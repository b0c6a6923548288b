"""Peak-hour queue length with derived congestion metrics."""

from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import VisualizationType
from ..core.models import Visualization
from .layout import (
    NEGATIVE,
    VEHICLE_DISPLAY_LIMIT,
    IconRow,
    Palette,
    cap_icons,
    delta_badge,
    format_number,
    palette_for,
    percent_delta,
    round_half_up,
)
from .params import QueueLengthParams
from .scene import Element, Rect, Scene, Text, to_svg
from .shapes import FAINT, SUBTLE, badge, period_heading, title, vehicle

dataclass_kwargs = {"slots": True, "frozen": True}


@dataclass(**dataclass_kwargs)
class QueueMetrics:
    wait_seconds: int
    clearance_seconds: int
    throughput_per_min: int | None


def derive_queue_metrics(queue: int) -> QueueMetrics:
    """Fixed-formula congestion metrics derived from a queue length alone.

    wait = queue x 2 s, clearance = queue x 1.5 s, throughput = 600 / queue
    vehicles per minute. An empty queue has no defined throughput.
    """
    return QueueMetrics(
        wait_seconds=queue * 2,
        clearance_seconds=round_half_up(queue * 1.5),
        throughput_per_min=round_half_up(600 / queue) if queue > 0 else None,
    )


def _throughput(value: int | None) -> str:
    return "n/a" if value is None else f"{value}/min"


def _queue_panel(x: float, label: str, row: IconRow, palette: Palette) -> list[Element]:
    cx = x + 100
    elements: list[Element] = [
        period_heading(cx, 55, label, palette),
        Rect(x=x, y=70, width=200, height=80, fill=palette.fill, stroke=palette.stroke, stroke_width=2, rx=4),
    ]
    for i in range(row.shown):
        elements += vehicle(x + 10 + i * 18, 85, palette)
    if row.overflow:
        elements.append(
            Text(x=x + 190, y=100, text=f"+{row.overflow}", text_anchor="end", font_size=10, fill=palette.stroke)
        )
    elements += [
        Text(x=cx, y=135, text=str(row.count), font_size=24, font_weight="bold", fill=palette.stroke),
        Text(x=cx, y=150, text="vehicles in queue", font_size=10, fill=palette.muted),
    ]
    return elements


def _metric_column(x: float, label: str, before: str, after: str, after_palette: Palette) -> list[Element]:
    return [
        Text(x=x, y=225, text=label, font_size=10, fill=SUBTLE),
        Text(x=x, y=245, text=before, font_size=16, font_weight="bold", fill=NEGATIVE.stroke),
        Text(x=x, y=255, text="→", font_size=8, fill=FAINT),
        Text(x=x, y=265, text=after, font_size=16, font_weight="bold", fill=after_palette.stroke),
    ]


def build_scene(params: QueueLengthParams) -> tuple[Scene, dict[str, int]]:
    after_palette = palette_for(params.before_queue, params.after_queue)
    pct = percent_delta(params.before_queue, params.after_queue)
    before_row = cap_icons(params.before_queue, VEHICLE_DISPLAY_LIMIT)
    after_row = cap_icons(params.after_queue, VEHICLE_DISPLAY_LIMIT)
    before = derive_queue_metrics(before_row.count)
    after = derive_queue_metrics(after_row.count)

    scene = Scene(width=500, height=280)
    scene.add(title(f"Queue Length Analysis - Peak Hour ({params.peak_hour})", 250))
    scene.add(*_queue_panel(25, "BEFORE", before_row, NEGATIVE))
    scene.add(*_queue_panel(275, "AFTER", after_row, after_palette))
    scene.add(*badge(445, 135, 22, delta_badge(pct), after_palette.stroke))

    scene.add(
        Rect(x=50, y=180, width=400, height=80, fill="#f9fafb", stroke="#d1d5db", stroke_width=1, rx=4),
        Text(x=250, y=200, text="Congestion Impact Metrics", font_size=12, font_weight="bold", fill="#374151"),
    )
    scene.add(
        *_metric_column(100, "Avg Wait Time", f"{before.wait_seconds}s", f"{after.wait_seconds}s", after_palette)
    )
    scene.add(
        *_metric_column(
            250, "Queue Clearance", f"{before.clearance_seconds}s", f"{after.clearance_seconds}s", after_palette
        )
    )
    scene.add(
        *_metric_column(
            400,
            "Throughput",
            _throughput(before.throughput_per_min),
            _throughput(after.throughput_per_min),
            after_palette,
        )
    )
    overflow = {"before_queue": before_row.overflow, "after_queue": after_row.overflow}
    return scene, overflow


def caption_for(params: QueueLengthParams) -> str:
    pct = percent_delta(params.before_queue, params.after_queue)
    if params.after_queue < params.before_queue:
        return (
            "Improved signal timing and lane configuration reduce vehicle queuing by "
            f"{pct}% during the {params.peak_hour} peak hour, decreasing congestion and "
            "emissions while maintaining traffic flow efficiency."
        )
    return (
        f"Vehicle queuing during the {params.peak_hour} peak hour changes from "
        f"{format_number(params.before_queue)} to {format_number(params.after_queue)} "
        f"vehicles ({delta_badge(pct)}), so the proposed configuration does not relieve "
        "congestion."
    )


def generate_queue_length(params: QueueLengthParams, description: str) -> Visualization:
    scene, overflow = build_scene(params)
    return Visualization(
        type=VisualizationType.QUEUE_LENGTH,
        content=to_svg(scene),
        description=description,
        caption=caption_for(params),
        scene=scene,
        overflow=overflow,
    )
