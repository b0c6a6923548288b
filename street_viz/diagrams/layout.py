"""Shared layout, scale and colour helpers for the diagram generators."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.logging_config import get_logger

logger = get_logger(__name__)


dataclass_kwargs = {"slots": True, "frozen": True}

# Icon display limits per count-driven row
VEHICLE_DISPLAY_LIMIT = 10
FLEX_BOLLARD_DISPLAY_LIMIT = 4
SPEED_CAMERA_DISPLAY_LIMIT = 2
STOP_SIGN_DISPLAY_LIMIT = 3
RED_LIGHT_CAMERA_DISPLAY_LIMIT = 1


@dataclass(**dataclass_kwargs)
class Span:
    offset: float
    width: float

    @property
    def center(self) -> float:
        return self.offset + self.width / 2

    @property
    def end(self) -> float:
        return self.offset + self.width


@dataclass(**dataclass_kwargs)
class IconRow:
    """Icons drawn for a count, limited to ``display_limit``.

    ``overflow`` is the part of ``count`` that was not drawn and must be
    annotated instead.
    """

    count: int
    display_limit: int
    shown: int
    overflow: int


@dataclass(**dataclass_kwargs)
class Palette:
    fill: str
    stroke: str
    accent: str
    text: str
    muted: str


POSITIVE = Palette(
    fill="#dcfce7", stroke="#16a34a", accent="#86efac", text="#14532d", muted="#166534"
)
NEGATIVE = Palette(
    fill="#fee2e2", stroke="#dc2626", accent="#fca5a5", text="#7f1d1d", muted="#991b1b"
)

BAR_POSITIVE = "#10b981"
BAR_NON_POSITIVE = "#ef4444"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def percent_delta(before: float, after: float) -> int:
    """Percentage reduction from ``before`` to ``after``.

    Positive results are reductions, negative results are increases. A zero
    baseline has no meaningful percentage and yields 0.
    """
    if before == 0:
        logger.debug(
            "Zero baseline in percent delta", extra={"before": before, "after": after}
        )
        return 0
    return round_half_up((before - after) / before * 100)


def delta_badge(pct: int) -> str:
    """Badge text for a reduction percentage: -29%, +20% or 0%."""
    if pct > 0:
        return f"-{pct}%"
    if pct < 0:
        return f"+{-pct}%"
    return "0%"


def is_favorable(before: float, after: float) -> bool:
    return after < before


def palette_for(before: float, after: float) -> Palette:
    return POSITIVE if is_favorable(before, after) else NEGATIVE


def bar_color(value: float) -> str:
    return BAR_POSITIVE if value > 0 else BAR_NON_POSITIVE


def proportional_spans(
    magnitudes: Sequence[float], budget: float, origin: float = 0.0
) -> list[Span]:
    """Scale magnitudes to fill ``budget`` and stack them from ``origin``."""
    total = sum(magnitudes)
    scale = budget / total if total else 0.0
    spans = []
    offset = origin
    for magnitude in magnitudes:
        width = magnitude * scale
        spans.append(Span(offset=offset, width=width))
        offset += width
    return spans


def cap_icons(count: int, display_limit: int) -> IconRow:
    count = max(0, int(count))
    shown = min(count, display_limit)
    return IconRow(
        count=count,
        display_limit=display_limit,
        shown=shown,
        overflow=count - shown,
    )


def format_number(value: float, places: int = 2) -> str:
    """Render a number without float noise: 8, 5.5, 33.33."""
    if isinstance(value, bool):
        value = int(value)
    rounded = round(float(value), places)
    if rounded == 0:
        return "0"
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{places}f}".rstrip("0").rstrip(".")
