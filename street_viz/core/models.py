from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .enums import VisualizationType

if TYPE_CHECKING:
    from ..diagrams.scene import Scene


@dataclass(frozen=True)
class VisualizationRequest:
    type: VisualizationType | str
    data: Mapping[str, Any] = field(default_factory=dict)
    description: str = ""


@dataclass(frozen=True)
class Visualization:
    """A rendered diagram plus its generated caption.

    ``content`` is monospace text for the ASCII variant and SVG markup for
    every other variant. ``scene`` keeps the draw commands the SVG was
    serialized from so callers can inspect geometry without parsing markup.
    ``overflow`` maps an icon row name to the number of icons that exceeded
    its display limit.
    """

    type: VisualizationType
    content: str
    description: str
    caption: str
    scene: Scene | None = field(default=None, compare=False, repr=False)
    overflow: Mapping[str, int] = field(default_factory=dict)

    @property
    def is_svg(self) -> bool:
        return self.scene is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "content": self.content,
            "description": self.description,
            "caption": self.caption,
            "overflow": dict(self.overflow),
        }
