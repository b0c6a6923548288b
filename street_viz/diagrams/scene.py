"""Typed draw commands and their serialization to SVG.

Generators never interpolate values into markup. They append draw commands
(rectangles, lines, circles, text, polygons...) to a :class:`Scene`, and
:func:`to_svg` turns the finished scene into SVG through an autoescaping
Jinja2 template, so labels that come from request data are always escaped.

Usage:
    scene = Scene(width=500, height=200)
    scene.add(Rect(x=50, y=60, width=120, height=80, fill="#e5e7eb"))
    scene.add(Text(x=110, y=105, text="Sidewalk", font_size=12))
    svg = to_svg(scene)
"""

from __future__ import annotations

import pathlib
from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from functools import lru_cache
from typing import Any, ClassVar, TypeVar

from jinja2 import Environment, FileSystemLoader

from .layout import format_number

TEMPLATES_DIR = pathlib.Path(__file__).parent / "templates"

E = TypeVar("E", bound="Element")


def _attr(name: str, default: Any = None) -> Any:
    return field(default=default, metadata={"attr": name})


class Element:
    """Base for draw commands; subclasses are frozen dataclasses."""

    tag: ClassVar[str] = ""
    children: tuple[Element, ...] = ()
    text: str | None = None

    def attributes(self) -> list[tuple[str, str]]:
        """SVG attributes in declaration order, skipping unset values."""
        attrs = []
        for f in fields(self):  # type: ignore[arg-type]
            if f.name in ("children", "text"):
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            name = f.metadata.get("attr") or f.name.replace("_", "-")
            attrs.append((name, _format_value(value)))
        return attrs


def _format_value(value: Any) -> str:
    if isinstance(value, tuple):
        return " ".join(f"{format_number(x)},{format_number(y)}" for x, y in value)
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


@dataclass(frozen=True)
class Rect(Element):
    tag: ClassVar[str] = "rect"
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None
    rx: float | None = None
    opacity: float | None = None


@dataclass(frozen=True)
class Line(Element):
    tag: ClassVar[str] = "line"
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str | None = None
    stroke_width: float | None = None
    stroke_dasharray: str | None = None
    marker_start: str | None = None
    marker_end: str | None = None


@dataclass(frozen=True)
class Circle(Element):
    tag: ClassVar[str] = "circle"
    cx: float
    cy: float
    r: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass(frozen=True)
class Ellipse(Element):
    tag: ClassVar[str] = "ellipse"
    cx: float
    cy: float
    rx: float
    ry: float
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass(frozen=True)
class Text(Element):
    tag: ClassVar[str] = "text"
    x: float
    y: float
    text: str = ""
    text_anchor: str | None = "middle"
    font_size: float | None = None
    font_weight: str | None = None
    fill: str | None = None


@dataclass(frozen=True)
class Polygon(Element):
    tag: ClassVar[str] = "polygon"
    points: tuple[tuple[float, float], ...]
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None


@dataclass(frozen=True)
class Path(Element):
    tag: ClassVar[str] = "path"
    d: str
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None
    stroke_dasharray: str | None = None
    marker_end: str | None = None


@dataclass(frozen=True)
class Group(Element):
    tag: ClassVar[str] = "g"
    children: tuple[Element, ...] = ()
    transform: str | None = None
    opacity: float | None = None
    element_id: str | None = _attr("id")


@dataclass(frozen=True)
class Marker(Element):
    tag: ClassVar[str] = "marker"
    element_id: str = _attr("id", "")
    marker_width: float = _attr("markerWidth", 10)
    marker_height: float = _attr("markerHeight", 10)
    ref_x: float = _attr("refX", 0)
    ref_y: float = _attr("refY", 0)
    orient: str = "auto"
    children: tuple[Element, ...] = ()


@dataclass(frozen=True)
class Pattern(Element):
    tag: ClassVar[str] = "pattern"
    element_id: str = _attr("id", "")
    pattern_units: str = _attr("patternUnits", "userSpaceOnUse")
    width: float = 4
    height: float = 4
    children: tuple[Element, ...] = ()


@dataclass
class Scene:
    """Ordered draw commands on a ``width`` x ``height`` canvas."""

    width: float
    height: float
    defs: list[Element] = field(default_factory=list)
    elements: list[Element] = field(default_factory=list)

    def add(self, *elements: Element) -> Scene:
        self.elements.extend(elements)
        return self

    def define(self, *definitions: Element) -> Scene:
        self.defs.extend(definitions)
        return self

    def walk(self) -> Iterator[Element]:
        """Depth-first iteration over every drawn element (defs excluded)."""
        stack = list(reversed(self.elements))
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def find(self, kind: type[E]) -> list[E]:
        return [el for el in self.walk() if isinstance(el, kind)]

    def texts(self) -> list[str]:
        return [el.text for el in self.find(Text) if el.text is not None]


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=lambda name: name is not None and name.endswith(".svg.j2"),
    )


def to_svg(scene: Scene) -> str:
    template = _environment().get_template("scene.svg.j2")
    return template.render(
        width=format_number(scene.width),
        height=format_number(scene.height),
        defs=scene.defs,
        elements=scene.elements,
    )
