"""Tests for the box-drawing street layout."""

from __future__ import annotations

from street_viz.diagrams.ascii_diagram import CAPTION, OUTER_WIDTH, generate_ascii_diagram, render_ascii
from street_viz.diagrams.params import AsciiDiagramParams


def test_default_layout_shape() -> None:
    """Test that the default diagram is a fixed-width box with title and three lanes."""
    text = render_ascii(AsciiDiagramParams())
    lines = text.splitlines()

    assert text.endswith("\n")
    assert len(lines) == 13
    assert all(len(line) == OUTER_WIDTH + 2 for line in lines)
    assert lines[0].startswith("┌") and lines[0].endswith("┐")
    assert lines[-1].startswith("└") and lines[-1].endswith("┘")
    assert lines[1] == "│" + "Street Layout".center(OUTER_WIDTH) + "│"


def test_lane_labels_in_order() -> None:
    """Test that lane labels appear top to bottom in declaration order."""
    text = render_ascii(AsciiDiagramParams(lane1="Bus Lane", lane2="Bike Lane", lane3="Sidewalk"))
    assert text.index("Bus Lane") < text.index("Bike Lane") < text.index("Sidewalk")


def test_long_labels_are_truncated_without_breaking_the_box() -> None:
    """Test that long labels are truncated so every row keeps the box width."""
    text = render_ascii(AsciiDiagramParams(lane1="Shared Transit And Delivery Loading Lane Zone"))
    lines = text.splitlines()
    assert all(len(line) == OUTER_WIDTH + 2 for line in lines)
    assert "…" in text


def test_generator_returns_text_with_fixed_caption() -> None:
    """Test that the ASCII generator returns plain text with the fixed caption."""
    viz = generate_ascii_diagram(AsciiDiagramParams(title="Elm Street"), "layout")
    assert viz.caption == CAPTION
    assert viz.scene is None
    assert "Elm Street" in viz.content
    assert viz.description == "layout"
