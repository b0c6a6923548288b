"""Tests for the SVG diagram generators."""

from __future__ import annotations

import pytest

from street_viz.core.errors import ArrayLengthMismatch, InvalidParameter
from street_viz.core.models import VisualizationRequest
from street_viz.diagrams import generate_visualization
from street_viz.diagrams.bar_chart import CAPTION as BAR_CAPTION
from street_viz.diagrams.conflict_points import ring_positions
from street_viz.diagrams.layout import BAR_NON_POSITIVE, BAR_POSITIVE, NEGATIVE, POSITIVE
from street_viz.diagrams.queue_length import derive_queue_metrics
from street_viz.diagrams.scene import Circle, Group, Rect
from street_viz.diagrams.solution_planning import legend_rows
from street_viz.diagrams.params import SolutionPlanningParams


def render(tag: str, **data):
    return generate_visualization(VisualizationRequest(type=tag, data=data))


# cross-section


def test_cross_section_defaults() -> None:
    """Test cross-section labels, total and caption with default widths."""
    viz = render("cross-section")
    texts = viz.scene.texts()
    for label in ("Sidewalk", "Bike Lane", "Travel Lane", "Parking", "6'", "5'", "11'", "8'"):
        assert label in texts
    assert "Option A Cross-Section" in texts
    assert "Total: 30 feet" in texts
    assert "30-foot street design" in viz.caption


def test_cross_section_bands_fill_the_width_budget() -> None:
    """Test that the four bands share the 400-unit budget proportionally."""
    viz = render("cross-section", sidewalkWidth=8, bikeWidth=6, travelWidth=11, parkingWidth=7)
    bands = [r for r in viz.scene.find(Rect) if r.y == 60 and r.height == 80 and r.stroke_width == 2]
    assert len(bands) == 4
    assert bands[0].x == 50
    assert sum(b.width for b in bands) == pytest.approx(400)
    assert bands[0].width == pytest.approx(400 * 8 / 32)


def test_cross_section_total_and_caption_follow_widths() -> None:
    """Test that 8/6/11/7 foot bands produce a 32-foot total and caption."""
    viz = render("cross-section", sidewalkWidth=8, bikeWidth=6, travelWidth=11, parkingWidth=7)
    assert "Total: 32 feet" in viz.scene.texts()
    assert "32-foot street design" in viz.caption


def test_cross_section_fractional_widths() -> None:
    """Test that fractional widths are labelled without trailing zeros."""
    viz = render("cross-section", sidewalkWidth=7.5)
    assert "7.5'" in viz.scene.texts()


def test_cross_section_rejects_non_positive_widths() -> None:
    """Test that a zero or negative band width is rejected before drawing."""
    with pytest.raises(InvalidParameter, match="bikeWidth"):
        render("cross-section", bikeWidth=-2)
    with pytest.raises(InvalidParameter, match="parkingWidth"):
        render("cross-section", parkingWidth=0)


# before-after


def test_before_after_default_caption_and_badges() -> None:
    """Test before-after badges and caption with default data."""
    viz = render("before-after")
    assert "vehicle speeds reduced by 29%" in viz.caption
    assert "conflict points decreased by 43%" in viz.caption
    texts = viz.scene.texts()
    assert "-29%" in texts
    assert "-43%" in texts
    for value in ("35", "25", "14", "8"):
        assert value in texts


def test_before_after_increase_is_flagged() -> None:
    """Test that a speed increase uses the negative palette and caption wording."""
    viz = render("before-after", afterSpeed=42)
    assert "+20%" in viz.scene.texts()
    assert "increased by 20%" in viz.caption
    after_speed_panel = next(r for r in viz.scene.find(Rect) if r.x == 350 and r.y == 70)
    assert after_speed_panel.stroke == NEGATIVE.stroke


def test_before_after_improvement_uses_positive_palette() -> None:
    """Test that an improvement uses the positive palette."""
    viz = render("before-after")
    after_speed_panel = next(r for r in viz.scene.find(Rect) if r.x == 350 and r.y == 70)
    assert after_speed_panel.stroke == POSITIVE.stroke


# bar-chart


def test_bar_chart_signed_bars() -> None:
    """Test that positive bars rise and negative bars hang below the baseline."""
    viz = render("bar-chart", categories=["A", "B"], values=[50, -25])
    bars = viz.scene.find(Rect)
    assert len(bars) == 2

    positive, negative = bars
    assert (positive.x, positive.y, positive.height, positive.fill) == (80, 50, 200, BAR_POSITIVE)
    assert (negative.x, negative.y, negative.height, negative.fill) == (180, 250, 100, BAR_NON_POSITIVE)
    assert viz.scene.height == 400
    assert viz.scene.width == 330

    texts = viz.scene.texts()
    assert "+50%" in texts
    assert "-25%" in texts
    assert {"50%", "25%", "0%"} <= set(texts)
    assert viz.caption == BAR_CAPTION


def test_bar_chart_axis_midpoint_rounds_half_up() -> None:
    """Test that the axis midpoint label rounds half up."""
    viz = render("bar-chart", categories=["P", "C", "V", "O"], values=[65, 58, 42, 55])
    assert "33%" in viz.scene.texts()
    assert "65%" in viz.scene.texts()


def test_bar_chart_empty_series() -> None:
    """Test that an empty series draws no bars."""
    viz = render("bar-chart")
    assert viz.scene.find(Rect) == []
    assert viz.caption == BAR_CAPTION


def test_bar_chart_zero_values() -> None:
    """Test that a zero value draws a zero-height non-positive bar."""
    viz = render("bar-chart", categories=["A"], values=[0])
    (bar,) = viz.scene.find(Rect)
    assert bar.height == 0
    assert bar.fill == BAR_NON_POSITIVE
    assert "0%" in viz.scene.texts()


def test_bar_chart_length_mismatch() -> None:
    """Test that mismatched lists raise ArrayLengthMismatch."""
    with pytest.raises(ArrayLengthMismatch):
        render("bar-chart", categories=["A", "B", "C"], values=[1, 2])


def test_bar_chart_labels_are_escaped() -> None:
    """Test that category labels are escaped in the SVG."""
    viz = render("bar-chart", categories=["<script>alert(1)</script>"], values=[10])
    assert "<script>" not in viz.content
    assert "&lt;script&gt;" in viz.content


# pedestrian-exposure


def test_pedestrian_exposure_defaults() -> None:
    """Test pedestrian-exposure labels and caption with default data."""
    viz = render("pedestrian-exposure")
    texts = viz.scene.texts()
    assert {"28s", "18s", "-36%", "Crossing width: 48 feet"} <= set(texts)
    assert "from 28 to 18 seconds across the 48-foot crossing" in viz.caption


def test_pedestrian_exposure_increase() -> None:
    """Test pedestrian-exposure badge and caption for a longer crossing."""
    viz = render("pedestrian-exposure", afterTime=35)
    assert "+25%" in viz.scene.texts()
    assert "no less time" in viz.caption


# conflict-points


def test_ring_positions_are_evenly_spaced() -> None:
    """Test that conflict points are spaced evenly around the ring."""
    points = ring_positions(4, 0, 0, radius=10)
    expected = [(10, 0), (0, 10), (-10, 0), (0, -10)]
    for (x, y), (ex, ey) in zip(points, expected):
        assert x == pytest.approx(ex, abs=1e-9)
        assert y == pytest.approx(ey, abs=1e-9)
    assert ring_positions(0, 0, 0) == []


def test_conflict_points_draws_one_marker_per_point() -> None:
    """Test that one marker is drawn per conflict point."""
    viz = render("conflict-points")
    markers = [c for c in viz.scene.find(Circle) if c.r == 4 and c.stroke_width == 1]
    assert len(markers) == 22
    assert "-43%" in viz.scene.texts()
    assert "from 14 to 8" in viz.caption


def test_conflict_points_eliminated() -> None:
    """Test that eliminating every conflict shows a -100% badge."""
    viz = render("conflict-points", afterPoints=0)
    markers = [c for c in viz.scene.find(Circle) if c.r == 4 and c.stroke_width == 1]
    assert len(markers) == 14
    assert "-100%" in viz.scene.texts()


def test_conflict_points_increase_caption() -> None:
    """Test the caption when conflict points increase."""
    viz = render("conflict-points", beforePoints=8, afterPoints=14)
    assert "not reduced" in viz.caption
    assert "+75%" in viz.scene.texts()


# queue-length


def test_queue_metrics_formulas() -> None:
    """Test wait, clearance and throughput derived from the queue."""
    metrics = derive_queue_metrics(5)
    assert (metrics.wait_seconds, metrics.clearance_seconds, metrics.throughput_per_min) == (10, 8, 120)
    assert derive_queue_metrics(0).throughput_per_min is None


def test_queue_length_defaults() -> None:
    """Test queue-length labels, metrics and caption with default data."""
    viz = render("queue-length")
    texts = viz.scene.texts()
    assert {"12", "6", "-50%", "24s", "12s", "18s", "9s", "50/min", "100/min"} <= set(texts)
    assert "Queue Length Analysis - Peak Hour (5:00 PM)" in texts
    assert viz.overflow == {"before_queue": 0, "after_queue": 0}
    assert "reduce vehicle queuing by 50% during the 5:00 PM peak hour" in viz.caption


def test_queue_length_caps_vehicle_icons() -> None:
    """Test that vehicle icons are capped at 10 with the overflow reported."""
    viz = render("queue-length", beforeQueue=14)
    bodies = [r for r in viz.scene.find(Rect) if r.width == 15 and r.height == 25]
    assert len(bodies) == 10 + 6
    assert viz.overflow["before_queue"] == 4
    assert viz.overflow["after_queue"] == 0
    assert "+4" in viz.scene.texts()
    assert "14" in viz.scene.texts()


def test_queue_length_empty_queue_has_no_throughput() -> None:
    """Test that an empty queue shows n/a throughput."""
    viz = render("queue-length", afterQueue=0)
    assert "n/a" in viz.scene.texts()
    assert "-100%" in viz.scene.texts()


def test_queue_length_rejects_negative_queue() -> None:
    """Test that a negative queue is rejected instead of drawn as an empty panel."""
    with pytest.raises(InvalidParameter, match="beforeQueue"):
        render("queue-length", beforeQueue=-3)


# solution-planning


def test_solution_planning_defaults() -> None:
    """Test solution-planning legend, escaping and caption with default counts."""
    viz = render("solution-planning")
    texts = viz.scene.texts()
    for row in ("Speed Camera (2)", "Stop Sign (3)", "Red Light Camera (1)", "Flex Bollard (4)"):
        assert row in texts
    assert "Main St & 5th Ave" in texts
    assert "Main St &amp; 5th Ave" in viz.content
    assert viz.overflow == {
        "speed_cameras": 0,
        "stop_signs": 0,
        "red_light_cameras": 0,
        "flex_bollards": 0,
    }
    assert (
        "2 speed camera(s), 3 stop sign(s), 1 red-light camera(s), and 4 flexible bollard(s)"
        in viz.caption
    )


def test_solution_planning_caps_icons_per_category() -> None:
    """Test that icons are capped per category with the overflow reported."""
    viz = render("solution-planning", speedCameras=5)
    group = next(g for g in viz.scene.find(Group) if g.element_id == "speed-cameras")
    cameras = [el for el in group.children if isinstance(el, Circle) and el.r == 12]
    assert len(cameras) == 2
    assert viz.overflow["speed_cameras"] == 3


def test_solution_planning_zero_count_keeps_legend_row() -> None:
    """Test that a zero stop-sign count draws no icon but keeps its legend row."""
    viz = render("solution-planning", stopSigns=0)
    ids = {g.element_id for g in viz.scene.find(Group)}
    assert "stop-signs" not in ids
    assert "Stop Sign (0)" in viz.scene.texts()
    rows = legend_rows(SolutionPlanningParams(stop_signs=0))
    assert [count for _, count in rows] == [2, 0, 1, 4]


def test_solution_planning_zero_red_light_cameras() -> None:
    """Test that zero red-light cameras draw no icon but keep the legend row."""
    viz = render("solution-planning", redLightCameras=0)
    ids = {g.element_id for g in viz.scene.find(Group)}
    assert "red-light-cameras" not in ids
    assert "Red Light Camera (0)" in viz.scene.texts()
    assert viz.overflow["red_light_cameras"] == 0
    assert "0 red-light camera(s)" in viz.caption
