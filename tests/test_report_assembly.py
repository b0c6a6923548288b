"""Tests for analysis report assembly."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from street_viz.core.enums import VisualizationType
from street_viz.core.errors import InvalidParameter
from street_viz.report import AnalysisRequest, PlanEntry, ReportBuilder, load_plan, load_request

TIMESTAMP = datetime(2025, 3, 14, 9, 30, tzinfo=UTC)


def make_request(scenario: str = "Road diet on Main Street", task: str = "Evaluate traffic impacts"):
    return AnalysisRequest(
        city_context="Springfield, population 120,000",
        data="18,000 vehicles per day",
        scenario=scenario,
        task=task,
    )


def test_child_safety_detection() -> None:
    """Test which scenarios and tasks count as child safety."""
    assert make_request(scenario="Safe routes to School").is_child_safety
    assert make_request(scenario="Kid-friendly crossings").is_child_safety
    assert make_request(task="Assess pedestrian safety").is_child_safety
    assert not make_request().is_child_safety
    # the task alone does not trigger on school keywords
    assert not make_request(task="Review school bus timing").is_child_safety


def test_default_plan_for_child_safety_scenario() -> None:
    """Test that a child-safety request gets every default diagram and the indicator."""
    report = ReportBuilder().build(
        make_request(scenario="New school crossing"), report_id="r1", timestamp=TIMESTAMP
    )
    assert [v.type for v in report.visualizations] == [
        VisualizationType.CROSS_SECTION,
        VisualizationType.BEFORE_AFTER,
        VisualizationType.CONFLICT_POINTS,
        VisualizationType.BAR_CHART,
        VisualizationType.PEDESTRIAN_EXPOSURE,
        VisualizationType.QUEUE_LENGTH,
        VisualizationType.SOLUTION_PLANNING,
    ]
    assert [v.id for v in report.visualizations] == [f"r1-viz-{n}" for n in range(1, 8)]
    assert all(v.timestamp == TIMESTAMP for v in report.visualizations)
    assert report.kid_friendly is not None
    assert report.kid_friendly.safety_improvement_percentage == 36
    assert "reduced from 14 to 8 (-43%)" in report.kid_friendly.conflict_points_change
    assert "48-foot crossing" in report.kid_friendly.crossing_safety_improvement
    assert report.failures == []


def test_default_plan_without_child_safety_skips_exposure() -> None:
    """Test that other requests skip the pedestrian-exposure diagram."""
    report = ReportBuilder().build(make_request(), report_id="r2", timestamp=TIMESTAMP)
    types = [v.type for v in report.visualizations]
    assert VisualizationType.PEDESTRIAN_EXPOSURE not in types
    assert len(types) == 6
    assert [v.id for v in report.visualizations] == [f"r2-viz-{n}" for n in range(1, 7)]
    assert report.kid_friendly is None


def test_technical_impact_is_derived_from_diagram_data() -> None:
    """Test that technical impact rows come from the diagram data."""
    report = ReportBuilder().build(make_request(), report_id="r3", timestamp=TIMESTAMP)
    rows = {row.metric: row for row in report.technical_impact}

    assert rows["Average Speed"].value == "25 mph (reduced from 35 mph)"
    assert rows["Average Speed"].impact == "Moderate Positive"
    assert rows["Pedestrian Crossing Time"].value == "18 seconds (reduced from 28 seconds)"
    assert rows["Conflict Points"].value == "8 (reduced from 14)"
    assert rows["Conflict Points"].impact == "High Positive"
    assert rows["Peak Queue Length (5:00 PM)"].value == "6 vehicles (reduced from 12 vehicles)"


def test_narrative_sections() -> None:
    """Test summary, scenario impacts, options and recommendation text."""
    report = ReportBuilder().build(make_request(), report_id="r4", timestamp=TIMESTAMP)
    assert "Springfield, population 120,000" in report.summary
    assert "Road diet on Main Street" in report.summary
    assert set(report.scenario_impacts) == {
        "safety",
        "mobility",
        "transit",
        "walking",
        "cycling",
        "vulnerable_users",
    }
    assert "reduced from 35 mph to 25 mph (-29%)" in report.scenario_impacts["safety"]
    assert [o.name for o in report.options] == [
        "Minimal Intervention",
        "Comprehensive Redesign",
        "Phased Implementation",
    ]
    assert report.recommendation


def test_failing_plan_entry_is_recorded_and_skipped() -> None:
    """Test that a failing plan entry is recorded while the rest still render."""
    builder = ReportBuilder(
        [
            PlanEntry("pie-chart"),
            PlanEntry(VisualizationType.ASCII_DIAGRAM, "layout"),
            PlanEntry(VisualizationType.BAR_CHART, data={"categories": ["A"], "values": [1, 2]}),
        ]
    )
    report = builder.build(make_request(), report_id="r5", timestamp=TIMESTAMP)

    assert [v.id for v in report.visualizations] == ["r5-viz-1"]
    assert report.visualizations[0].type is VisualizationType.ASCII_DIAGRAM
    assert [tag for tag, _ in report.failures] == ["pie-chart", "bar-chart"]
    assert report.technical_impact == []


def test_request_from_mapping_accepts_camel_case() -> None:
    """Test that requests accept camelCase and snake_case keys."""
    request = AnalysisRequest.from_mapping(
        {"cityContext": " Springfield ", "data": "d", "scenario": "s", "task": "t"}
    )
    assert request.city_context == "Springfield"


def test_request_requires_every_field() -> None:
    """Test that a request missing a field raises InvalidParameter."""
    with pytest.raises(InvalidParameter, match="task"):
        AnalysisRequest.from_mapping({"city_context": "c", "data": "d", "scenario": "s"})


def test_load_request_and_plan(tmp_path: Path) -> None:
    """Test loading request and plan YAML files."""
    request_path = tmp_path / "request.yaml"
    request_path.write_text(
        "cityContext: Springfield\ndata: 18,000 vehicles per day\n"
        "scenario: Safe routes to school\ntask: Evaluate crossings\n"
    )
    plan_path = tmp_path / "plan.yaml"
    plan_path.write_text(
        "visualizations:\n"
        "  - type: queue-length\n"
        "    description: Queues\n"
        "    data:\n"
        "      beforeQueue: 14\n"
        "  - type: pedestrian-exposure\n"
        "    childSafetyOnly: true\n"
    )

    request = load_request(request_path)
    plan = load_plan(plan_path)
    assert plan[0] == PlanEntry("queue-length", "Queues", {"beforeQueue": 14}, False)
    assert plan[1].child_safety_only

    report = ReportBuilder(plan).build(request, report_id="r6", timestamp=TIMESTAMP)
    assert [v.type.value for v in report.visualizations] == ["queue-length", "pedestrian-exposure"]
    assert report.visualizations[0].visualization.overflow["before_queue"] == 4


def test_invalid_plan_files(tmp_path: Path) -> None:
    """Test that malformed plan files raise InvalidParameter."""
    path = tmp_path / "plan.yaml"
    path.write_text("visualizations: []\n")
    with pytest.raises(InvalidParameter, match="non-empty"):
        load_plan(path)

    path.write_text("visualizations:\n  - description: no type\n")
    with pytest.raises(InvalidParameter, match="type"):
        load_plan(path)

    path.write_text("visualizations: [unclosed\n")
    with pytest.raises(InvalidParameter, match="Invalid YAML"):
        load_plan(path)
