"""Assembles an analysis report from a request and a diagram plan.

The builder renders every diagram in the plan, derives the technical impact
table and the kid-friendly indicator from the same diagram metrics, and
stamps each diagram with a report-scoped id and the report timestamp.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

from ..core.enums import VisualizationType
from ..core.errors import InvalidParameter, StreetVizError
from ..core.logging_config import get_logger
from ..core.models import Visualization
from ..diagrams.dispatcher import build_params, render_params
from ..diagrams.layout import format_number, percent_delta, round_half_up
from ..diagrams.params import (
    BeforeAfterParams,
    ConflictPointsParams,
    DiagramParams,
    PedestrianExposureParams,
    QueueLengthParams,
)
from . import narrative
from .narrative import DesignOption

logger = get_logger(__name__)

dataclass_kwargs = {"slots": True}

CHILD_SAFETY_SCENARIO_TERMS = ("school", "child", "kid")
CHILD_SAFETY_TASK_TERMS = ("pedestrian",)

REQUEST_FIELDS = {
    "city_context": "cityContext",
    "data": "data",
    "scenario": "scenario",
    "task": "task",
}


@dataclass(**dataclass_kwargs)
class AnalysisRequest:
    city_context: str
    data: str
    scenario: str
    task: str

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> AnalysisRequest:
        """Build a request from snake_case or camelCase keys."""
        values = {}
        for name, camel in REQUEST_FIELDS.items():
            value = mapping.get(name, mapping.get(camel))
            if value is None or not str(value).strip():
                raise InvalidParameter(f"Analysis request is missing '{name}'")
            values[name] = str(value).strip()
        return cls(**values)

    @property
    def is_child_safety(self) -> bool:
        scenario = self.scenario.lower()
        task = self.task.lower()
        return any(t in scenario for t in CHILD_SAFETY_SCENARIO_TERMS) or any(
            t in task for t in CHILD_SAFETY_TASK_TERMS
        )


@dataclass(**dataclass_kwargs)
class PlanEntry:
    """One diagram in a report plan."""

    type: VisualizationType | str
    description: str = ""
    data: Mapping[str, Any] = field(default_factory=dict)
    child_safety_only: bool = False


DEFAULT_PLAN: tuple[PlanEntry, ...] = (
    PlanEntry(
        VisualizationType.CROSS_SECTION,
        "Option B street cross-section with protected bike lanes",
        {"option": "B", "sidewalkWidth": 8, "bikeWidth": 6, "travelWidth": 11, "parkingWidth": 7},
    ),
    PlanEntry(
        VisualizationType.BEFORE_AFTER,
        "Speed and conflict point reduction",
        {"beforeSpeed": 35, "afterSpeed": 25, "beforeConflicts": 14, "afterConflicts": 8},
    ),
    PlanEntry(
        VisualizationType.CONFLICT_POINTS,
        "Intersection conflict point analysis",
        {"beforePoints": 14, "afterPoints": 8},
    ),
    PlanEntry(
        VisualizationType.BAR_CHART,
        "Safety improvement by user category",
        {
            "title": "Safety Impact by Category",
            "categories": ["Pedestrian", "Cyclist", "Vehicle", "Overall"],
            "values": [65, 58, 42, 55],
        },
    ),
    PlanEntry(
        VisualizationType.PEDESTRIAN_EXPOSURE,
        "Child pedestrian crossing exposure",
        {"beforeTime": 28, "afterTime": 18, "crossingWidth": 48},
        child_safety_only=True,
    ),
    PlanEntry(
        VisualizationType.QUEUE_LENGTH,
        "Peak hour vehicle queuing",
        {"beforeQueue": 12, "afterQueue": 6, "peakHour": "5:00 PM"},
    ),
    PlanEntry(
        VisualizationType.SOLUTION_PLANNING,
        "Recommended safety interventions",
        {"speedCameras": 2, "stopSigns": 3, "redLightCameras": 1, "flexBollards": 4},
    ),
)


@dataclass(**dataclass_kwargs)
class ReportVisualization:
    id: str
    timestamp: datetime
    visualization: Visualization

    @property
    def type(self) -> VisualizationType:
        return self.visualization.type

    @property
    def caption(self) -> str:
        return self.visualization.caption

    @property
    def description(self) -> str:
        return self.visualization.description


@dataclass(**dataclass_kwargs)
class ImpactRow:
    metric: str
    value: str
    impact: str


@dataclass(**dataclass_kwargs)
class KidFriendlyIndicator:
    safety_improvement_percentage: int
    conflict_points_change: str
    speed_reduction_impact: str
    crossing_safety_improvement: str
    family_focused_design: str = narrative.FAMILY_FOCUSED_DESIGN


@dataclass(**dataclass_kwargs)
class AnalysisReport:
    id: str
    request: AnalysisRequest
    timestamp: datetime
    summary: str
    technical_impact: list[ImpactRow]
    scenario_impacts: dict[str, str]
    options: list[DesignOption]
    recommendation: str
    visualizations: list[ReportVisualization]
    kid_friendly: KidFriendlyIndicator | None = None
    failures: list[tuple[str, str]] = field(default_factory=list)


def impact_label(pct: int) -> str:
    if pct >= 30:
        return "High Positive"
    if pct >= 10:
        return "Moderate Positive"
    if pct > 0:
        return "Slight Positive"
    if pct == 0:
        return "Neutral"
    return "Negative"


def _trend(before: float, after: float, unit: str = "") -> str:
    suffix = f" {unit}" if unit else ""
    if after < before:
        return f"reduced from {format_number(before)}{suffix}"
    if after > before:
        return f"increased from {format_number(before)}{suffix}"
    return "unchanged"


def _change_phrase(before: float, after: float, unit: str = "") -> str:
    suffix = f" {unit}" if unit else ""
    pct = abs(percent_delta(before, after))
    b, a = format_number(before), format_number(after)
    if after < before:
        return f"reduced from {b}{suffix} to {a}{suffix} (-{pct}%)"
    if after > before:
        return f"increased from {b}{suffix} to {a}{suffix} (+{pct}%)"
    return f"unchanged at {a}{suffix}"


def _first(params: list[DiagramParams], kind: type) -> Any:
    return next((p for p in params if isinstance(p, kind)), None)


def _conflict_pair(params: list[DiagramParams]) -> tuple[int, int] | None:
    """Before/after conflict counts, preferring the conflict-points diagram."""
    conflicts = _first(params, ConflictPointsParams)
    if conflicts is not None:
        return conflicts.before_points, conflicts.after_points
    before_after = _first(params, BeforeAfterParams)
    if before_after is not None:
        return before_after.before_conflicts, before_after.after_conflicts
    return None


def load_request(path: Path) -> AnalysisRequest:
    """Read an analysis request from a YAML file."""
    mapping = _load_yaml_mapping(path, "request")
    return AnalysisRequest.from_mapping(mapping)


def load_plan(path: Path) -> list[PlanEntry]:
    """Read a diagram plan from a YAML file.

    The file holds a ``visualizations`` list; each item has a ``type`` and
    optional ``description``, ``data`` and ``childSafetyOnly`` keys.
    """
    mapping = _load_yaml_mapping(path, "plan")
    items = mapping.get("visualizations")
    if not isinstance(items, list) or not items:
        raise InvalidParameter(f"Plan file {path} must contain a non-empty 'visualizations' list")

    entries = []
    for index, item in enumerate(items, start=1):
        if not isinstance(item, Mapping) or "type" not in item:
            raise InvalidParameter(f"Plan entry {index} in {path} must be a mapping with a 'type'")
        data = item.get("data") or {}
        if not isinstance(data, Mapping):
            raise InvalidParameter(f"Plan entry {index} in {path} has non-mapping 'data'")
        entries.append(
            PlanEntry(
                type=str(item["type"]),
                description=str(item.get("description") or ""),
                data=data,
                child_safety_only=bool(
                    item.get("childSafetyOnly", item.get("child_safety_only", False))
                ),
            )
        )
    return entries


def _load_yaml_mapping(path: Path, what: str) -> Mapping[str, Any]:
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidParameter(f"Cannot read {what} file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise InvalidParameter(f"Invalid YAML in {what} file {path}: {e}") from e
    if not isinstance(content, Mapping):
        raise InvalidParameter(f"{what.capitalize()} file {path} must contain a mapping")
    return content


class ReportBuilder:
    """Builds :class:`AnalysisReport` aggregates from a diagram plan."""

    def __init__(self, plan: list[PlanEntry] | tuple[PlanEntry, ...] | None = None):
        self.plan = tuple(plan) if plan is not None else DEFAULT_PLAN

    def build(
        self,
        request: AnalysisRequest,
        report_id: str,
        timestamp: datetime | None = None,
    ) -> AnalysisReport:
        """Render the plan and assemble the report.

        A plan entry that fails to build is recorded in ``failures`` and
        skipped; the remaining diagrams are still rendered.
        """
        timestamp = timestamp or datetime.now(UTC)
        child_safety = request.is_child_safety

        params: list[DiagramParams] = []
        visualizations: list[ReportVisualization] = []
        failures: list[tuple[str, str]] = []

        for entry in self.plan:
            tag = entry.type.value if isinstance(entry.type, VisualizationType) else str(entry.type)
            try:
                record = build_params(entry.type, entry.data)
                params.append(record)
                if entry.child_safety_only and not child_safety:
                    continue
                visualization = render_params(record, entry.description)
            except StreetVizError as e:
                failures.append((tag, str(e)))
                logger.warning(
                    f"Failed to generate {tag} diagram: {e}",
                    extra={"report_id": report_id, "type": tag},
                )
                continue
            visualizations.append(
                ReportVisualization(
                    id=f"{report_id}-viz-{len(visualizations) + 1}",
                    timestamp=timestamp,
                    visualization=visualization,
                )
            )

        report = AnalysisReport(
            id=report_id,
            request=request,
            timestamp=timestamp,
            summary=narrative.summary_text(
                request.city_context, request.scenario, request.task, request.data
            ),
            technical_impact=self.technical_impact(params),
            scenario_impacts=self._scenario_impacts(params),
            options=list(narrative.DESIGN_OPTIONS),
            recommendation=narrative.RECOMMENDATION,
            visualizations=visualizations,
            kid_friendly=self.kid_friendly(params) if child_safety else None,
            failures=failures,
        )

        logger.info(
            "Assembled analysis report",
            extra={
                "report_id": report_id,
                "visualizations": len(visualizations),
                "failures": len(failures),
                "child_safety": child_safety,
            },
        )
        return report

    @staticmethod
    def technical_impact(params: list[DiagramParams]) -> list[ImpactRow]:
        """Metric rows derived from the plan's before/after diagram data."""
        rows = []

        before_after = _first(params, BeforeAfterParams)
        if before_after is not None:
            b, a = before_after.before_speed, before_after.after_speed
            rows.append(
                ImpactRow(
                    "Average Speed",
                    f"{format_number(a)} mph ({_trend(b, a, 'mph')})",
                    impact_label(percent_delta(b, a)),
                )
            )

        exposure = _first(params, PedestrianExposureParams)
        if exposure is not None:
            b, a = exposure.before_time, exposure.after_time
            rows.append(
                ImpactRow(
                    "Pedestrian Crossing Time",
                    f"{format_number(a)} seconds ({_trend(b, a, 'seconds')})",
                    impact_label(percent_delta(b, a)),
                )
            )

        pair = _conflict_pair(params)
        if pair is not None:
            b, a = pair
            rows.append(
                ImpactRow(
                    "Conflict Points",
                    f"{format_number(a)} ({_trend(b, a)})",
                    impact_label(percent_delta(b, a)),
                )
            )

        queue = _first(params, QueueLengthParams)
        if queue is not None:
            b, a = queue.before_queue, queue.after_queue
            rows.append(
                ImpactRow(
                    f"Peak Queue Length ({queue.peak_hour})",
                    f"{format_number(a)} vehicles ({_trend(b, a, 'vehicles')})",
                    impact_label(percent_delta(b, a)),
                )
            )
        return rows

    @staticmethod
    def kid_friendly(params: list[DiagramParams]) -> KidFriendlyIndicator:
        deltas = []
        conflict_text = "No conflict point data in the diagram plan."
        speed_text = "No speed data in the diagram plan."
        crossing_text = "No crossing time data in the diagram plan."

        pair = _conflict_pair(params)
        if pair is not None:
            b, a = pair
            deltas.append(percent_delta(b, a))
            conflict_text = (
                f"Conflict points {_change_phrase(b, a)}, leaving fewer places where "
                "children must navigate turning traffic."
            )

        before_after = _first(params, BeforeAfterParams)
        if before_after is not None:
            b, a = before_after.before_speed, before_after.after_speed
            deltas.append(percent_delta(b, a))
            speed_text = (
                f"Vehicle speeds {_change_phrase(b, a, 'mph')}. Lower speeds give drivers "
                "more time to react to children near the roadway."
            )

        exposure = _first(params, PedestrianExposureParams)
        if exposure is not None:
            b, a = exposure.before_time, exposure.after_time
            deltas.append(percent_delta(b, a))
            crossing_text = (
                f"Crossing time {_change_phrase(b, a, 'seconds')} across the "
                f"{format_number(exposure.crossing_width)}-foot crossing."
            )

        score = round_half_up(sum(deltas) / len(deltas)) if deltas else 0
        return KidFriendlyIndicator(
            safety_improvement_percentage=score,
            conflict_points_change=conflict_text,
            speed_reduction_impact=speed_text,
            crossing_safety_improvement=crossing_text,
        )

    @staticmethod
    def _scenario_impacts(params: list[DiagramParams]) -> dict[str, str]:
        before_after = _first(params, BeforeAfterParams)
        pair = _conflict_pair(params)
        speed_change = "expected to change with the proposed design"
        conflict_change = "expected to change with the proposed design"
        if before_after is not None:
            speed_change = _change_phrase(
                before_after.before_speed, before_after.after_speed, "mph"
            )
        if pair is not None:
            conflict_change = _change_phrase(*pair)
        return narrative.scenario_impacts(conflict_change, speed_change)
