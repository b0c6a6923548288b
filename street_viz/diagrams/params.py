"""Parameter records for the eight diagram variants.

Every field declares the camelCase key it is read from, its unit and its
default in field metadata, so the defaults are discoverable through
:func:`describe_fields` without reading any generator. Records are built from
request data with ``from_data``; absent keys take the default, which is never
an error.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Union

from ..core.enums import VisualizationType
from ..core.errors import ArrayLengthMismatch, InvalidParameter


dataclass_kwargs = {"slots": True, "frozen": True}


def param(
    key: str,
    default: Any,
    unit: str = "",
    kind: str = "number",
    blank_is_unset: bool = False,
) -> Any:
    return field(
        default=default,
        metadata={
            "key": key,
            "unit": unit,
            "kind": kind,
            "blank_is_unset": blank_is_unset,
        },
    )


def _to_number(key: str, value: Any) -> int | float:
    if isinstance(value, bool):
        raise InvalidParameter(f"{key} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            text = str(value).strip()
            number = int(text) if text.lstrip("+-").isdigit() else float(text)
        except ValueError as e:
            raise InvalidParameter(f"{key} must be a number, got {value!r}") from e
    if isinstance(number, float) and not math.isfinite(number):
        raise InvalidParameter(f"{key} must be a finite number, got {value!r}")
    return number


def _to_count(key: str, value: Any) -> int:
    number = _to_number(key, value)
    if isinstance(number, float):
        if not number.is_integer():
            raise InvalidParameter(f"{key} must be a whole count, got {value!r}")
        number = int(number)
    if number < 0:
        raise InvalidParameter(f"{key} cannot be negative, got {value!r}")
    return number


def _to_width(key: str, value: Any) -> int | float:
    number = _to_number(key, value)
    if number <= 0:
        raise InvalidParameter(f"{key} must be a positive width in feet, got {value!r}")
    return number


def _to_sequence(key: str, value: Any) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise InvalidParameter(f"{key} must be a list, got {value!r}")
    return value


def _coerce(key: str, kind: str, value: Any) -> Any:
    if kind == "number":
        return _to_number(key, value)
    if kind == "width":
        return _to_width(key, value)
    if kind == "count":
        return _to_count(key, value)
    if kind == "label":
        return str(value)
    if kind == "labels":
        return tuple(str(v) for v in _to_sequence(key, value))
    if kind == "numbers":
        return tuple(_to_number(key, v) for v in _to_sequence(key, value))
    raise ValueError(f"Unknown parameter kind: {kind}")


class ParamsMixin:
    variant: ClassVar[VisualizationType]

    @classmethod
    def from_data(cls, data: Mapping[str, Any] | None):
        """Build the record from request data, substituting defaults."""
        data = data or {}
        kwargs = {}
        for f in fields(cls):  # type: ignore[arg-type]
            key = f.metadata["key"]
            value = data.get(key)
            if value is None:
                value = data.get(f.name)
            if value is None:
                continue
            if f.metadata["blank_is_unset"] and not str(value).strip():
                continue
            kwargs[f.name] = _coerce(key, f.metadata["kind"], value)
        return cls(**kwargs)


@dataclass(**dataclass_kwargs)
class AsciiDiagramParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.ASCII_DIAGRAM
    title: str = param("title", "Street Layout", kind="label", blank_is_unset=True)
    lane1: str = param("lane1", "Travel Lane", kind="label", blank_is_unset=True)
    lane2: str = param("lane2", "Bike Lane", kind="label", blank_is_unset=True)
    lane3: str = param("lane3", "Sidewalk", kind="label", blank_is_unset=True)


@dataclass(**dataclass_kwargs)
class CrossSectionParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.CROSS_SECTION
    option: str = param("option", "A", kind="label")
    sidewalk_width: float = param("sidewalkWidth", 6, unit="ft", kind="width")
    bike_width: float = param("bikeWidth", 5, unit="ft", kind="width")
    travel_width: float = param("travelWidth", 11, unit="ft", kind="width")
    parking_width: float = param("parkingWidth", 8, unit="ft", kind="width")

    @property
    def total_width(self) -> float:
        return self.sidewalk_width + self.bike_width + self.travel_width + self.parking_width


@dataclass(**dataclass_kwargs)
class BeforeAfterParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.BEFORE_AFTER
    before_speed: float = param("beforeSpeed", 35, unit="mph")
    after_speed: float = param("afterSpeed", 25, unit="mph")
    before_conflicts: int = param("beforeConflicts", 14, unit="count", kind="count")
    after_conflicts: int = param("afterConflicts", 8, unit="count", kind="count")


@dataclass(**dataclass_kwargs)
class BarChartParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.BAR_CHART
    title: str = param("title", "Safety Improvements", kind="label")
    categories: tuple[str, ...] = param("categories", (), kind="labels")
    values: tuple[float, ...] = param("values", (), unit="%", kind="numbers")

    def __post_init__(self) -> None:
        if len(self.categories) != len(self.values):
            raise ArrayLengthMismatch(len(self.categories), len(self.values))


@dataclass(**dataclass_kwargs)
class PedestrianExposureParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.PEDESTRIAN_EXPOSURE
    before_time: float = param("beforeTime", 28, unit="s")
    after_time: float = param("afterTime", 18, unit="s")
    crossing_width: float = param("crossingWidth", 48, unit="ft", kind="width")


@dataclass(**dataclass_kwargs)
class ConflictPointsParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.CONFLICT_POINTS
    before_points: int = param("beforePoints", 14, unit="count", kind="count")
    after_points: int = param("afterPoints", 8, unit="count", kind="count")


@dataclass(**dataclass_kwargs)
class QueueLengthParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.QUEUE_LENGTH
    before_queue: int = param("beforeQueue", 12, unit="vehicles", kind="count")
    after_queue: int = param("afterQueue", 6, unit="vehicles", kind="count")
    peak_hour: str = param("peakHour", "5:00 PM", kind="label")


@dataclass(**dataclass_kwargs)
class SolutionPlanningParams(ParamsMixin):
    variant: ClassVar[VisualizationType] = VisualizationType.SOLUTION_PLANNING
    speed_cameras: int = param("speedCameras", 2, unit="count", kind="count")
    stop_signs: int = param("stopSigns", 3, unit="count", kind="count")
    red_light_cameras: int = param("redLightCameras", 1, unit="count", kind="count")
    flex_bollards: int = param("flexBollards", 4, unit="count", kind="count")
    intersection_name: str = param("intersectionName", "Main St & 5th Ave", kind="label")


DiagramParams = Union[
    AsciiDiagramParams,
    CrossSectionParams,
    BeforeAfterParams,
    BarChartParams,
    PedestrianExposureParams,
    ConflictPointsParams,
    QueueLengthParams,
    SolutionPlanningParams,
]

PARAMS_BY_TYPE: dict[VisualizationType, type] = {
    record.variant: record
    for record in (
        AsciiDiagramParams,
        CrossSectionParams,
        BeforeAfterParams,
        BarChartParams,
        PedestrianExposureParams,
        ConflictPointsParams,
        QueueLengthParams,
        SolutionPlanningParams,
    )
}


def describe_fields(record: type) -> list[dict[str, Any]]:
    """Key, unit and default of every field of a parameter record."""
    return [
        {
            "key": f.metadata["key"],
            "unit": f.metadata["unit"],
            "default": list(f.default) if isinstance(f.default, tuple) else f.default,
        }
        for f in fields(record)
    ]
