"""Maps a visualization request to the generator for its variant."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..core.enums import VisualizationType
from ..core.errors import UnsupportedVisualizationType
from ..core.logging_config import get_logger
from ..core.models import Visualization, VisualizationRequest
from .ascii_diagram import generate_ascii_diagram
from .bar_chart import generate_bar_chart
from .before_after import generate_before_after
from .conflict_points import generate_conflict_points
from .cross_section import generate_cross_section
from .params import (
    PARAMS_BY_TYPE,
    AsciiDiagramParams,
    BarChartParams,
    BeforeAfterParams,
    ConflictPointsParams,
    CrossSectionParams,
    DiagramParams,
    PedestrianExposureParams,
    QueueLengthParams,
    SolutionPlanningParams,
)
from .pedestrian_exposure import generate_pedestrian_exposure
from .queue_length import generate_queue_length
from .solution_planning import generate_solution_planning

logger = get_logger(__name__)

Generator = Callable[[Any, str], Visualization]

GENERATORS: dict[type, Generator] = {
    AsciiDiagramParams: generate_ascii_diagram,
    CrossSectionParams: generate_cross_section,
    BeforeAfterParams: generate_before_after,
    BarChartParams: generate_bar_chart,
    PedestrianExposureParams: generate_pedestrian_exposure,
    ConflictPointsParams: generate_conflict_points,
    QueueLengthParams: generate_queue_length,
    SolutionPlanningParams: generate_solution_planning,
}


def resolve_type(tag: VisualizationType | str) -> VisualizationType:
    """Return the variant for ``tag`` or raise UnsupportedVisualizationType."""
    if isinstance(tag, VisualizationType):
        return tag
    try:
        return VisualizationType(tag)
    except ValueError:
        raise UnsupportedVisualizationType(tag) from None


def build_params(tag: VisualizationType | str, data: Any = None) -> DiagramParams:
    return PARAMS_BY_TYPE[resolve_type(tag)].from_data(data)


def render_params(params: DiagramParams, description: str = "") -> Visualization:
    """Render an already-built parameter record."""
    generator = GENERATORS.get(type(params))
    if generator is None:
        raise UnsupportedVisualizationType(type(params).__name__)
    visualization = generator(params, description)
    logger.debug(
        "Generated visualization",
        extra={"type": visualization.type.value, "content_length": len(visualization.content)},
    )
    return visualization


def generate_visualization(request: VisualizationRequest) -> Visualization:
    """Generate the diagram described by ``request``.

    Fields missing from ``request.data`` take their documented defaults.

    Raises:
        UnsupportedVisualizationType: ``request.type`` is not a known variant
        ArrayLengthMismatch: bar-chart categories and values differ in length
        InvalidParameter: a data value cannot be read as its field's type
    """
    params = build_params(request.type, request.data)
    return render_params(params, request.description)
