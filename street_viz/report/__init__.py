"""Analysis report assembly and rendering."""

from .assembly import (
    DEFAULT_PLAN,
    AnalysisReport,
    AnalysisRequest,
    PlanEntry,
    ReportBuilder,
    load_plan,
    load_request,
)
from .renderer import ReportRenderer, write_text

__all__ = [
    "DEFAULT_PLAN",
    "AnalysisReport",
    "AnalysisRequest",
    "PlanEntry",
    "ReportBuilder",
    "ReportRenderer",
    "load_plan",
    "load_request",
    "write_text",
]
