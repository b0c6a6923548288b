from __future__ import annotations

from enum import Enum


class VisualizationType(str, Enum):
    ASCII_DIAGRAM = "ascii-diagram"
    CROSS_SECTION = "cross-section"
    BEFORE_AFTER = "before-after"
    BAR_CHART = "bar-chart"
    PEDESTRIAN_EXPOSURE = "pedestrian-exposure"
    CONFLICT_POINTS = "conflict-points"
    QUEUE_LENGTH = "queue-length"
    SOLUTION_PLANNING = "solution-planning"


class ReportFormat(str, Enum):
    MARKDOWN = "md"
    HTML = "html"


class DocumentType(str, Enum):
    TXT = "txt"
    PDF = "pdf"
    DOCX = "docx"
