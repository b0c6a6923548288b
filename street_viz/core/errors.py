"""Exception hierarchy shared by the engine, intake, report and CLI layers."""

from __future__ import annotations


class StreetVizError(Exception):
    """Base exception for StreetViz errors."""
    pass


class UnsupportedVisualizationType(StreetVizError, ValueError):
    """Visualization tag is not one of the supported diagram variants."""

    def __init__(self, tag: object):
        self.tag = tag
        super().__init__(f"Unsupported visualization type: {tag!r}")


class ArrayLengthMismatch(StreetVizError, ValueError):
    """Bar-chart categories and values differ in length."""

    def __init__(self, categories: int, values: int):
        self.categories = categories
        self.values = values
        super().__init__(
            f"Bar chart requires equal-length categories and values "
            f"(got {categories} categories, {values} values)"
        )


class InvalidParameter(StreetVizError, ValueError):
    """A data field could not be coerced to its parameter type."""
    pass


class ExtractionError(StreetVizError):
    """Text could not be extracted from an uploaded document."""
    pass


class ReportRenderError(StreetVizError, RuntimeError):
    """Report template is missing or failed to render."""
    pass
