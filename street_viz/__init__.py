"""StreetViz: diagram synthesis for street safety analysis reports."""

__version__ = "0.3.0"
