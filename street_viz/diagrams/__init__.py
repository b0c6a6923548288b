"""Diagram synthesis engine for street safety analysis.

Turns transportation metrics (speeds, conflict counts, queue lengths,
category/value series, intervention counts, cross-section widths) into one of
eight diagrams, each with a deterministic caption. Every generator is a pure
function of its parameter record; the engine keeps no state between calls.

Usage:
    from street_viz.diagrams import generate_visualization
    from street_viz.core.models import VisualizationRequest

    viz = generate_visualization(
        VisualizationRequest(
            type="before-after",
            data={"beforeSpeed": 35, "afterSpeed": 25},
            description="Speed and conflict comparison",
        )
    )
    print(viz.caption)
"""

from __future__ import annotations

from .dispatcher import build_params, generate_visualization, render_params, resolve_type

__all__ = ["build_params", "generate_visualization", "render_params", "resolve_type"]
