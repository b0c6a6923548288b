"""Narrative text blocks for analysis reports."""

from __future__ import annotations

from dataclasses import dataclass, field

dataclass_kwargs = {"slots": True}


@dataclass(**dataclass_kwargs)
class DesignOption:
    name: str
    pros: list[str] = field(default_factory=list)
    cons: list[str] = field(default_factory=list)
    cost_band: str = ""
    framing: str = ""


DESIGN_OPTIONS = (
    DesignOption(
        name="Minimal Intervention",
        pros=[
            "Lowest upfront cost ($150K-$250K)",
            "Fastest implementation (2-3 months)",
            "Minimal disruption during construction",
            "Easy to modify if needed",
        ],
        cons=[
            "Limited safety improvements",
            "Does not address root causes",
            "May require future upgrades",
        ],
        cost_band="Low ($)",
        framing=(
            "A practical first step that shows immediate action while preserving "
            "flexibility for future enhancements."
        ),
    ),
    DesignOption(
        name="Comprehensive Redesign",
        pros=[
            "Maximum safety improvements",
            "Addresses all identified issues",
            "Future-proof infrastructure",
            "Significant child pedestrian safety gains",
        ],
        cons=[
            "Higher initial investment ($800K-$1.2M)",
            "Longer construction period (6-9 months)",
            "Temporary traffic impacts",
        ],
        cost_band="Medium ($$)",
        framing=(
            "An investment in safe routes for every resident, so families can let "
            "children walk to school with confidence."
        ),
    ),
    DesignOption(
        name="Phased Implementation",
        pros=[
            "Balances cost and impact",
            "Allows for community feedback",
            "Spreads budget over time",
        ],
        cons=[
            "Benefits realized over a longer period",
            "Requires ongoing coordination",
            "Total cost may be higher",
        ],
        cost_band="Medium ($$)",
        framing=(
            "Delivers improvements steadily while learning from each phase to "
            "optimize the next."
        ),
    ),
)

RECOMMENDATION = (
    "Option B (Comprehensive Redesign) is recommended. It requires a higher initial "
    "investment, but it delivers the largest reduction in speeds and conflict points, "
    "makes school routes measurably safer, and avoids the repeated cost of incremental "
    "fixes. State safety grants and active transportation programs can offset a "
    "substantial share of the construction cost."
)

FAMILY_FOCUSED_DESIGN = (
    "Design includes child-height sight lines, clear wayfinding, and comfortable "
    "waiting areas at crossings."
)


def summary_text(city_context: str, scenario: str, task: str, data: str) -> str:
    return (
        "This analysis evaluates the proposed transportation scenario in the context of "
        f"{city_context}. The scenario involves {scenario}, with a focus on {task}. "
        f"Based on the provided data ({data}), this report assesses impacts across "
        "safety, mobility, transit, walking, cycling, and vulnerable user considerations. "
        "Automated visualizations provide schematic representations of the proposed "
        "changes and their expected impacts."
    )


def scenario_impacts(conflict_change: str, speed_change: str) -> dict[str, str]:
    return {
        "safety": (
            f"Vehicle speeds are {speed_change} and conflict points are {conflict_change}, "
            "supported by improved sight lines and dedicated crossing infrastructure."
        ),
        "mobility": (
            "Overall mobility is maintained. Traffic calming reduces speeds without "
            "creating significant delays, and vehicle access remains functional."
        ),
        "transit": (
            "Transit operations benefit from optimized stop locations and signal "
            "priority where bus routes cross the corridor."
        ),
        "walking": (
            "Wider sidewalks and shorter crossings make walking routes more direct "
            "and comfortable."
        ),
        "cycling": (
            "Protected bike lanes separate cyclists from vehicle traffic and connect "
            "to the existing bike network."
        ),
        "vulnerable_users": (
            "Children, older adults, and mobility-impaired users benefit from tactile "
            "paving, audible signals, and shorter exposure at crossings."
        ),
    }
