"""Keyword-scoring paragraph classifier.

Splits extracted document text into paragraphs and routes each one to the
analysis-request field whose keyword list it matches best. A paragraph scores
one point per distinct keyword it contains (case-insensitive substring
match). Routing rules, applied per paragraph in document order:

    no keyword matched             -> appended to ``data``
    city wins, city not yet set    -> ``city_context``
    data wins                      -> appended to ``data``
    scenario wins, not yet set     -> ``scenario``
    task wins, not yet set         -> ``task``
    anything else                  -> appended to ``data``

Ties between categories resolve in the order city, data, scenario, task.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass

from ..core.logging_config import get_logger

logger = get_logger(__name__)

MIN_PARAGRAPH_LENGTH = 20

CITY_KEYWORDS = (
    "city", "population", "area", "municipality", "downtown",
    "neighborhood", "district", "infrastructure",
)
DATA_KEYWORDS = (
    "traffic", "volume", "data", "metric", "rate", "count", "number",
    "statistic", "crash", "accident", "ridership",
)
SCENARIO_KEYWORDS = (
    "proposed", "scenario", "plan", "design", "project", "improvement",
    "redesign", "lane", "intersection",
)
TASK_KEYWORDS = (
    "analyze", "evaluate", "assess", "compare", "recommend", "study",
    "examine", "question", "task",
)

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n+")


@dataclass
class ExtractedFields:
    city_context: str | None = None
    data: str | None = None
    scenario: str | None = None
    task: str | None = None

    def append_data(self, paragraph: str) -> None:
        self.data = f"{self.data}\n\n{paragraph}" if self.data else paragraph

    def to_dict(self) -> dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def split_paragraphs(text: str) -> list[str]:
    return [
        p.strip()
        for p in _PARAGRAPH_BREAK.split(text)
        if len(p.strip()) > MIN_PARAGRAPH_LENGTH
    ]


def score_paragraph(paragraph: str, keywords: tuple[str, ...]) -> int:
    lowered = paragraph.lower()
    return sum(1 for keyword in keywords if keyword in lowered)


def classify_paragraphs(text: str) -> ExtractedFields:
    """Route the paragraphs of ``text`` to analysis-request fields."""
    fields = ExtractedFields()
    paragraphs = split_paragraphs(text)

    for paragraph in paragraphs:
        city = score_paragraph(paragraph, CITY_KEYWORDS)
        data = score_paragraph(paragraph, DATA_KEYWORDS)
        scenario = score_paragraph(paragraph, SCENARIO_KEYWORDS)
        task = score_paragraph(paragraph, TASK_KEYWORDS)
        best = max(city, data, scenario, task)

        if best == 0:
            fields.append_data(paragraph)
        elif city == best and fields.city_context is None:
            fields.city_context = paragraph
        elif data == best:
            fields.append_data(paragraph)
        elif scenario == best and fields.scenario is None:
            fields.scenario = paragraph
        elif task == best and fields.task is None:
            fields.task = paragraph
        else:
            fields.append_data(paragraph)

    logger.debug(
        "Classified document paragraphs",
        extra={"paragraphs": len(paragraphs), "fields": sorted(fields.to_dict())},
    )
    return fields
