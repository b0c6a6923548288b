"""Document intake: text extraction and paragraph routing to request fields."""

from __future__ import annotations

from .classifier import ExtractedFields, classify_paragraphs
from .extractor import extract_text

__all__ = ["ExtractedFields", "classify_paragraphs", "extract_text"]
