"""Plain-text extraction from uploaded .txt, .pdf and .docx documents."""

from __future__ import annotations

import zipfile
from pathlib import Path

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..core.enums import DocumentType
from ..core.errors import ExtractionError
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def detect_document_type(path: Path) -> DocumentType:
    suffix = path.suffix.lower().lstrip(".")
    try:
        return DocumentType(suffix)
    except ValueError:
        raise ExtractionError(
            f"Unsupported document type '{path.suffix or path.name}'. "
            "Upload a .txt, .pdf or .docx file."
        ) from None


def _read_txt(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.debug("UTF-8 decode failed, falling back to latin-1", extra={"path": str(path)})
        return path.read_text(encoding="latin-1")


def _read_pdf(path: Path) -> str:
    try:
        reader = PdfReader(str(path))
        pages = [page.extract_text() or "" for page in reader.pages]
    except PdfReadError as e:
        raise ExtractionError(
            f"Failed to extract text from PDF {path.name}: {e}. "
            "Try copying and pasting the text manually."
        ) from e
    return "\n\n".join(p.strip() for p in pages if p.strip())


def _read_docx(path: Path) -> str:
    try:
        document = DocxDocument(str(path))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise ExtractionError(
            f"Failed to extract text from DOCX {path.name}: {e}. "
            "Try copying and pasting the text manually."
        ) from e
    return "\n\n".join(p.text for p in document.paragraphs if p.text.strip())


_READERS = {
    DocumentType.TXT: _read_txt,
    DocumentType.PDF: _read_pdf,
    DocumentType.DOCX: _read_docx,
}


def extract_text(path: Path | str) -> str:
    """Extract the text of an uploaded document.

    Args:
        path: Path to a .txt, .pdf or .docx file

    Returns:
        Non-empty extracted text

    Raises:
        ExtractionError: If the type is unsupported, the file cannot be read,
            or no text could be extracted
    """
    path = Path(path)
    doc_type = detect_document_type(path)
    if not path.is_file():
        raise ExtractionError(f"Document not found: {path}")

    try:
        text = _READERS[doc_type](path)
    except OSError as e:
        logger.error("Failed to read document", extra={"path": str(path), "error": str(e)})
        raise ExtractionError(f"Failed to read {path.name}: {e}") from e

    text = text.strip()
    if not text:
        raise ExtractionError(f"No text could be extracted from {path.name}")

    logger.info(
        "Extracted document text",
        extra={"path": str(path), "doc_type": doc_type.value, "chars": len(text)},
    )
    return text
