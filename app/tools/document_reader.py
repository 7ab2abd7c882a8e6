"""Document text source — turns an uploaded CV / job description into text."""

from __future__ import annotations

import logging
from io import BytesIO

from pypdf import PdfReader

from app.models.errors import DocumentReadError
from app.tools.text_normalizer import normalize

logger = logging.getLogger(__name__)

READ_ERROR_MESSAGE = (
    "Error reading uploaded files. Please ensure they are valid PDF or text files."
)


def _is_pdf(filename: str, content_type: str | None, data: bytes) -> bool:
    return (
        content_type == "application/pdf"
        or filename.lower().endswith(".pdf")
        or data[:5] == b"%PDF-"
    )


def read_document(filename: str, content_type: str | None, data: bytes) -> str:
    """Return the normalized text of an uploaded PDF or plain-text file."""
    if not data:
        raise DocumentReadError("The uploaded file is empty.")

    if _is_pdf(filename, content_type, data):
        try:
            reader = PdfReader(BytesIO(data))
            raw = "\n".join((page.extract_text() or "") for page in reader.pages)
        except Exception as exc:
            logger.warning("PDF extraction failed for %s: %s", filename, exc)
            raise DocumentReadError(READ_ERROR_MESSAGE) from exc
    else:
        try:
            raw = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("Text decode failed for %s: %s", filename, exc)
            raise DocumentReadError(READ_ERROR_MESSAGE) from exc

    text = normalize(raw)
    if not text:
        raise DocumentReadError("No text could be extracted from the uploaded file.")

    logger.info("Extracted %d characters from %s", len(text), filename)
    return text
