import io
import logging
import re

import pdfplumber

from models.schemas import ExtractedDocument, ValidationResult
from services.errors import ExtractionError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
MAX_PDF_BYTES = 10 * 1024 * 1024  # 10 MiB

_LINE_BREAKS_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RE = re.compile(r"\s+")


def validate_pdf(pdf_bytes: bytes) -> ValidationResult:
    """Cheap structural checks run before extraction: header marker and size."""
    if pdf_bytes[:4] != PDF_MAGIC:
        return ValidationResult(is_valid=False, error="Invalid PDF format")
    if len(pdf_bytes) > MAX_PDF_BYTES:
        return ValidationResult(is_valid=False, error="PDF file too large (max 10MB)")
    return ValidationResult(is_valid=True)


def extract_document(pdf_bytes: bytes) -> ExtractedDocument:
    """Extract all text, the page count and document info from a PDF.

    Raises ExtractionError wrapping the parser's message when the bytes
    cannot be read (corrupt structure, encryption, ...).
    """
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
            metadata = dict(pdf.metadata or {})
    except Exception as e:
        logger.error("PDF extraction failed: %s", e)
        raise ExtractionError(f"Failed to extract text from PDF: {str(e) or type(e).__name__}") from e

    return ExtractedDocument(
        text="\n".join(pages),
        page_count=len(pages),
        raw_metadata=metadata,
    )


def clean_text(text: str) -> str:
    """Collapse line breaks and whitespace runs to single spaces, then trim."""
    text = _LINE_BREAKS_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()
