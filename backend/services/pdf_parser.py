import io
import logging

import pdfplumber

from models.responses import ParsedResume
from services.errors import ExtractionError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def extract_document(pdf_bytes: bytes) -> ParsedResume:
    """Extract all text and the page count from a PDF file.

    Text follows the library's stream order, which may differ from the
    visual reading order of multi-column layouts.
    """
    try:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.error("PDF parse error: %s", e)
        raise ExtractionError(str(e) or type(e).__name__) from e
    return ParsedResume(text="\n".join(pages).strip(), pages=len(pages))


def extract_text(pdf_bytes: bytes) -> str:
    """Extract all text from a PDF file."""
    return extract_document(pdf_bytes).text
