"""
Resume Text Extractor - Turn an uploaded résumé into plain text.

Supports:
- PDF (.pdf): pypdf, all pages
- Word Documents (.docx): python-docx, paragraphs and tables

Any other extension yields UNSUPPORTED_FORMAT_TEXT. Fetch failures, parse
errors and documents with almost no text (scanned/image-only PDFs) yield
UNREADABLE_RESUME_TEXT. ``extract`` never raises: one unreadable résumé
must not stop the candidate from being scored on its answers.
"""
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import urlparse

import requests
from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)

# Image-only PDFs come back empty or with a few stray characters
MIN_EXTRACTED_LENGTH = 50

UNREADABLE_RESUME_TEXT = (
    "[The resume could not be read automatically. Possible causes: PDF is image-only "
    "(scanned/exported as image), or the file could not be fetched. Please base your "
    "evaluation mainly on the application answers below.]"
)
UNSUPPORTED_FORMAT_TEXT = "Resume format not supported for parsing."


@dataclass
class ExtractedResume:
    """Result of extracting a résumé.

    Attributes:
        text: Text to hand to the evaluator (possibly a fallback sentence)
        format: Detected format ('pdf', 'docx' or the unsupported extension)
        readable: False when ``text`` is a fallback sentence
    """
    text: str
    format: str
    readable: bool


class ResumeTextExtractor:
    """Fetch a résumé by URL and extract its text.

    Pass ``session`` to reuse connections from a single thread; by default
    each fetch is a standalone ``requests.get``.
    """

    SUPPORTED_FORMATS = {'.pdf', '.docx'}

    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        # None: one-off requests per call, safe across the poll thread and API threadpool
        self.session = session

    def extract(self, document_reference: str) -> str:
        return self.extract_detailed(document_reference).text

    def extract_detailed(self, document_reference: str) -> ExtractedResume:
        ext = self.detect_format(document_reference)

        if ext not in self.SUPPORTED_FORMATS:
            logger.info(f"Resume format '{ext or 'unknown'}' not supported: {document_reference}")
            return ExtractedResume(text=UNSUPPORTED_FORMAT_TEXT, format=ext.lstrip('.'), readable=False)

        try:
            content = self._fetch(document_reference)
            if ext == '.pdf':
                text = self._extract_pdf(content)
            else:
                text = self._extract_docx(content)
        except Exception as e:
            logger.error(f"Error extracting resume {document_reference}: {e}")
            return ExtractedResume(text=UNREADABLE_RESUME_TEXT, format=ext.lstrip('.'), readable=False)

        text = text.strip()
        if len(text) < MIN_EXTRACTED_LENGTH:
            logger.warning(
                f"Resume returned very little text ({len(text)} chars). "
                f"Likely image-based or scanned: {document_reference}"
            )
            return ExtractedResume(text=UNREADABLE_RESUME_TEXT, format=ext.lstrip('.'), readable=False)

        logger.debug(f"Extracted {len(text)} chars from {ext} resume")
        return ExtractedResume(text=text, format=ext.lstrip('.'), readable=True)

    @staticmethod
    def detect_format(document_reference: str) -> str:
        """Lower-cased extension of the URL path, ignoring query strings."""
        path = urlparse(document_reference or '').path
        return PurePosixPath(path).suffix.lower()

    def _fetch(self, url: str) -> bytes:
        response = (self.session or requests).get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def _extract_pdf(self, content: bytes) -> str:
        reader = PdfReader(BytesIO(content))

        pages_text = []
        for i, page in enumerate(reader.pages):
            try:
                page_text = page.extract_text()
                if page_text and page_text.strip():
                    pages_text.append(page_text.strip())
            except Exception as e:
                logger.warning(f"Failed to extract text from page {i + 1}: {e}")

        return '\n\n'.join(pages_text)

    def _extract_docx(self, content: bytes) -> str:
        doc = Document(BytesIO(content))

        paragraphs = []
        for para in doc.paragraphs:
            if para.text.strip():
                paragraphs.append(para.text.strip())

        # Also extract from tables (common in resumes)
        for table in doc.tables:
            for row in table.rows:
                row_texts = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_texts:
                    paragraphs.append(' '.join(row_texts))

        return '\n\n'.join(paragraphs)
