"""
Resume Extraction Module - Best-effort résumé text extraction.

Handles:
- Fetching the uploaded document
- PDF and Word text extraction
- Fallback sentences for unreadable or unsupported documents
"""
from etl.resume.parser import (
    ResumeTextExtractor,
    ExtractedResume,
    UNREADABLE_RESUME_TEXT,
    UNSUPPORTED_FORMAT_TEXT,
)

__all__ = [
    'ResumeTextExtractor',
    'ExtractedResume',
    'UNREADABLE_RESUME_TEXT',
    'UNSUPPORTED_FORMAT_TEXT',
]
