import unittest
from io import BytesIO
from unittest.mock import MagicMock, patch

import requests
from docx import Document

from etl.resume import (
    ResumeTextExtractor,
    UNREADABLE_RESUME_TEXT,
    UNSUPPORTED_FORMAT_TEXT,
)

LONG_TEXT = "Senior Python engineer with ten years of experience building data pipelines."


def _docx_bytes(paragraphs, table_rows=()):
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


class TestResumeTextExtractor(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.response = MagicMock()
        self.response.content = b"%PDF-1.4 fake"
        self.session.get.return_value = self.response
        self.extractor = ResumeTextExtractor(timeout=5, session=self.session)

    def test_detect_format_ignores_query_string(self):
        self.assertEqual(self.extractor.detect_format("https://x.test/a/CV.PDF?token=1"), ".pdf")
        self.assertEqual(self.extractor.detect_format("https://x.test/a/cv.docx"), ".docx")
        self.assertEqual(self.extractor.detect_format("https://x.test/a/cv"), "")

    def test_unsupported_format_does_not_fetch(self):
        result = self.extractor.extract_detailed("https://x.test/cv.doc")
        self.assertEqual(result.text, UNSUPPORTED_FORMAT_TEXT)
        self.assertEqual(result.format, "doc")
        self.assertFalse(result.readable)
        self.session.get.assert_not_called()

    @patch("etl.resume.parser.PdfReader")
    def test_pdf_pages_are_joined(self, reader_cls):
        page1, page2, blank = MagicMock(), MagicMock(), MagicMock()
        page1.extract_text.return_value = LONG_TEXT
        page2.extract_text.return_value = "  Skills: Python, SQL  "
        blank.extract_text.return_value = "   "
        reader_cls.return_value.pages = [page1, blank, page2]

        result = self.extractor.extract_detailed("https://x.test/cv.pdf")

        self.assertTrue(result.readable)
        self.assertEqual(result.format, "pdf")
        self.assertEqual(result.text, f"{LONG_TEXT}\n\nSkills: Python, SQL")
        self.session.get.assert_called_once_with("https://x.test/cv.pdf", timeout=5)

    @patch("etl.resume.parser.PdfReader")
    def test_failing_page_is_skipped(self, reader_cls):
        good, bad = MagicMock(), MagicMock()
        good.extract_text.return_value = LONG_TEXT
        bad.extract_text.side_effect = KeyError("/Font")
        reader_cls.return_value.pages = [bad, good]

        self.assertEqual(self.extractor.extract("https://x.test/cv.pdf"), LONG_TEXT)

    @patch("etl.resume.parser.PdfReader")
    def test_image_only_pdf_is_unreadable(self, reader_cls):
        page = MagicMock()
        page.extract_text.return_value = "a b c"
        reader_cls.return_value.pages = [page]

        result = self.extractor.extract_detailed("https://x.test/scan.pdf")
        self.assertEqual(result.text, UNREADABLE_RESUME_TEXT)
        self.assertFalse(result.readable)

    @patch("etl.resume.parser.PdfReader")
    def test_corrupt_pdf_is_unreadable(self, reader_cls):
        reader_cls.side_effect = ValueError("EOF marker not found")
        self.assertEqual(self.extractor.extract("https://x.test/cv.pdf"), UNREADABLE_RESUME_TEXT)

    def test_http_error_is_unreadable(self):
        self.response.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        self.assertEqual(self.extractor.extract("https://x.test/cv.pdf"), UNREADABLE_RESUME_TEXT)

    def test_network_error_is_unreadable(self):
        self.session.get.side_effect = requests.ConnectionError("refused")
        self.assertEqual(self.extractor.extract("https://x.test/cv.docx"), UNREADABLE_RESUME_TEXT)

    @patch("etl.resume.parser.PdfReader")
    @patch("etl.resume.parser.requests.get")
    def test_without_session_each_fetch_is_a_standalone_request(self, get, reader_cls):
        get.return_value.content = b"%PDF-1.4 fake"
        page = MagicMock()
        page.extract_text.return_value = LONG_TEXT
        reader_cls.return_value.pages = [page]
        extractor = ResumeTextExtractor(timeout=7)

        self.assertIsNone(extractor.session)
        self.assertEqual(extractor.extract("https://x.test/cv.pdf"), LONG_TEXT)
        get.assert_called_once_with("https://x.test/cv.pdf", timeout=7)

    def test_docx_paragraphs_and_tables(self):
        self.response.content = _docx_bytes(
            [LONG_TEXT, "", "Education: BSc Computer Science"],
            table_rows=[("2019-2024", "Acme Corp"), ("", "")],
        )

        result = self.extractor.extract_detailed("https://x.test/cv.docx")

        self.assertTrue(result.readable)
        self.assertEqual(
            result.text,
            f"{LONG_TEXT}\n\nEducation: BSc Computer Science\n\n2019-2024 Acme Corp",
        )


if __name__ == "__main__":
    unittest.main()
