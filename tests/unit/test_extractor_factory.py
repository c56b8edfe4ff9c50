from unittest.mock import MagicMock

import pytest

from docworker.extraction import mime_types
from docworker.extraction.factory import ExtractorFactory
from docworker.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docworker.extraction.pymupdf_adapter import PyMuPdfAdapter


def _make_settings(pdf_engine: str = "pdfplumber") -> MagicMock:
    """Create a minimal Settings-like object."""
    return MagicMock(pdf_engine=pdf_engine, ocr_languages="eng")


class TestExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = ExtractorFactory.create_pdf_adapter(_make_settings("pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = ExtractorFactory.create_pdf_adapter(_make_settings("pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = ExtractorFactory.create_pdf_adapter(_make_settings("PyMuPDF"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            ExtractorFactory.create(_make_settings("unknown"))

    def test_registers_every_supported_type(self) -> None:
        extractor = ExtractorFactory.create(_make_settings())
        assert extractor.supported_mime_types == frozenset(mime_types.SUPPORTED_MIME_TYPES)
