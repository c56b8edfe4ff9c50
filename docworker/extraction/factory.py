from typing import ClassVar

from docworker.config.settings import Settings
from docworker.extraction import mime_types
from docworker.extraction.base import BaseExtractor
from docworker.extraction.docx_adapter import DocxAdapter
from docworker.extraction.extractor import Extractor
from docworker.extraction.ocr_adapter import TesseractOcrAdapter
from docworker.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docworker.extraction.pymupdf_adapter import PyMuPdfAdapter
from docworker.extraction.text_adapter import PlainTextAdapter


class ExtractorFactory:
    """Builds the mime-type dispatcher with the configured PDF engine."""

    PDF_ADAPTERS: ClassVar[dict[str, type[BaseExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> Extractor:
        ocr = TesseractOcrAdapter(languages=settings.ocr_languages)
        return Extractor(
            {
                mime_types.PDF: cls.create_pdf_adapter(settings),
                mime_types.PLAIN_TEXT: PlainTextAdapter(),
                mime_types.DOCX: DocxAdapter(),
                mime_types.JPEG: ocr,
                mime_types.PNG: ocr,
            }
        )

    @classmethod
    def create_pdf_adapter(cls, settings: Settings) -> BaseExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()
