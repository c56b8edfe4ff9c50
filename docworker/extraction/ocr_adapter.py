import io

import pytesseract
from PIL import Image

from docworker.extraction.base import BaseExtractor
from docworker.extraction.exceptions import ExtractionError


class TesseractOcrAdapter(BaseExtractor):
    """Runs Tesseract OCR over JPEG/PNG images."""

    def __init__(self, languages: str = "eng") -> None:
        self._languages = languages

    def extract(self, data: bytes) -> str:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.load()
                text = pytesseract.image_to_string(image, lang=self._languages)
        except Exception as exc:
            raise ExtractionError(f"OCR extraction failed: {exc}") from exc
        return text.strip()
