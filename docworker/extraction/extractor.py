from collections.abc import Mapping

from docworker.extraction.base import BaseExtractor
from docworker.extraction.exceptions import UnsupportedFormatError
from docworker.extraction.mime_types import normalize_mime_type
from docworker.logging.logger import Log


class Extractor:
    """Routes raw bytes to the adapter registered for their mime type."""

    def __init__(self, adapters: Mapping[str, BaseExtractor]) -> None:
        self._adapters = {normalize_mime_type(k): v for k, v in adapters.items()}

    @property
    def supported_mime_types(self) -> frozenset[str]:
        return frozenset(self._adapters)

    def extract(self, data: bytes, mime_type: str) -> str:
        """Extract text from ``data``.

        Raises:
            UnsupportedFormatError: if no adapter handles ``mime_type``.
            ExtractionError: if the adapter cannot decode the content.
        """
        adapter = self._adapters.get(normalize_mime_type(mime_type))
        if adapter is None:
            raise UnsupportedFormatError(f"Unsupported file type '{mime_type}'")
        text = adapter.extract(data)
        Log.debug(f"{mime_type}: {len(data)} bytes -> {len(text)} chars")
        return text
