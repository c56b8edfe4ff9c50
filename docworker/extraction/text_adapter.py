from docworker.extraction.base import BaseExtractor


class PlainTextAdapter(BaseExtractor):
    """Decodes plain text files as UTF-8; undecodable bytes become U+FFFD."""

    def extract(self, data: bytes) -> str:
        return data.decode("utf-8-sig", errors="replace")
