import io

import docx

from docworker.extraction.base import BaseExtractor
from docworker.extraction.exceptions import ExtractionError


class DocxAdapter(BaseExtractor):
    """Extracts paragraph and table text from Word (.docx) files with python-docx."""

    def extract(self, data: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
        except Exception as exc:
            raise ExtractionError(f"docx extraction failed: {exc}") from exc

        blocks = [p.text for p in document.paragraphs if p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    blocks.append("\t".join(cells))
        return "\n\n".join(blocks).strip()
