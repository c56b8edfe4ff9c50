PDF = "application/pdf"
PLAIN_TEXT = "text/plain"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
JPEG = "image/jpeg"
PNG = "image/png"

# Accepted upload types and the extension used when one is missing.
SUPPORTED_MIME_TYPES: dict[str, str] = {
    PDF: ".pdf",
    PLAIN_TEXT: ".txt",
    DOCX: ".docx",
    JPEG: ".jpg",
    PNG: ".png",
}


def normalize_mime_type(mime_type: str) -> str:
    """Drop parameters such as ``; charset=utf-8`` and lowercase."""
    return mime_type.split(";", 1)[0].strip().lower()


def is_supported(mime_type: str) -> bool:
    return normalize_mime_type(mime_type) in SUPPORTED_MIME_TYPES
