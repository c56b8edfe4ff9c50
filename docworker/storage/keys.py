import secrets
import time
from pathlib import PurePosixPath


def build_blob_key(
    owner_id: str,
    original_name: str,
    timestamp_ms: int | None = None,
    token: str | None = None,
) -> str:
    """Build ``{owner_id}/{timestamp}-{random_token}{extension}``."""
    timestamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    random_token = token if token is not None else secrets.token_hex(8)
    extension = PurePosixPath(original_name.replace("\\", "/")).suffix.lower()
    return f"{owner_id}/{timestamp}-{random_token}{extension}"


def processed_blob_key(owner_id: str, document_id: str) -> str:
    """Key of the extracted-text artifact written after a successful run."""
    return f"{owner_id}/processed/{document_id}.txt"
