from pathlib import Path

from docworker.storage.base import BaseBlobStore
from docworker.storage.exceptions import BlobNotFoundError, BlobStoreError


class LocalBlobStore(BaseBlobStore):
    """Stores blobs as files below a root directory.

    Locations are the root-relative keys.
    """

    DEFAULT_ROOT = Path("/app/files")

    def __init__(self, root: Path | None = None) -> None:
        self._root = (root if root is not None else self.DEFAULT_ROOT).resolve()

    def put(self, data: bytes, key: str) -> str:
        path = self._resolve_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise BlobStoreError(f"Cannot write blob '{key}': {exc}") from exc
        return key

    def get(self, location: str) -> bytes:
        path = self._resolve_path(location)
        if not path.is_file():
            raise BlobNotFoundError(f"Blob not found: {location}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise BlobStoreError(f"Cannot read blob '{location}': {exc}") from exc

    def delete(self, location: str) -> None:
        path = self._resolve_path(location)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise BlobStoreError(f"Cannot delete blob '{location}': {exc}") from exc

    def _resolve_path(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if not key or not path.is_relative_to(self._root) or path == self._root:
            raise BlobStoreError(f"Invalid blob key '{key}'")
        return path
