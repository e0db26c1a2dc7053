"""
Filesystem blob store.
"""

import asyncio
from pathlib import Path, PurePosixPath

from smartnotes.core.blob_store.base import BlobStore
from smartnotes.utils.exceptions import BlobStoreError, ValidationError


class LocalBlobStore(BlobStore):
    """Stores objects under ``root_dir/bucket`` and serves them from ``public_base_url``."""

    def __init__(self, root_dir: str, bucket: str = "avatars", public_base_url: str = ""):
        self.root = Path(root_dir) / bucket
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise ValidationError(f"Invalid object path: {path!r}")
        return self.root.joinpath(*relative.parts)

    async def upload(self, path: str, data: bytes) -> None:
        target = self._resolve(path)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise BlobStoreError(f"Failed to upload {path}: {e}", context={"path": path}) from e

    def public_url(self, path: str) -> str:
        self._resolve(path)
        return f"{self.public_base_url}/{self.bucket}/{path}"
