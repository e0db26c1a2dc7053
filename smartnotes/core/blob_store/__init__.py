"""
Blob storage abstraction for avatar uploads.
"""

from smartnotes.core.blob_store.base import BlobStore
from smartnotes.core.blob_store.local import LocalBlobStore

__all__ = [
    "BlobStore",
    "LocalBlobStore",
]
