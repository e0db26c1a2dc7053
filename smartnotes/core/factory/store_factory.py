"""
Factories for creating note and blob store backends.
"""

from smartnotes.config import BlobStoreConfig, StoreConfig
from smartnotes.core.blob_store.base import BlobStore
from smartnotes.core.blob_store.local import LocalBlobStore
from smartnotes.core.note_store.base import NoteStore
from smartnotes.core.note_store.sqlite_store import SQLiteNoteStore


class NoteStoreFactory:
    """Factory for creating note store backends from configuration."""

    @staticmethod
    def create(config: StoreConfig) -> NoteStore:
        """
        Create note store from configuration.

        Args:
            config: Store configuration

        Returns:
            Note store instance (not yet initialized)

        Raises:
            ValueError: If backend is not supported
        """
        if config.backend == "sqlite":
            return SQLiteNoteStore(db_path=config.path)
        else:
            raise ValueError(f"Unsupported note store backend: {config.backend}")


class BlobStoreFactory:
    """Factory for creating the avatar blob store."""

    @staticmethod
    def create(config: BlobStoreConfig) -> BlobStore:
        return LocalBlobStore(
            root_dir=config.root_dir,
            bucket=config.bucket,
            public_base_url=config.public_base_url,
        )
