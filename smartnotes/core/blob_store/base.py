"""
Abstract base class for blob storage.
Used only for avatar images; notes never touch it.
"""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Abstract base for object storage with public URL issuance."""

    @abstractmethod
    async def upload(self, path: str, data: bytes) -> None:
        """
        Store an object.

        Args:
            path: Object path inside the bucket (e.g. "user_1/1700000000000.png")
            data: Raw bytes

        Raises:
            BlobStoreError: If the object cannot be stored
        """
        pass

    @abstractmethod
    def public_url(self, path: str) -> str:
        """
        Return the public URL of an object.

        Args:
            path: Object path inside the bucket
        """
        pass
