"""
Profile Service - avatar uploads for the signed-in user.

Independent of the note engine: it only touches the blob store and the
session's user profile.
"""

from pathlib import PurePosixPath

from smartnotes.core.blob_store.base import BlobStore
from smartnotes.models.session import Session, UserProfile
from smartnotes.utils.clock import now_ms
from smartnotes.utils.exceptions import AuthenticationError, BlobStoreError, ValidationError
from smartnotes.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_AVATAR_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp"})


class ProfileService:
    """Uploads avatars and records their public URL on the session profile."""

    def __init__(self, blob_store: BlobStore):
        self.blob_store = blob_store

    @staticmethod
    def avatar_path(user_id: str, filename: str, timestamp_ms: int) -> str:
        """
        Build the object path for an avatar: ``{user_id}/{epoch_ms}.{ext}``.

        Raises:
            ValidationError: If the file has no supported image extension
        """
        extension = PurePosixPath(filename).suffix.lstrip(".").lower()
        if extension not in ALLOWED_AVATAR_EXTENSIONS:
            raise ValidationError(
                f"Unsupported avatar file type: {filename!r}",
                context={"allowed": sorted(ALLOWED_AVATAR_EXTENSIONS)},
            )
        return f"{user_id}/{timestamp_ms}.{extension}"

    async def upload_avatar(self, session: Session, filename: str, data: bytes) -> UserProfile:
        """
        Upload an avatar and attach its public URL to the session user.

        Args:
            session: Session of the signed-in user
            filename: Original file name (used for the extension)
            data: Image bytes

        Returns:
            Updated user profile (also stored on the session)

        Raises:
            AuthenticationError: If nobody is signed in
            ValidationError: If the file type is not supported or data is empty
            BlobStoreError: If the upload fails
        """
        if session.user is None:
            raise AuthenticationError("User not authenticated")
        if not data:
            raise ValidationError("Avatar file is empty")

        path = self.avatar_path(session.user.id, filename, now_ms())

        try:
            await self.blob_store.upload(path, data)
            public_url = self.blob_store.public_url(path)
        except BlobStoreError as e:
            logger.error(
                "Error uploading avatar",
                extra={"user_id": session.user.id, "path": path, "error": str(e)},
            )
            raise

        profile = session.user.model_copy(update={"avatar_url": public_url})
        session.user = profile
        logger.info("Avatar updated", extra={"user_id": profile.id})
        return profile
