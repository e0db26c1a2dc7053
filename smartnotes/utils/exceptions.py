"""
Custom exception hierarchy for SmartNotes.

Provides structured error types for better error handling and debugging.
All exceptions inherit from SmartNotesError for easy catching.
"""


class SmartNotesError(Exception):
    """
    Base exception for all SmartNotes errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize SmartNotes error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class StoreError(SmartNotesError):
    """
    Base exception for store operations.
    Used for errors related to remote storage operations.
    """

    pass


class NoteStoreError(StoreError):
    """
    Note store operation errors.
    Raised when list/insert/update/delete against the note table fails.
    """

    pass


class BlobStoreError(StoreError):
    """
    Blob store operation errors.
    Raised when uploading an object or issuing its public URL fails.
    """

    pass


class ValidationError(SmartNotesError):
    """
    Validation errors.
    Raised when input validation fails or data is invalid.
    """

    pass


class ConfigurationError(SmartNotesError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class LLMError(SmartNotesError):
    """
    LLM operation errors.
    Raised when LLM operations fail (API errors, timeouts, etc.).
    """

    pass


class AuthenticationError(SmartNotesError):
    """
    Session errors.
    Raised when an operation needs an owner id and no user is signed in.
    """

    pass
