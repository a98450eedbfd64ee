"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a note cannot be found."""

    def __init__(self, message: str = "Note not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when note input fails validation."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class StoreError(ApplicationError):
    """Base class for persistent store failures."""

    def __init__(self, message: str = "Store error", code: str = "STORE_ERROR") -> None:
        super().__init__(message, code=code)


class CorruptDataError(StoreError):
    """Raised when persisted note data cannot be parsed."""

    def __init__(self, message: str = "Stored data is corrupt") -> None:
        super().__init__(message, code="STORE_CORRUPT_DATA")


class StoreReadError(StoreError):
    """Raised when the backend cannot be read at all."""

    def __init__(self, message: str = "Store read failed") -> None:
        super().__init__(message, code="STORE_READ_FAILURE")


class WriteFailureError(StoreError):
    """Raised when the backend rejects a write (quota, permissions, I/O)."""

    def __init__(self, message: str = "Store write failed") -> None:
        super().__init__(message, code="STORE_WRITE_FAILURE")
