from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-related errors.

    All errors that inherit from UserError will have their messages
    displayed to the user. These errors should not contain any
    sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when no credential is presented or it does not identify a user."""

    def __init__(self, message: str = "Unauthorized access") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when a credential is present but insufficient for the operation."""

    def __init__(self, message: str = "Forbidden access") -> None:
        super().__init__(message)


class InvalidTokenError(AccessDeniedError):
    """Raised when a bearer token is expired, malformed or badly signed."""


class ValidationError(UserError):
    """Raised when user input fails validation."""


class InvalidIdError(ValidationError):
    """Raised when a resource identifier is malformed."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid ID: '{value}'")


class ConflictError(UserError):
    """Raised when a unique index rejects a write."""


class StorageError(Exception):
    """Raised when the blob store fails to persist an uploaded file.

    Not a UserError: the underlying message may describe infrastructure.
    """
