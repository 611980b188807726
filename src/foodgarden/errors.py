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
    """Raised when the access gate rejects a request.

    `reason` is a machine-readable code: no_token, invalid_token or expired_token.
    """

    def __init__(self, message: str = "Authentication failed", reason: str = "invalid_token") -> None:
        super().__init__(message)
        self.reason = reason


class ValidationError(UserError):
    """Raised when user input fails validation."""


class StoreError(Exception):
    """Raised when a document store call fails."""


class ConfigError(Exception):
    """Raised when the service cannot start, e.g. the document store is unreachable."""
