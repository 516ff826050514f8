"""
Domain-level exceptions.

These exceptions represent business rule violations and collaborator failures.
They are mapped to HTTP responses in the API layer and to exit codes in the CLI.
"""


class DomainException(Exception):
    """Base exception for all domain-level errors."""
    pass


class ValidationError(DomainException):
    """Raised when a trigger parameter is missing or invalid."""
    pass


class NotFoundError(DomainException):
    """Base exception for entities not found."""
    pass


class ProfileNotFoundError(NotFoundError):
    """Raised when a profile is not found."""

    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Profile {profile_id} not found")


class ProcessingError(DomainException):
    """Base exception for processing errors."""
    pass


class UpstreamError(ProcessingError):
    """Raised when the embedding provider fails, times out or returns bad data."""

    def __init__(self, message: str, *, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)


class PersistenceError(ProcessingError):
    """Raised when reading from or writing to the profile store fails."""
    pass


class ConfigurationError(DomainException):
    """Raised when configuration is invalid or missing."""
    pass


__all__ = [
    "DomainException",
    "ValidationError",
    "NotFoundError",
    "ProfileNotFoundError",
    "ProcessingError",
    "UpstreamError",
    "PersistenceError",
    "ConfigurationError",
]
