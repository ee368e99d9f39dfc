"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
workflow failures without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class PersistenceError(RegistrationError):
    """Store write or read failed. The driver error is chained as __cause__."""

    pass


class NotFoundError(RegistrationError):
    """Requested registration or category does not exist."""

    pass


class NotificationError(RegistrationError):
    """Email delivery failed."""

    pass


class PassRenderingError(NotificationError):
    """Registration pass document could not be generated."""

    pass


class CategoryValidationFailed(RegistrationError):
    """Category payload violates field rules."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__("Category validation failed")
        self.errors = errors
