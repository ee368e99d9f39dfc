"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core of the event registration system: field
validation, the validate -> persist -> notify submission workflow, the
on-demand pass email, and category management. It defines its own port
interfaces for infrastructure abstraction, ensuring true hexagonal
architecture decoupling.
"""

from .categories import CategoryService
from .exceptions import (
    CategoryValidationFailed,
    NotFoundError,
    NotificationError,
    PassRenderingError,
    PersistenceError,
    RegistrationError,
)
from .models import (
    Category,
    CategoryInput,
    PassResult,
    RegistrationInput,
    RegistrationRecord,
    WorkflowResult,
    WorkflowStatus,
)
from .notifications import NotificationDispatcher
from .ports import CategoryRepository, EmailSender, PassRenderer, RegistrationRepository
from .registration import RegistrationService
from .validation import validate_category, validate_registration

__all__ = [
    "Category",
    "CategoryInput",
    "CategoryRepository",
    "CategoryService",
    "CategoryValidationFailed",
    "EmailSender",
    "NotFoundError",
    "NotificationDispatcher",
    "NotificationError",
    "PassRenderer",
    "PassRenderingError",
    "PassResult",
    "PersistenceError",
    "RegistrationError",
    "RegistrationInput",
    "RegistrationRecord",
    "RegistrationRepository",
    "RegistrationService",
    "WorkflowResult",
    "WorkflowStatus",
    "validate_category",
    "validate_registration",
]
