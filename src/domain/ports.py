"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Protocol

from .models import (
    Category,
    CategoryInput,
    EmailMessage,
    PassFields,
    RegistrationInput,
    RegistrationRecord,
)


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def insert(self, payload: RegistrationInput) -> RegistrationRecord:
        """
        Append a new registration record.

        The id and creation timestamp are assigned by the store, not the caller.

        Args:
            payload: Validated registration fields

        Returns:
            The stored record, including its assigned id

        Raises:
            PersistenceError: If the write did not happen
        """
        ...

    def get_by_id(self, record_id: str) -> RegistrationRecord | None:
        """
        Read back a registration record.

        Returns:
            The record, or None if no record has that id
        """
        ...

    def list_recent(self) -> list[RegistrationRecord]:
        """Return all registrations, newest first."""
        ...


class CategoryRepository(Protocol):
    """Port interface for category persistence."""

    def list_all(self) -> list[Category]: ...

    def get_by_id(self, category_id: str) -> Category | None: ...

    def add(self, payload: CategoryInput) -> Category: ...

    def update(self, category_id: str, payload: CategoryInput) -> Category | None:
        """Returns None if the category does not exist."""
        ...

    def delete(self, category_id: str) -> bool:
        """Returns False if the category does not exist."""
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, message: EmailMessage) -> None:
        """
        Hand a transactional email to the delivery provider.

        Args:
            message: Fully addressed message with template name and params

        Raises:
            NotificationError: If the provider rejected or never received it
        """
        ...


class PassRenderer(Protocol):
    """Port interface for registration pass document generation."""

    def render(self, fields: PassFields) -> bytes:
        """
        Render a one-page pass document.

        Raises:
            PassRenderingError: If the document could not be produced
        """
        ...
