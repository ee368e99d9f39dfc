"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Valid registration payloads and stored records
- Mock port factories for the domain services
"""

from dataclasses import replace
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from src.domain.models import Category, RegistrationInput, RegistrationRecord
from src.domain.notifications import NotificationDispatcher
from src.domain.registration import RegistrationService

PHOTO = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQAAAQABAAD"
SIGNATURE = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAAB"


def make_input(**overrides: str) -> RegistrationInput:
    """Build a registration payload that passes validation."""
    data = RegistrationInput(
        name="Jo Lee",
        email="jo@example.com",
        phone="5551234567",
        category_id="cat1",
        signature=SIGNATURE,
        photo=PHOTO,
    )
    return replace(data, **overrides)


def make_record(record_id: str = "rec-1", **overrides: str) -> RegistrationRecord:
    """Build a stored registration record."""
    data = make_input(**overrides)
    return RegistrationRecord(
        id=record_id,
        name=data.name,
        email=data.email,
        phone=data.phone,
        category_id=data.category_id,
        signature=data.signature,
        photo=data.photo,
        created_at=datetime(2026, 3, 14, 9, 30, tzinfo=UTC),
    )


def stored(payload: RegistrationInput, record_id: str = "rec-1") -> RegistrationRecord:
    """Mimic the repository echoing back an inserted payload."""
    return RegistrationRecord(
        id=record_id,
        created_at=datetime(2026, 3, 14, 9, 30, tzinfo=UTC),
        **vars(payload),
    )


@pytest.fixture
def repository() -> Mock:
    """Registration repository double that stores whatever it is given."""
    repo = Mock()
    repo.insert.side_effect = lambda payload: stored(payload)
    repo.get_by_id.return_value = None
    return repo


@pytest.fixture
def categories() -> Mock:
    repo = Mock()
    repo.get_by_id.return_value = Category(
        id="cat1", name="VIP", description="Front row seating and lounge access"
    )
    return repo


@pytest.fixture
def email_sender() -> Mock:
    return Mock()


@pytest.fixture
def renderer() -> Mock:
    renderer = Mock()
    renderer.render.return_value = b"%PDF-1.7 pass"
    return renderer


@pytest.fixture
def dispatcher(email_sender: Mock) -> NotificationDispatcher:
    return NotificationDispatcher(email_sender=email_sender, sender_address="events@example.com")


@pytest.fixture
def service(
    repository: Mock,
    categories: Mock,
    dispatcher: NotificationDispatcher,
    renderer: Mock,
) -> RegistrationService:
    return RegistrationService(
        repository=repository,
        categories=categories,
        dispatcher=dispatcher,
        renderer=renderer,
    )
