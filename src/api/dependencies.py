"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.

Long-lived adapters (connection pool, email sender, pass renderer) are
built once during app lifespan and stored on app.state; services are
assembled per request from them.
"""

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.email.console import ConsoleEmailSender
from src.adapters.email.resend import ResendEmailSender
from src.adapters.pdf.renderer import WeasyPrintPassRenderer
from src.adapters.repository.postgres import (
    PostgresCategoryRepository,
    PostgresRegistrationRepository,
)
from src.config.settings import Settings, get_settings
from src.domain.categories import CategoryService
from src.domain.notifications import NotificationDispatcher
from src.domain.ports import EmailSender, PassRenderer
from src.domain.registration import RegistrationService


def build_email_sender(settings: Settings) -> EmailSender:
    """Select the email adapter named by settings.email_backend."""
    if settings.email_backend == "resend":
        return ResendEmailSender.create(
            api_key=settings.resend_api_key,
            base_url=settings.resend_base_url,
            timeout=settings.email_timeout_seconds,
        )
    return ConsoleEmailSender()


def build_dispatcher(settings: Settings, email_sender: EmailSender) -> NotificationDispatcher:
    """
    Create the notification dispatcher.

    This is the only place the environment flag reaches the email path.
    """
    return NotificationDispatcher(
        email_sender=email_sender,
        sender_address=settings.email_from,
        override_recipient=settings.override_recipient,
    )


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_email_sender(request: Request) -> EmailSender:
    """Get the email sender built at startup (console sender if none was built)."""
    return getattr(request.app.state, "email_sender", None) or ConsoleEmailSender()


def get_pass_renderer(request: Request) -> PassRenderer:
    return getattr(request.app.state, "pass_renderer", None) or WeasyPrintPassRenderer()


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repositories, notification dispatcher and pass
    renderer for the domain service.
    """
    pool = get_pool(request)
    dispatcher = build_dispatcher(get_settings(), get_email_sender(request))
    return RegistrationService(
        repository=PostgresRegistrationRepository(pool),
        categories=PostgresCategoryRepository(pool),
        dispatcher=dispatcher,
        renderer=get_pass_renderer(request),
    )


def get_category_service(request: Request) -> CategoryService:
    """Create category service backed by the app's connection pool."""
    return CategoryService(repository=PostgresCategoryRepository(get_pool(request)))
