"""
Registration domain service - Submission workflow and on-demand pass sending.

Submission Workflow
===================

States:
- RECEIVED:  raw form data handed in by the caller
- VALIDATED: every field rule passed
- PERSISTED: record durably written, id assigned
- NOTIFIED:  confirmation email attempted (sent or failed)

Transitions:
    RECEIVED  -> DONE(failure)  (any field rule violated; nothing written, nothing sent)
    RECEIVED  -> VALIDATED
    VALIDATED -> DONE(failure)  (store write failed; nothing sent)
    VALIDATED -> PERSISTED
    PERSISTED -> NOTIFIED -> DONE(success)

Once PERSISTED the result is success no matter what happens to the email.
A persisted record is never rolled back.

Pass Sending
============

send_pass_for() is a separate two-step flow: read the record back by id,
then render the pass and email it. Here the email is the whole point, so a
rendering or delivery failure is reported as the operation's failure.
"""

import logging
from dataclasses import dataclass

from .exceptions import PersistenceError
from .models import (
    PassFailureReason,
    PassFields,
    PassResult,
    RegistrationInput,
    RegistrationRecord,
    WorkflowResult,
)
from .notifications import NotificationDispatcher
from .ports import CategoryRepository, PassRenderer, RegistrationRepository
from .validation import validate_registration

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed. Please check your input."
PERSISTENCE_FAILED_MESSAGE = "We could not save your registration. Please try again later."
CONFIRMATION_SENT_SUFFIX = " A confirmation email has been sent."


@dataclass
class RegistrationService:
    """
    Domain service for event registration.

    Sequences validation, persistence and notification for a submission,
    and drives the admin-triggered pass email.
    """

    repository: RegistrationRepository
    categories: CategoryRepository
    dispatcher: NotificationDispatcher
    renderer: PassRenderer

    def submit_registration(self, data: RegistrationInput) -> WorkflowResult:
        """
        Validate, persist and confirm a registration.

        Args:
            data: Raw form data

        Returns:
            WorkflowResult: failure with field errors, failure with a
            top-level message, or success with the new record id
        """
        outcome = validate_registration(data)
        if not outcome.is_valid:
            logger.info("Registration rejected: fields=%s", sorted(outcome.errors))
            return WorkflowResult.invalid(VALIDATION_FAILED_MESSAGE, outcome.errors)

        try:
            record = self.repository.insert(data)
        except PersistenceError:
            logger.exception("Registration could not be persisted")
            return WorkflowResult.failed(PERSISTENCE_FAILED_MESSAGE)

        logger.info("Registration persisted: id=%s category=%s", record.id, record.category_id)

        notification = self.dispatcher.send_confirmation(record)
        if not notification.sent:
            logger.warning(
                "Registration %s kept without confirmation email: %s",
                record.id,
                notification.error,
            )

        message = f"Thank you for registering, {data.name}!"
        if notification.sent:
            message += CONFIRMATION_SENT_SUFFIX
        return WorkflowResult.succeeded(message, record.id, confirmation_sent=notification.sent)

    def send_pass_for(self, record_id: str) -> PassResult:
        """
        Render and email the registration pass for a stored record.

        Args:
            record_id: Id returned by submit_registration()

        Returns:
            PassResult with success flag, message and reason

        Raises:
            PersistenceError: If the store could not be read
        """
        record = self.repository.get_by_id(record_id)
        if record is None:
            return PassResult(
                success=False,
                message="Registration not found.",
                reason=PassFailureReason.NOT_FOUND,
            )

        try:
            document = self.renderer.render(self._pass_fields(record))
        except Exception:
            logger.exception("Pass rendering failed: registration=%s", record_id)
            return PassResult(
                success=False,
                message="The registration pass could not be generated.",
                reason=PassFailureReason.RENDER_FAILED,
            )

        notification = self.dispatcher.send_pass(record, document)
        if not notification.sent:
            return PassResult(
                success=False,
                message="The registration pass could not be emailed.",
                reason=PassFailureReason.DELIVERY_FAILED,
            )

        return PassResult(
            success=True,
            message=f"Registration pass sent to {notification.recipient}.",
            reason=PassFailureReason.SENT,
        )

    def list_registrations(self) -> list[RegistrationRecord]:
        """All registrations for the admin view, newest first."""
        return self.repository.list_recent()

    def _pass_fields(self, record: RegistrationRecord) -> PassFields:
        """
        Build the printed fields, resolving the category to its display name.

        Categories are managed separately and may have been deleted since
        the registration was made; the raw id is printed in that case.
        """
        category = self.categories.get_by_id(record.category_id)
        return PassFields(
            name=record.name,
            phone=record.phone,
            category=category.name if category is not None else record.category_id,
            photo=record.photo,
            signature=record.signature,
        )
