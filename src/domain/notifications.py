"""
Notification dispatcher - Builds transactional emails and absorbs delivery failures.

Two messages exist:
- Confirmation: sent automatically right after a registration is persisted.
- Pass: sent on demand by an admin, with the generated PDF attached.

Delivery failures never escape this module. The dispatcher logs them and
returns a FAILED NotificationOutcome; whether that outcome is fatal is the
caller's decision (it is not for submissions, it is for pass sends).

Recipient override: outside production every message goes to a single
operator address. The override is resolved once from settings and passed
in at construction; nothing else in the codebase checks the environment.
"""

import logging
from dataclasses import dataclass

from .models import (
    Attachment,
    EmailMessage,
    NotificationOutcome,
    NotificationStatus,
    RegistrationRecord,
)
from .ports import EmailSender

logger = logging.getLogger(__name__)

CONFIRMATION_TEMPLATE = "registration_confirmation"
CONFIRMATION_SUBJECT = "Your registration is confirmed"
PASS_TEMPLATE = "registration_pass"
PASS_SUBJECT = "Your Event Registration Pass"
PASS_FILENAME = "registration-pass.pdf"


@dataclass
class NotificationDispatcher:
    """
    Sends registration emails through an EmailSender port.

    Attributes:
        email_sender: Delivery adapter
        sender_address: From header for every message
        override_recipient: When set, replaces every recipient address
    """

    email_sender: EmailSender
    sender_address: str
    override_recipient: str | None = None

    def send_confirmation(self, record: RegistrationRecord) -> NotificationOutcome:
        """Send the post-registration confirmation email."""
        message = EmailMessage(
            sender=self.sender_address,
            recipient=self._recipient_for(record),
            subject=CONFIRMATION_SUBJECT,
            template=CONFIRMATION_TEMPLATE,
            params={"name": record.name},
        )
        return self._deliver(message, record)

    def send_pass(self, record: RegistrationRecord, attachment: bytes) -> NotificationOutcome:
        """Send the registration pass email with the rendered PDF attached."""
        message = EmailMessage(
            sender=self.sender_address,
            recipient=self._recipient_for(record),
            subject=PASS_SUBJECT,
            template=PASS_TEMPLATE,
            params={"name": record.name},
            attachments=(Attachment(filename=PASS_FILENAME, content=attachment),),
        )
        return self._deliver(message, record)

    def _recipient_for(self, record: RegistrationRecord) -> str:
        return self.override_recipient or record.email

    def _deliver(self, message: EmailMessage, record: RegistrationRecord) -> NotificationOutcome:
        try:
            self.email_sender.send(message)
        except Exception as e:
            logger.exception(
                "Email delivery failed: template=%s registration=%s",
                message.template,
                record.id,
            )
            return NotificationOutcome(
                status=NotificationStatus.FAILED,
                recipient=message.recipient,
                error=str(e) or type(e).__name__,
            )

        logger.info(
            "Email sent: template=%s registration=%s",
            message.template,
            record.id,
        )
        return NotificationOutcome(status=NotificationStatus.SENT, recipient=message.recipient)
