"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging outgoing messages for local development.
"""

import logging

from src.domain.models import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - never contacts a mail provider.
    """

    def send(self, message: EmailMessage) -> None:
        """
        Log the message envelope to console (simulates email delivery).

        Attachment bodies and template params are not logged; they can
        hold full image data URIs.

        Args:
            message: Addressed message from the notification dispatcher
        """
        logger.info(
            "[EMAIL] To: %s Subject: %s Template: %s Attachments: %d",
            message.recipient,
            message.subject,
            message.template,
            len(message.attachments),
        )
