"""
Resend email sender adapter - Implements EmailSender protocol over HTTP.

Renders the named HTML template and posts the message to the Resend
`/emails` endpoint. Attachments travel base64-encoded in the JSON body.
"""

import base64
import logging
from dataclasses import dataclass

import httpx
from jinja2 import TemplateError

from src.adapters.templating import render_email_html
from src.domain.exceptions import NotificationError
from src.domain.models import EmailMessage

logger = logging.getLogger(__name__)


@dataclass
class ResendEmailSender:
    """
    HTTPX-backed Resend client.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    api_key: str
    base_url: str
    http_client: httpx.Client
    timeout: float = 10.0

    @classmethod
    def create(cls, api_key: str, base_url: str, timeout: float = 10.0) -> "ResendEmailSender":
        """Create a sender with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.Client(),
            timeout=timeout,
        )

    def send(self, message: EmailMessage) -> None:
        """
        Deliver one message through Resend.

        Raises:
            NotificationError: If the template could not be rendered, the
                request failed, or Resend answered with a non-2xx status
        """
        try:
            html = render_email_html(message.template, dict(message.params))
        except TemplateError as e:
            raise NotificationError(f"Email template {message.template!r} failed") from e

        payload: dict[str, object] = {
            "from": message.sender,
            "to": [message.recipient],
            "subject": message.subject,
            "html": html,
        }
        if message.attachments:
            payload["attachments"] = [
                {
                    "filename": attachment.filename,
                    "content": base64.b64encode(attachment.content).decode("ascii"),
                    "content_type": attachment.content_type,
                }
                for attachment in message.attachments
            ]

        try:
            response = self.http_client.post(
                f"{self.base_url}/emails",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"Resend rejected email: status={e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise NotificationError("Resend request failed") from e

        logger.debug("Resend accepted email: status=%s", response.status_code)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.http_client.close()
