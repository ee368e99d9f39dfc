"""
Domain models - Plain dataclasses shared by the core and its adapters.

Nothing in here touches a framework; the API layer converts these to and
from pydantic models at the edge.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class RegistrationInput:
    """Caller-supplied registration form data."""

    name: str
    email: str
    phone: str
    category_id: str
    signature: str
    photo: str


@dataclass(frozen=True)
class RegistrationRecord:
    """Persisted registration. Never mutated after insert."""

    id: str
    name: str
    email: str
    phone: str
    category_id: str
    signature: str
    photo: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Admission tier referenced by registrations."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class CategoryInput:
    name: str
    description: str


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating a payload.

    Valid outcomes carry the payload and an empty error map; invalid
    outcomes carry every violated rule keyed by field name.
    """

    payload: RegistrationInput | CategoryInput | None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class WorkflowStatus(str, Enum):
    """Terminal state of a registration submission."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class WorkflowResult:
    """
    Outcome returned by submit_registration().

    A failure carries either the full field error map (validation) or a
    top-level message only (persistence), never a partial map.
    """

    status: WorkflowStatus
    message: str
    record_id: str | None = None
    errors: dict[str, list[str]] | None = None
    confirmation_sent: bool = False

    @property
    def success(self) -> bool:
        return self.status == WorkflowStatus.SUCCESS

    @classmethod
    def succeeded(cls, message: str, record_id: str, confirmation_sent: bool) -> "WorkflowResult":
        return cls(
            status=WorkflowStatus.SUCCESS,
            message=message,
            record_id=record_id,
            confirmation_sent=confirmation_sent,
        )

    @classmethod
    def invalid(cls, message: str, errors: dict[str, list[str]]) -> "WorkflowResult":
        return cls(status=WorkflowStatus.FAILURE, message=message, errors=errors)

    @classmethod
    def failed(cls, message: str) -> "WorkflowResult":
        return cls(status=WorkflowStatus.FAILURE, message=message)


class PassFailureReason(Enum):
    """Why send_pass_for() did or did not deliver a pass."""

    SENT = "sent"
    NOT_FOUND = "not_found"
    RENDER_FAILED = "render_failed"
    DELIVERY_FAILED = "delivery_failed"


@dataclass(frozen=True)
class PassResult:
    success: bool
    message: str
    reason: PassFailureReason


class NotificationStatus(Enum):
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class NotificationOutcome:
    """Recorded result of one email hand-off. Failures are data, not exceptions."""

    status: NotificationStatus
    recipient: str
    error: str | None = None

    @property
    def sent(self) -> bool:
        return self.status == NotificationStatus.SENT


@dataclass(frozen=True)
class Attachment:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


@dataclass(frozen=True)
class EmailMessage:
    """Transactional email handed to an EmailSender."""

    sender: str
    recipient: str
    subject: str
    template: str
    params: Mapping[str, str]
    attachments: tuple[Attachment, ...] = ()


@dataclass(frozen=True)
class PassFields:
    """Fields printed on the one-page registration pass."""

    name: str
    phone: str
    category: str
    photo: str
    signature: str
