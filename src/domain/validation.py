"""
Field validation for registration and category payloads.

Every rule runs on every call; violations are collected per field rather
than stopping at the first one, so the caller can show all of them at once.
"""

from email_validator import EmailNotValidError, validate_email

from .models import CategoryInput, RegistrationInput, ValidationOutcome

NAME_MIN_LENGTH = 2
PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 15
CATEGORY_DESCRIPTION_MIN_LENGTH = 10


def _is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_registration(data: RegistrationInput) -> ValidationOutcome:
    """
    Validate a registration form payload.

    Pure function: no I/O, no hidden state. Field order in the returned
    error map follows the form order.
    """
    errors: dict[str, list[str]] = {}

    def add(field_name: str, message: str) -> None:
        errors.setdefault(field_name, []).append(message)

    if len(data.name) < NAME_MIN_LENGTH:
        add("name", "Name must be at least 2 characters.")
    if not _is_email(data.email):
        add("email", "Please enter a valid email address.")
    if len(data.phone) < PHONE_MIN_LENGTH:
        add("phone", "Please enter a valid phone number.")
    if len(data.phone) > PHONE_MAX_LENGTH:
        add("phone", "Phone number must be at most 15 characters.")
    if not data.category_id:
        add("category_id", "Please select a category.")
    if not data.signature:
        add("signature", "Signature is required.")
    if not data.photo:
        add("photo", "Photo is required.")

    if errors:
        return ValidationOutcome(payload=None, errors=errors)
    return ValidationOutcome(payload=data)


def validate_category(data: CategoryInput) -> ValidationOutcome:
    """Validate the two-field category schema used by the admin panel."""
    errors: dict[str, list[str]] = {}
    if len(data.name) < NAME_MIN_LENGTH:
        errors["name"] = ["Name must be at least 2 characters."]
    if len(data.description) < CATEGORY_DESCRIPTION_MIN_LENGTH:
        errors["description"] = ["Description must be at least 10 characters."]

    if errors:
        return ValidationOutcome(payload=None, errors=errors)
    return ValidationOutcome(payload=data)
