"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.

Request models deliberately carry no field constraints: every rule lives in
the domain validator so a bad submission gets the complete error map back
in one response.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegistrationRequest(BaseModel):
    """Request model for a registration submission."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    category_id: str = Field("", alias="categoryId", description="Selected category id")
    signature: str = Field("", description="Signature image as a data URI")
    photo: str = Field("", description="Participant photo as a data URI")


class RegistrationResponse(BaseModel):
    """Response model for a successful submission."""

    message: str
    record_id: str
    confirmation_sent: bool


class RegistrationOut(BaseModel):
    """Registration row for the admin list."""

    id: str
    name: str
    email: str
    phone: str
    category_id: str
    signature: str
    photo: str
    created_at: datetime


class PassResponse(BaseModel):
    """Response model for an on-demand pass email."""

    success: bool
    message: str


class CategoryRequest(BaseModel):
    """Request model for creating or replacing a category."""

    name: str = ""
    description: str = ""


class CategoryOut(BaseModel):
    id: str
    name: str
    description: str


class FieldErrors(BaseModel):
    """Validation failure body: summary plus every violated rule per field."""

    message: str
    errors: dict[str, list[str]]


class ValidationErrorResponse(BaseModel):
    detail: FieldErrors


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
