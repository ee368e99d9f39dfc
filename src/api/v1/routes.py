"""
API v1 routes.

Defines REST endpoints for the event registration API:
- Registrations: public submission, admin list, on-demand pass email
- Categories: admin CRUD
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_category_service, get_registration_service
from src.api.models import (
    CategoryOut,
    CategoryRequest,
    ErrorResponse,
    PassResponse,
    RegistrationOut,
    RegistrationRequest,
    RegistrationResponse,
    ValidationErrorResponse,
)
from src.domain.categories import CategoryService
from src.domain.exceptions import CategoryValidationFailed, NotFoundError, PersistenceError
from src.domain.models import Category, CategoryInput, PassFailureReason, RegistrationInput
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])

STORE_UNAVAILABLE = "The registration store is unavailable. Please try again later."


def _store_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=STORE_UNAVAILABLE,
    )


def _request_field_errors(errors: dict[str, list[str]]) -> dict[str, list[str]]:
    """Key field errors by the names the client submitted (e.g. categoryId)."""
    fields = RegistrationRequest.model_fields
    return {
        (fields[name].alias or name) if name in fields else name: messages
        for name, messages in errors.items()
    }


def _category_out(category: Category) -> CategoryOut:
    return CategoryOut(id=category.id, name=category.name, description=category.description)


@router.post(
    "/registrations",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"model": ValidationErrorResponse, "description": "Field validation failed"},
        503: {"model": ErrorResponse, "description": "Registration could not be saved"},
    },
    summary="Submit a registration",
    description="Validate and store a participant registration, then send a "
    "confirmation email. Email delivery problems never fail the submission.",
)
async def submit_registration(
    request_data: RegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResponse:
    """
    Register a participant.

    - **name**: At least 2 characters
    - **email**: Valid email address
    - **phone**: 10 to 15 characters
    - **categoryId**: Selected category
    - **signature**, **photo**: Image data URIs
    """
    result = service.submit_registration(
        RegistrationInput(
            name=request_data.name,
            email=request_data.email,
            phone=request_data.phone,
            category_id=request_data.category_id,
            signature=request_data.signature,
            photo=request_data.photo,
        )
    )

    if result.errors is not None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": result.message,
                "errors": _request_field_errors(result.errors),
            },
        )
    if not result.success or result.record_id is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=result.message,
        )

    return RegistrationResponse(
        message=result.message,
        record_id=result.record_id,
        confirmation_sent=result.confirmation_sent,
    )


@router.get(
    "/registrations",
    response_model=list[RegistrationOut],
    responses={503: {"model": ErrorResponse, "description": "Store unavailable"}},
    summary="List registrations",
    description="All registrations, newest first.",
)
async def list_registrations(
    service: RegistrationService = Depends(get_registration_service),
) -> list[RegistrationOut]:
    try:
        records = service.list_registrations()
    except PersistenceError:
        raise _store_unavailable() from None

    return [
        RegistrationOut(
            id=record.id,
            name=record.name,
            email=record.email,
            phone=record.phone,
            category_id=record.category_id,
            signature=record.signature,
            photo=record.photo,
            created_at=record.created_at,
        )
        for record in records
    ]


@router.post(
    "/registrations/{record_id}/pass",
    response_model=PassResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Registration not found"},
        502: {"model": ErrorResponse, "description": "Pass could not be generated or emailed"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Email the registration pass",
    description="Generate the one-page PDF pass for a registration and email it "
    "to the participant.",
)
async def send_pass(
    record_id: str,
    service: RegistrationService = Depends(get_registration_service),
) -> PassResponse:
    try:
        result = service.send_pass_for(record_id)
    except PersistenceError:
        raise _store_unavailable() from None

    if result.reason == PassFailureReason.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=result.message)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.message)

    return PassResponse(success=True, message=result.message)


@router.get(
    "/categories",
    response_model=list[CategoryOut],
    responses={503: {"model": ErrorResponse, "description": "Store unavailable"}},
    summary="List categories",
)
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryOut]:
    try:
        categories = service.list_categories()
    except PersistenceError:
        raise _store_unavailable() from None
    return [_category_out(category) for category in categories]


@router.post(
    "/categories",
    response_model=CategoryOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"model": ValidationErrorResponse, "description": "Field validation failed"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Add a category",
)
async def add_category(
    request_data: CategoryRequest,
    service: CategoryService = Depends(get_category_service),
) -> CategoryOut:
    try:
        category = service.add_category(
            CategoryInput(name=request_data.name, description=request_data.description)
        )
    except CategoryValidationFailed as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Validation failed. Please check your input.", "errors": e.errors},
        ) from None
    except PersistenceError:
        raise _store_unavailable() from None
    return _category_out(category)


@router.put(
    "/categories/{category_id}",
    response_model=CategoryOut,
    responses={
        404: {"model": ErrorResponse, "description": "Category not found"},
        422: {"model": ValidationErrorResponse, "description": "Field validation failed"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Update a category",
)
async def update_category(
    category_id: str,
    request_data: CategoryRequest,
    service: CategoryService = Depends(get_category_service),
) -> CategoryOut:
    try:
        category = service.update_category(
            category_id,
            CategoryInput(name=request_data.name, description=request_data.description),
        )
    except CategoryValidationFailed as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Validation failed. Please check your input.", "errors": e.errors},
        ) from None
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found.",
        ) from None
    except PersistenceError:
        raise _store_unavailable() from None
    return _category_out(category)


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse, "description": "Category not found"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Delete a category",
)
async def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> Response:
    try:
        service.delete_category(category_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found.",
        ) from None
    except PersistenceError:
        raise _store_unavailable() from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
