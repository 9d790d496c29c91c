"""Contact directory API — list/search, create, read, update, delete.

Every response uses the ``{success, message?, data?, error?}`` envelope.
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from contact_directory.core.database import get_db
from contact_directory.models.contact import Contact
from contact_directory.schemas.contacts import ApiResponse, ContactPayload, ContactResponse
from contact_directory.services.contacts import (
    ContactError,
    ContactService,
    ContactValidationError,
    InvalidEmailError,
    InvalidNameError,
    InvalidPhoneError,
    SqlAlchemyContactStore,
    StoreError,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    return ContactService(SqlAlchemyContactStore(db))


def _serialize(contact: Contact) -> dict:
    return ContactResponse.model_validate(contact).model_dump(mode="json", by_alias=True)


def _envelope(status_code: int = 200, **fields) -> JSONResponse:
    body = ApiResponse(**fields).model_dump(mode="json", exclude_unset=True)
    return JSONResponse(status_code=status_code, content=body)


def _error_response(exc: ContactError, failure_message: str) -> JSONResponse:
    """Render a service error; store failures keep the backend message in ``error``."""
    if isinstance(exc, StoreError):
        return _envelope(exc.status_code, success=False, message=failure_message, error=exc.detail)
    return _envelope(exc.status_code, success=False, message=exc.message)


_FIELD_ERRORS: dict[str, type[ContactValidationError]] = {
    "name": InvalidNameError,
    "phone": InvalidPhoneError,
    "email": InvalidEmailError,
}


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies in the envelope as a 400.

    A bad name, phone or email value gets that field's validation message;
    anything else (unparseable JSON, a non-object body) gets a generic one.
    """
    for error in exc.errors():
        loc = error.get("loc", ())
        if len(loc) >= 2 and loc[0] == "body" and loc[1] in _FIELD_ERRORS:
            return _envelope(400, success=False, message=_FIELD_ERRORS[loc[1]].message)
    return _envelope(400, success=False, message="Invalid request body")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/")
def list_contacts(
    search: str | None = Query(None, description="Free-text match on name, phone or email"),
    service: ContactService = Depends(get_contact_service),
):
    """List all contacts, or those whose name, phone or email contains ``search``."""
    try:
        contacts = service.list_contacts(search)
    except ContactError as exc:
        return _error_response(exc, "Failed to fetch contacts")
    return _envelope(success=True, data=[_serialize(c) for c in contacts])


@router.post("/")
def create_contact(
    payload: ContactPayload,
    service: ContactService = Depends(get_contact_service),
):
    try:
        contact = service.create_contact(payload.name, payload.phone, payload.email)
    except ContactError as exc:
        return _error_response(exc, "Failed to create contact")
    return _envelope(
        201,
        success=True,
        message="Contact created successfully",
        data=_serialize(contact),
    )


@router.get("/{contact_id}")
def get_contact(contact_id: str, service: ContactService = Depends(get_contact_service)):
    """Get a single contact by ID. Malformed IDs are reported as not found."""
    try:
        contact = service.get_contact(contact_id)
    except ContactError as exc:
        return _error_response(exc, "Failed to fetch contact")
    return _envelope(success=True, data=_serialize(contact))


@router.put("/{contact_id}")
def update_contact(
    contact_id: str,
    payload: ContactPayload,
    service: ContactService = Depends(get_contact_service),
):
    """Replace a contact's name, phone and email.

    All three fields are rewritten; an omitted email clears it.
    """
    try:
        contact = service.update_contact(contact_id, payload.name, payload.phone, payload.email)
    except ContactError as exc:
        return _error_response(exc, "Failed to update contact")
    return _envelope(
        success=True,
        message="Contact updated successfully",
        data=_serialize(contact),
    )


@router.delete("/{contact_id}")
def delete_contact(contact_id: str, service: ContactService = Depends(get_contact_service)):
    try:
        service.delete_contact(contact_id)
    except ContactError as exc:
        return _error_response(exc, "Failed to delete contact")
    return _envelope(success=True, message="Contact deleted successfully")
