"""Pydantic schemas for the contact directory API."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContactPayload(BaseModel):
    """POST/PUT body.

    Fields are deliberately loose: format rules are enforced by the contact
    validator so failures come back in the response envelope. JSON numbers
    are accepted as their string form.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    phone: str | None = None
    email: str | None = None


class ContactResponse(BaseModel):
    """Wire representation of a contact."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    phone: str
    email: str | None = None
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")


class ApiResponse(BaseModel):
    """Uniform response envelope: ``{success, message?, data?, error?}``."""

    success: bool
    message: str | None = None
    data: Any = None
    error: str | None = None
