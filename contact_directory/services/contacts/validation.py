"""Contact field validation and normalization.

Pure functions with no I/O. Each validator returns the normalized value or
raises the field-specific :class:`ContactValidationError` subclass.
"""

import re

from contact_directory.services.contacts.exceptions import (
    InvalidEmailError,
    InvalidNameError,
    InvalidPhoneError,
)
from contact_directory.services.contacts.models import ContactFields

NAME_MIN_LENGTH = 2

# ASCII-only so that \d and \w do not admit other Unicode digits/letters.
PHONE_PATTERN = re.compile(r"\d{10,15}", re.ASCII)
EMAIL_PATTERN = re.compile(r"[\w\-.]+@([\w\-]+\.)+[\w\-]{2,4}", re.ASCII)


def validate_name(name: str | None) -> str:
    """Return the trimmed name.

    Raises:
        InvalidNameError: If the name is missing or shorter than two characters once trimmed.
    """
    if not name:
        raise InvalidNameError()
    trimmed = name.strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        raise InvalidNameError()
    return trimmed


def validate_phone(phone: str | None) -> str:
    """Return the phone unchanged if it is 10 to 15 digits with nothing else.

    Raises:
        InvalidPhoneError: If the phone is missing or malformed.
    """
    if not phone or PHONE_PATTERN.fullmatch(phone) is None:
        raise InvalidPhoneError()
    return phone


def validate_email(email: str | None) -> str | None:
    """Return the email, or ``None`` when no email was given.

    Raises:
        InvalidEmailError: If a non-empty email does not match the address pattern.
    """
    if not email:
        return None
    if EMAIL_PATTERN.fullmatch(email) is None:
        raise InvalidEmailError()
    return email


def validate_contact_fields(
    name: str | None,
    phone: str | None,
    email: str | None = None,
) -> ContactFields:
    """Validate all three fields in order (name, phone, email).

    Only the first failure is raised.
    """
    return ContactFields(
        name=validate_name(name),
        phone=validate_phone(phone),
        email=validate_email(email),
    )
