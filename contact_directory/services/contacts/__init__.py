"""Contact service — validation, uniqueness enforcement and search over a contact store."""

from contact_directory.services.contacts.base import BaseContactStore
from contact_directory.services.contacts.exceptions import (
    ContactError,
    ContactNotFoundError,
    ContactValidationError,
    DuplicateContactError,
    DuplicateEmailError,
    DuplicatePhoneError,
    InvalidEmailError,
    InvalidNameError,
    InvalidPhoneError,
    StoreConflictError,
    StoreError,
)
from contact_directory.services.contacts.models import (
    ContactField,
    ContactFields,
    ContactFilter,
    SubstringPredicate,
)
from contact_directory.services.contacts.service import ContactService, build_search_filter
from contact_directory.services.contacts.sql_store import SqlAlchemyContactStore

__all__ = [
    "BaseContactStore",
    "ContactError",
    "ContactField",
    "ContactFields",
    "ContactFilter",
    "ContactNotFoundError",
    "ContactService",
    "ContactValidationError",
    "DuplicateContactError",
    "DuplicateEmailError",
    "DuplicatePhoneError",
    "InvalidEmailError",
    "InvalidNameError",
    "InvalidPhoneError",
    "SqlAlchemyContactStore",
    "StoreConflictError",
    "StoreError",
    "SubstringPredicate",
    "build_search_filter",
]
