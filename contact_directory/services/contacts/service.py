"""Orchestrates contact validation, uniqueness checks and persistence."""

import logging
import uuid
from collections.abc import Sequence

from contact_directory.models.contact import Contact
from contact_directory.services.contacts.base import BaseContactStore
from contact_directory.services.contacts.exceptions import (
    ContactNotFoundError,
    DuplicateEmailError,
    DuplicatePhoneError,
    StoreConflictError,
)
from contact_directory.services.contacts.models import (
    ContactField,
    ContactFilter,
    SubstringPredicate,
)
from contact_directory.services.contacts.validation import validate_contact_fields

logger = logging.getLogger(__name__)


def build_search_filter(search: str | None) -> ContactFilter:
    """Build the free-text search filter for ``search``.

    A blank or missing term yields an empty filter (everything matches).
    Otherwise the trimmed term is matched as a substring against name and
    email case-insensitively, and against phone literally.
    """
    term = search.strip() if search else ""
    if not term:
        return ContactFilter()
    return ContactFilter(
        any_of=[
            SubstringPredicate(field=ContactField.NAME, term=term),
            SubstringPredicate(field=ContactField.PHONE, term=term, case_sensitive=True),
            SubstringPredicate(field=ContactField.EMAIL, term=term),
        ]
    )


def _duplicate_for(conflict: StoreConflictError) -> DuplicatePhoneError | DuplicateEmailError:
    if conflict.field == ContactField.EMAIL.value:
        return DuplicateEmailError()
    return DuplicatePhoneError()


class ContactService:
    """Coordinates contact writes against a :class:`BaseContactStore`.

    Format checks always run before any store access. Uniqueness is checked
    with lookups before writing; a conflict the store reports at write time
    (two requests racing past the lookup) is reported the same way.
    """

    def __init__(self, store: BaseContactStore) -> None:
        self.store = store

    def list_contacts(self, search: str | None = None) -> Sequence[Contact]:
        return self.store.find_all(build_search_filter(search))

    def get_contact(self, contact_id: uuid.UUID | str) -> Contact:
        contact = self.store.find_by_id(contact_id)
        if contact is None:
            raise ContactNotFoundError()
        return contact

    def create_contact(
        self,
        name: str | None,
        phone: str | None,
        email: str | None = None,
    ) -> Contact:
        fields = validate_contact_fields(name, phone, email)

        if self.store.find_one(ContactField.PHONE, fields.phone) is not None:
            raise DuplicatePhoneError()
        if fields.email and self.store.find_one(ContactField.EMAIL, fields.email) is not None:
            raise DuplicateEmailError()

        try:
            contact = self.store.insert(fields)
        except StoreConflictError as exc:
            logger.warning("Contact insert rejected by unique constraint on %s", exc.field)
            raise _duplicate_for(exc) from exc

        logger.info("Contact created: id=%s phone=%s", contact.id, contact.phone)
        return contact

    def update_contact(
        self,
        contact_id: uuid.UUID | str,
        name: str | None,
        phone: str | None,
        email: str | None = None,
    ) -> Contact:
        contact = self.get_contact(contact_id)
        fields = validate_contact_fields(name, phone, email)

        # A contact never conflicts with its own current values.
        if fields.phone != contact.phone:
            if self.store.find_one(ContactField.PHONE, fields.phone) is not None:
                raise DuplicatePhoneError()
        if fields.email and fields.email != contact.email:
            if self.store.find_one(ContactField.EMAIL, fields.email) is not None:
                raise DuplicateEmailError()

        contact.name = fields.name
        contact.phone = fields.phone
        contact.email = fields.email

        try:
            contact = self.store.save(contact)
        except StoreConflictError as exc:
            logger.warning("Contact update rejected by unique constraint on %s", exc.field)
            raise _duplicate_for(exc) from exc

        logger.info("Contact updated: id=%s", contact.id)
        return contact

    def delete_contact(self, contact_id: uuid.UUID | str) -> None:
        if self.store.delete_by_id(contact_id) is None:
            raise ContactNotFoundError()
        logger.info("Contact deleted: id=%s", contact_id)

