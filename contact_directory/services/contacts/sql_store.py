"""SQLAlchemy-backed contact store."""

import logging
import re
import uuid
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from contact_directory.models.contact import Contact
from contact_directory.services.contacts.base import BaseContactStore
from contact_directory.services.contacts.exceptions import StoreConflictError, StoreError
from contact_directory.services.contacts.models import (
    ContactField,
    ContactFields,
    ContactFilter,
    SubstringPredicate,
)

logger = logging.getLogger(__name__)


def _parse_id(contact_id: uuid.UUID | str) -> uuid.UUID | None:
    if isinstance(contact_id, uuid.UUID):
        return contact_id
    try:
        return uuid.UUID(str(contact_id))
    except ValueError:
        return None


def _predicate_clause(predicate: SubstringPredicate):
    column = getattr(Contact, predicate.field.value)
    if predicate.case_sensitive:
        return column.contains(predicate.term, autoescape=True)
    return column.icontains(predicate.term, autoescape=True)


_CONSTRAINT_FIELDS = {
    "uq_contacts_phone": ContactField.PHONE.value,
    "uq_contacts_email": ContactField.EMAIL.value,
}

# SQLite names the column only: "UNIQUE constraint failed: contacts.email"
_SQLITE_UNIQUE_PATTERN = re.compile(r"UNIQUE constraint failed: contacts\.(\w+)")


def _conflicting_field(exc: IntegrityError) -> str | None:
    """Work out which unique column an IntegrityError refers to.

    PostgreSQL drivers expose the violated constraint on ``orig.diag``; the
    message text is never searched there since it echoes the offending value.
    """
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return _CONSTRAINT_FIELDS.get(constraint)
    match = _SQLITE_UNIQUE_PATTERN.search(str(exc.orig))
    if match and match.group(1) in _CONSTRAINT_FIELDS.values():
        return match.group(1)
    return None


class SqlAlchemyContactStore(BaseContactStore):
    """Contact store over a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self._db = db

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self._db.rollback()
            field = _conflicting_field(exc)
            if field is None:
                logger.error("Unexpected integrity error: %s", exc.orig)
                raise StoreError(str(exc.orig)) from exc
            raise StoreConflictError(field, str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Contact store operation failed")
            raise StoreError(str(exc)) from exc

    def find_all(self, contact_filter: ContactFilter) -> Sequence[Contact]:
        stmt = select(Contact).order_by(Contact.created_at)
        if not contact_filter.is_empty:
            stmt = stmt.where(or_(*(_predicate_clause(p) for p in contact_filter.any_of)))
        with self._guard():
            return self._db.execute(stmt).scalars().all()

    def find_one(self, field: ContactField, value: str) -> Contact | None:
        column = getattr(Contact, ContactField(field).value)
        with self._guard():
            return self._db.execute(select(Contact).where(column == value)).scalars().first()

    def find_by_id(self, contact_id: uuid.UUID | str) -> Contact | None:
        parsed = _parse_id(contact_id)
        if parsed is None:
            return None
        with self._guard():
            return self._db.get(Contact, parsed)

    def insert(self, fields: ContactFields) -> Contact:
        contact = Contact(name=fields.name, phone=fields.phone, email=fields.email)
        with self._guard():
            self._db.add(contact)
            self._db.commit()
            self._db.refresh(contact)
        return contact

    def save(self, contact: Contact) -> Contact:
        # Assigned explicitly so the row is rewritten even when no field changed.
        contact.updated_at = func.now()
        with self._guard():
            self._db.add(contact)
            self._db.commit()
            self._db.refresh(contact)
        return contact

    def delete_by_id(self, contact_id: uuid.UUID | str) -> Contact | None:
        contact = self.find_by_id(contact_id)
        if contact is None:
            return None
        with self._guard():
            self._db.delete(contact)
            self._db.commit()
        return contact
