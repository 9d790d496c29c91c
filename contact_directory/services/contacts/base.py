"""Abstract contact store interface."""

import uuid
from abc import ABC, abstractmethod
from collections.abc import Sequence

from contact_directory.models.contact import Contact
from contact_directory.services.contacts.models import ContactField, ContactFields, ContactFilter


class BaseContactStore(ABC):
    """Persistence backend consumed by :class:`ContactService`.

    Implementations raise :class:`StoreConflictError` when a write violates a
    storage-level unique constraint and :class:`StoreError` for any other
    backend failure.
    """

    @abstractmethod
    def find_all(self, contact_filter: ContactFilter) -> Sequence[Contact]:
        """Return contacts matching any predicate of the filter (all if it is empty)."""

    @abstractmethod
    def find_one(self, field: ContactField, value: str) -> Contact | None:
        """Return a contact whose ``field`` equals ``value`` exactly."""

    @abstractmethod
    def find_by_id(self, contact_id: uuid.UUID | str) -> Contact | None:
        """Return the contact with this id.

        Ids that are not valid for the backend yield ``None``.
        """

    @abstractmethod
    def insert(self, fields: ContactFields) -> Contact:
        """Persist a new contact; the store assigns id and timestamps."""

    @abstractmethod
    def save(self, contact: Contact) -> Contact:
        """Persist changes to an existing contact and refresh ``updated_at``."""

    @abstractmethod
    def delete_by_id(self, contact_id: uuid.UUID | str) -> Contact | None:
        """Remove the contact with this id, returning it, or ``None`` if absent."""
