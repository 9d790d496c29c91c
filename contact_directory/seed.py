"""Seed the database with sample contacts.

Contacts go through :class:`ContactService`, so invalid or already-present
entries are skipped rather than inserted.
"""

import logging

from contact_directory.core.database import SessionLocal, init_db
from contact_directory.models.contact import Contact
from contact_directory.services.contacts import (
    ContactService,
    DuplicateContactError,
    SqlAlchemyContactStore,
)

logger = logging.getLogger(__name__)

SEED_CONTACTS = [
    {"name": "Ann Lee", "phone": "1234567890", "email": "ann@example.com"},
    {"name": "Bob Ray", "phone": "15550001234", "email": "bob.ray@example.org"},
    {"name": "Carmen Ortiz", "phone": "442071838750", "email": None},
    {"name": "Dev Patel", "phone": "919876543210", "email": "dev-patel@mail.example.in"},
    {"name": "Eun-ji Kim", "phone": "821012345678", "email": None},
]


def seed_contacts(session_factory=SessionLocal) -> list[Contact]:
    """Insert seed contacts into the database. Returns created contacts."""
    db = session_factory()
    service = ContactService(SqlAlchemyContactStore(db))
    created: list[Contact] = []
    try:
        for data in SEED_CONTACTS:
            try:
                created.append(service.create_contact(data["name"], data["phone"], data["email"]))
            except DuplicateContactError as exc:
                logger.info("Skipping %s: %s", data["name"], exc.message)
        return created
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    contacts = seed_contacts()
    for c in contacts:
        print(f"Created: {c.name} (id={c.id}, phone={c.phone})")
    print(f"\nSeeded {len(contacts)} contacts.")
