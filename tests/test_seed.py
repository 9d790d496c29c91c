"""Tests for the sample contact seeder."""

from contact_directory.seed import SEED_CONTACTS, seed_contacts
from contact_directory.services.contacts.validation import validate_contact_fields


def test_seed_data_is_valid():
    for data in SEED_CONTACTS:
        validate_contact_fields(data["name"], data["phone"], data["email"])


def test_seed_creates_contacts(session_factory):
    created = seed_contacts(session_factory)
    assert len(created) == len(SEED_CONTACTS)


def test_seed_is_idempotent(session_factory):
    seed_contacts(session_factory)
    assert seed_contacts(session_factory) == []
