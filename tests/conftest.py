import uuid
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

import contact_directory.models  # noqa: F401 — register models with Base.metadata
from contact_directory.core.config import settings
from contact_directory.core.database import Base, get_db
from contact_directory.main import app as fastapi_app
from contact_directory.models.contact import Contact
from contact_directory.services.contacts import (
    BaseContactStore,
    ContactField,
    ContactFields,
    ContactFilter,
    ContactService,
    StoreConflictError,
)

settings.DATABASE_CONNECT_ON_STARTUP = False

# In-memory SQLite for tests, no PostgreSQL needed
TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class InMemoryContactStore(BaseContactStore):
    """Dict-backed store enforcing the same unique constraints as the database.

    Set ``fail_with`` to make every operation raise that exception, and
    ``skip_lookups`` to make ``find_one`` miss so writes hit the constraint
    backstop (simulates two requests racing past the duplicate check).
    """

    def __init__(self) -> None:
        self.contacts: dict[uuid.UUID, Contact] = {}
        self.calls: list[str] = []
        self.fail_with: Exception | None = None
        self.skip_lookups = False

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def _check_unique(self, phone: str, email: str | None, own_id: uuid.UUID | None = None) -> None:
        for other in self.contacts.values():
            if other.id == own_id:
                continue
            if other.phone == phone:
                raise StoreConflictError("phone")
            if email is not None and other.email == email:
                raise StoreConflictError("email")

    def find_all(self, contact_filter: ContactFilter):
        self._record("find_all")
        contacts = list(self.contacts.values())
        if contact_filter.is_empty:
            return contacts
        return [
            c
            for c in contacts
            if any(p.matches(getattr(c, p.field.value)) for p in contact_filter.any_of)
        ]

    def find_one(self, field: ContactField, value: str):
        self._record("find_one")
        if self.skip_lookups:
            return None
        for contact in self.contacts.values():
            if getattr(contact, ContactField(field).value) == value:
                return contact
        return None

    def find_by_id(self, contact_id):
        self._record("find_by_id")
        try:
            key = contact_id if isinstance(contact_id, uuid.UUID) else uuid.UUID(str(contact_id))
        except ValueError:
            return None
        return self.contacts.get(key)

    def insert(self, fields: ContactFields) -> Contact:
        self._record("insert")
        self._check_unique(fields.phone, fields.email)
        now = datetime.now(UTC)
        contact = Contact(
            id=uuid.uuid4(),
            name=fields.name,
            phone=fields.phone,
            email=fields.email,
            created_at=now,
            updated_at=now,
        )
        self.contacts[contact.id] = contact
        return contact

    def save(self, contact: Contact) -> Contact:
        self._record("save")
        self._check_unique(contact.phone, contact.email, own_id=contact.id)
        contact.updated_at = datetime.now(UTC)
        self.contacts[contact.id] = contact
        return contact

    def delete_by_id(self, contact_id):
        self._record("delete_by_id")
        contact = self.find_by_id(contact_id)
        if contact is None:
            return None
        return self.contacts.pop(contact.id)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def setup_db():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Provide a test database session."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory():
    """Session factory bound to the test engine, for code that opens its own sessions."""
    return TestSessionLocal


@pytest.fixture
def memory_store() -> InMemoryContactStore:
    return InMemoryContactStore()


@pytest.fixture
def service(memory_store) -> ContactService:
    """Contact service over the in-memory store."""
    return ContactService(memory_store)


@pytest.fixture
def client(db):
    """TestClient with overridden DB dependency."""

    def _override_get_db():
        try:
            yield db
        finally:
            pass

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()
