"""Shared fixtures: in-memory registration store."""
from datetime import datetime, timezone

import pytest

from src.services import storage_service
from src.services.database import RegistrationRecord, create_store_engine
from src.services.storage_service import RegistrationStore


@pytest.fixture(autouse=True)
def isolated_default_store(monkeypatch):
    """Never touch a database file from tests."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    storage_service.set_store(None)
    yield
    storage_service.set_store(None)


@pytest.fixture
def store():
    """Fresh in-memory store with the schema created."""
    registration_store = RegistrationStore(create_store_engine("sqlite://"))
    registration_store.create_schema()
    yield registration_store
    registration_store.engine.dispose()


@pytest.fixture
def add_record(store):
    """Insert a row directly with a fixed created_at."""
    def _add(name, email, registration_type="student", created_at=None, company=None, phone=None):
        with store._session_factory() as session:
            record = RegistrationRecord(
                name=name,
                email=email,
                registration_type=registration_type,
                company=company,
                phone=phone,
                created_at=created_at or datetime.now(timezone.utc),
            )
            session.add(record)
            session.commit()
            return record.id
    return _add
