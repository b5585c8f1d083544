"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from pathlib import Path
from fastapi.testclient import TestClient
from customer_portal.api.main import create_app
from customer_portal.api.dependencies import get_record_store
from customer_portal.domain.models import Movement, Profile, Purchase
from customer_portal.infrastructure.storage.record_store import RecordStore


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data directory that does not exist yet, like a fresh deployment"""
    return tmp_path / "data"


@pytest.fixture
def store(data_dir: Path) -> RecordStore:
    return RecordStore(data_dir)


@pytest.fixture
def app(store: RecordStore):
    """FastAPI app whose record store points at the test data directory"""
    app = create_app()
    app.dependency_overrides[get_record_store] = lambda: store
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def sample_purchases() -> list[Purchase]:
    return [
        Purchase(id="A-100", price=Decimal("1250.50"), status="Delivered"),
        Purchase(id="A-101", price=Decimal("99.99"), status="pending"),
        Purchase(id="A-102", price=Decimal("15"), status="DELIVERED"),
        Purchase(id="A-103", price=Decimal("300.00"), status="Delivered late"),
    ]


@pytest.fixture
def sample_movements() -> list[Movement]:
    return [
        Movement(date="2024-05-01", detail="Salary", amount="150000.00"),
        Movement(date="2024-05-03", detail="Supermarket", amount="-8450.25"),
        Movement(date="2024-05-07", detail="Electricity", amount="-12300"),
    ]


@pytest.fixture
def sample_profile() -> Profile:
    return Profile(
        person_type="individual",
        name="Lucía",
        surname="Fernández",
        email="lucia@example.com",
        tax_id="27-30123456-4",
        national_id="30123456",
        phone1="+54 11 5555-0101",
        phone2="",
        address1="Av. Corrientes 1234, CABA",
        address2="",
    )
