"""Shared test fixtures for insurance intake tests."""

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import init_all_services, reset_services
from app.services.storage import MemoryApplicationStore


FIXED_NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def personal_info():
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "dateOfBirth": "1990-01-01",
        "gender": "female",
        "email": "jane@example.com",
        "phone": "5551234567",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
        "ssn": "123-45-6789",
    }


@pytest.fixture
def insurance_info():
    return {
        "insuranceProvider": "Acme Health",
        "policyNumber": "POL-001",
        "coverageType": "family",
        "effectiveDate": "2025-01-01",
        "monthlyPremium": "450",
        "benefits": ["dental", "vision"],
    }


@pytest.fixture
def medical_info():
    return {
        "physicianName": "Dr. Smith",
        "hasChronicConditions": "no",
        "takingMedications": "yes",
        "medications": [
            {"name": "Lisinopril", "dosage": "10mg", "frequency": "daily"},
        ],
        "hasAllergies": "no",
        "emergencyContactName": "John Doe",
        "emergencyContactPhone": "5559876543",
        "emergencyContactRelationship": "spouse",
    }


@pytest.fixture
def application_payload(personal_info, insurance_info, medical_info):
    """Flattened wire body for POST /api/insurance-applications."""
    payload = {**personal_info, **insurance_info, **medical_info}
    payload["hasChronicConditions"] = False
    payload["takingMedications"] = True
    payload["hasAllergies"] = False
    return payload


@pytest.fixture
def test_settings():
    return Settings(
        JWT_SECRET="test-secret",
        STORAGE_BACKEND="memory",
        CAPTCHA_TTL_SECONDS=60,
    )


@pytest.fixture
def memory_store(fixed_clock):
    return MemoryApplicationStore(clock=fixed_clock)


@pytest.fixture
def client(test_settings, memory_store):
    """API client with services wired to a fresh memory store."""
    from api import app

    init_all_services(test_settings, memory_store)
    yield TestClient(app, raise_server_exceptions=False)
    reset_services()
