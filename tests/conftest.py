"""
Fixture condivise: database SQLite temporaneo per ogni test, servizi
composti come in produzione, client HTTP e header `token` firmato.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from dental_clinic.api_main import Services, build_services, create_app
from dental_clinic.config import Settings
from dental_clinic.db import Database
from dental_clinic.domain import Dentist, Patient
from dental_clinic.security import create_access_token


# ============================================================================
# DATABASE / SERVIZI
# ============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(db_url=f"sqlite:///{tmp_path / 'test.sqlite'}", jwt_secret="test-secret")


@pytest.fixture
def db(settings: Settings) -> Iterator[Database]:
    database = Database(settings.db_url)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def services(db: Database, settings: Settings) -> Services:
    return build_services(db, settings)


# ============================================================================
# API
# ============================================================================


@pytest.fixture
def app(settings: Settings):
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    # il context manager esegue lo startup (creazione tabelle)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth(settings: Settings) -> dict[str, str]:
    return {"token": create_access_token(settings, subject="tests")}


# ============================================================================
# DATI DI ESEMPIO
# ============================================================================


@pytest.fixture
def patient_payload() -> dict:
    return {
        "name": "Lucia",
        "last_name": "Fernandez",
        "domicilio": "Av. Siempre Viva 742",
        "dni": 30111222,
        "email": "lucia@example.com",
        "admission_date": "2024-03-15",
    }


@pytest.fixture
def dentist_payload() -> dict:
    return {"name": "Martin", "last_name": "Gomez", "license": "MAT-1001"}


@pytest.fixture
def patient(services: Services, patient_payload: dict) -> Patient:
    return services.patient.create(Patient(**patient_payload))


@pytest.fixture
def dentist(services: Services, dentist_payload: dict) -> Dentist:
    return services.dentist.create(Dentist(**dentist_payload))
