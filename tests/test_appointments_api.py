"""
Endpoint /appointments: riferimenti a pazienti e dentisti, ricerca per dni
e prenotazione per dni + matricola.
"""

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from dental_clinic.api_main import create_app


@pytest.fixture
def stored(client, auth, patient_payload, dentist_payload) -> dict:
    patient = client.post("/patients", json=patient_payload, headers=auth).json()["data"]
    dentist = client.post("/dentists", json=dentist_payload, headers=auth).json()["data"]
    return {"patient": patient, "dentist": dentist}


@pytest.fixture
def appointment_payload(stored) -> dict:
    return {
        "date": "02-04-2024",
        "hour": "10:30:00",
        "description": "Control anual",
        "patient": {"id": stored["patient"]["id"]},
        "dentist": {"id": stored["dentist"]["id"]},
    }


def _create(client, auth, payload) -> dict:
    response = client.post("/appointments", json=payload, headers=auth)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateAppointment:
    def test_created_with_full_references(self, client, auth, stored, appointment_payload):
        response = client.post("/appointments", json=appointment_payload, headers=auth)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] > 0
        assert data["date"] == "2024-04-02"
        assert data["hour"] == "10:30:00"
        assert data["description"] == "Control anual"
        assert data["patient"] == stored["patient"]
        assert data["dentist"] == stored["dentist"]

    def test_read_back(self, client, auth, appointment_payload):
        created = _create(client, auth, appointment_payload)

        response = client.get(f"/appointments/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"data": created}

    @pytest.mark.parametrize(
        "drop, message",
        [
            ("description", "Description can't be empty"),
            ("patient", "Patient can't be empty"),
            ("dentist", "Dentist can't be empty"),
            ("date", "date can't be empty"),
            ("hour", "hour can't be empty"),
        ],
    )
    def test_missing_field(self, client, auth, appointment_payload, drop, message):
        payload = {k: v for k, v in appointment_payload.items() if k != drop}

        response = client.post("/appointments", json=payload, headers=auth)

        assert response.status_code == 400
        assert response.json() == {"status": 400, "error": message}

    def test_reference_without_id(self, client, auth, appointment_payload):
        payload = {**appointment_payload, "patient": {"name": "Lucia"}}

        response = client.post("/appointments", json=payload, headers=auth)

        assert response.json() == {"status": 400, "error": "Patient.id can't be empty"}

    def test_unknown_dentist(self, client, auth, appointment_payload):
        payload = {**appointment_payload, "dentist": {"id": 99}}

        response = client.post("/appointments", json=payload, headers=auth)

        assert response.status_code == 400
        assert response.json()["error"] == "dentist 99 not found"

    def test_date_passing_validation_but_not_storable(self, client, auth, appointment_payload):
        response = client.post(
            "/appointments", json={**appointment_payload, "date": "2024-13-45"}, headers=auth
        )

        assert response.status_code == 400
        assert response.json() == {"status": 400, "error": "error creating appointment"}

    def test_hour_format(self, client, auth, appointment_payload):
        response = client.post(
            "/appointments", json={**appointment_payload, "hour": "10:30"}, headers=auth
        )

        assert response.json()["error"] == "invalid hour, must be in format: hh:mm:ss"


class TestAppointmentsByDni:
    def test_lists_patient_appointments(self, client, auth, stored, appointment_payload):
        first = _create(client, auth, appointment_payload)
        second = _create(client, auth, {**appointment_payload, "hour": "11:00:00"})

        response = client.get(f"/appointments/dni/{stored['patient']['dni']}")

        assert response.status_code == 200
        assert response.json() == {"data": [first, second]}

    def test_no_appointments(self, client):
        response = client.get("/appointments/dni/123")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_invalid_dni(self, client):
        response = client.get("/appointments/dni/abc")

        assert response.status_code == 400
        assert response.json() == {"status": 400, "error": "invalid dni"}


class TestCreateByDniAndLicense:
    def test_created(self, client, auth, stored):
        body = {"date": "2024-04-02", "hour": "09:00:00", "description": "Urgencia"}

        response = client.post(
            "/appointments/dni/license",
            params={"dni": stored["patient"]["dni"], "license": stored["dentist"]["license"]},
            json=body,
            headers=auth,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["patient"] == stored["patient"]
        assert data["dentist"] == stored["dentist"]
        assert data["description"] == "Urgencia"

    def test_references_in_body_are_ignored(self, client, auth, stored):
        body = {
            "date": "2024-04-02",
            "hour": "09:00:00",
            "description": "x",
            "patient": {"id": 99},
            "dentist": {"id": 99},
        }

        response = client.post(
            "/appointments/dni/license",
            params={"dni": stored["patient"]["dni"], "license": stored["dentist"]["license"]},
            json=body,
            headers=auth,
        )

        assert response.status_code == 201
        assert response.json()["data"]["patient"]["id"] == stored["patient"]["id"]

    @pytest.mark.parametrize("params", [{}, {"dni": "abc", "license": "MAT-1001"}])
    def test_invalid_dni(self, client, auth, params):
        response = client.post(
            "/appointments/dni/license",
            params=params,
            json={"date": "2024-04-02", "hour": "09:00:00"},
            headers=auth,
        )

        assert response.status_code == 400
        assert response.json() == {"status": 400, "error": "invalid dni"}

    def test_unknown_patient_creates_nothing(self, client, auth, stored):
        response = client.post(
            "/appointments/dni/license",
            params={"dni": 999, "license": stored["dentist"]["license"]},
            json={"date": "2024-04-02", "hour": "09:00:00"},
            headers=auth,
        )

        assert response.status_code == 400
        assert response.json() == {"status": 400, "error": "patient with dni 999 not found"}
        assert client.get(f"/appointments/dni/{stored['patient']['dni']}").json() == {"data": []}

    def test_schedule_is_required(self, client, auth, stored):
        response = client.post(
            "/appointments/dni/license",
            params={"dni": stored["patient"]["dni"], "license": stored["dentist"]["license"]},
            json={"description": "x"},
            headers=auth,
        )

        assert response.json() == {"status": 400, "error": "date can't be empty"}


class TestUpdateAppointment:
    def test_patch_hour_only(self, client, auth, appointment_payload):
        created = _create(client, auth, appointment_payload)

        response = client.patch(f"/appointments/{created['id']}", json={"hour": "9:5:0"}, headers=auth)

        assert response.status_code == 200
        assert response.json()["data"] == {**created, "hour": "09:05:00"}

    def test_patch_dentist_returns_full_record(self, client, auth, appointment_payload):
        created = _create(client, auth, appointment_payload)
        other = client.post(
            "/dentists", json={"name": "Ana", "last_name": "Ruiz", "license": "MAT-2002"}, headers=auth
        ).json()["data"]

        response = client.patch(
            f"/appointments/{created['id']}", json={"dentist": {"id": other["id"]}}, headers=auth
        )

        assert response.status_code == 200
        assert response.json()["data"]["dentist"] == other
        assert client.get(f"/appointments/{created['id']}").json()["data"]["dentist"] == other

    def test_patch_unknown_patient_keeps_appointment(self, client, auth, appointment_payload):
        created = _create(client, auth, appointment_payload)

        response = client.patch(
            f"/appointments/{created['id']}",
            json={"description": "cambio", "patient": {"id": 77}},
            headers=auth,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "patient 77 not found"
        assert client.get(f"/appointments/{created['id']}").json()["data"] == created

    def test_patch_checks_date_when_present(self, client, auth, appointment_payload):
        created = _create(client, auth, appointment_payload)

        response = client.patch(f"/appointments/{created['id']}", json={"date": "2024-04"}, headers=auth)

        assert response.json() == {"status": 400, "error": "invalid date, must be in format: dd-mm-yyyy"}

    def test_put_replaces(self, client, auth, appointment_payload):
        created = _create(client, auth, appointment_payload)
        replacement = {**appointment_payload, "date": "2024-05-10", "hour": "16:00:00", "description": "Ortodoncia"}

        response = client.put(f"/appointments/{created['id']}", json=replacement, headers=auth)

        assert response.status_code == 200
        data = response.json()["data"]
        assert (data["date"], data["hour"], data["description"]) == ("2024-05-10", "16:00:00", "Ortodoncia")
        assert data["patient"] == created["patient"]

    def test_put_missing(self, client, auth, appointment_payload):
        response = client.put("/appointments/50", json=appointment_payload, headers=auth)

        assert response.status_code == 400
        assert response.json() == {"status": 400, "error": "appointment 50 not found"}


class TestDeleteAppointment:
    def test_deleted(self, client, auth, appointment_payload):
        created = _create(client, auth, appointment_payload)

        response = client.delete(f"/appointments/{created['id']}", headers=auth)

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/appointments/{created['id']}").status_code == 404

    def test_missing(self, client, auth):
        response = client.delete("/appointments/4", headers=auth)

        assert response.status_code == 404
        assert response.json() == {"status": 404, "error": "appointment 4 not found"}

    def test_deleting_patient_hides_its_appointments(self, client, auth, stored, appointment_payload):
        created = _create(client, auth, appointment_payload)

        client.delete(f"/patients/{stored['patient']['id']}", headers=auth)

        response = client.get(f"/appointments/{created['id']}")
        assert response.status_code == 404
        assert response.json()["error"] == f"appointment {created['id']} not found"


def test_strict_hour_validation(settings, auth, patient_payload, dentist_payload):
    app = create_app(replace(settings, strict_datetime_validation=True))

    with TestClient(app) as client:
        patient = client.post("/patients", json=patient_payload, headers=auth).json()["data"]
        dentist = client.post("/dentists", json=dentist_payload, headers=auth).json()["data"]
        response = client.post(
            "/appointments",
            json={
                "date": "2024-04-02",
                "hour": "25:30:00",
                "description": "x",
                "patient": {"id": patient["id"]},
                "dentist": {"id": dentist["id"]},
            },
            headers=auth,
        )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid hour, hour must be between 00:00:00 and 23:59:59"
