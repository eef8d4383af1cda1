"""
Client HTTP per l'API (usato da script e applicativi esterni).

Ogni metodo restituisce il contenuto di "data"; una risposta d'errore
diventa ClinicApiError con status e messaggio dell'envelope.
"""

from __future__ import annotations

import os
from typing import Any

import requests

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8080")


class ClinicApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ClinicClient:
    def __init__(
        self,
        base_url: str = API_BASE,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # --- HTTP ---

    def _request(
        self,
        method: str,
        path: str,
        payload: dict | None = None,
        params: dict | None = None,
    ) -> Any:
        headers = {}
        if self.token:
            headers["token"] = self.token
        r = self.session.request(
            method,
            f"{self.base_url}{path}",
            headers=headers,
            json=payload,
            params=params,
            timeout=self.timeout,
        )

        try:
            body = r.json() if r.content else {}
        except ValueError:
            # risposta non JSON (proxy, errori del server web)
            r.raise_for_status()
            raise ClinicApiError(r.status_code, r.text)

        if r.status_code >= 400:
            raise ClinicApiError(body.get("status", r.status_code), body.get("error", r.reason))
        return body.get("data")

    # --- Pazienti ---

    def get_patient(self, id: int) -> dict:
        return self._request("GET", f"/patients/{id}")

    def create_patient(self, patient: dict) -> dict:
        return self._request("POST", "/patients", patient)

    def replace_patient(self, id: int, patient: dict) -> dict:
        return self._request("PUT", f"/patients/{id}", patient)

    def patch_patient(self, id: int, changes: dict) -> dict:
        return self._request("PATCH", f"/patients/{id}", changes)

    def delete_patient(self, id: int) -> None:
        self._request("DELETE", f"/patients/{id}")

    # --- Dentisti ---

    def get_dentist(self, id: int) -> dict:
        return self._request("GET", f"/dentists/{id}")

    def create_dentist(self, dentist: dict) -> dict:
        return self._request("POST", "/dentists", dentist)

    def replace_dentist(self, id: int, dentist: dict) -> dict:
        return self._request("PUT", f"/dentists/{id}", dentist)

    def patch_dentist(self, id: int, changes: dict) -> dict:
        return self._request("PATCH", f"/dentists/{id}", changes)

    def delete_dentist(self, id: int) -> None:
        self._request("DELETE", f"/dentists/{id}")

    # --- Turni ---

    def get_appointment(self, id: int) -> dict:
        return self._request("GET", f"/appointments/{id}")

    def get_appointments_by_dni(self, dni: int) -> list[dict]:
        return self._request("GET", f"/appointments/dni/{dni}") or []

    def create_appointment(self, appointment: dict) -> dict:
        return self._request("POST", "/appointments", appointment)

    def create_appointment_by_dni_and_license(self, dni: int, license: str, appointment: dict) -> dict:
        return self._request(
            "POST", "/appointments/dni/license", appointment, params={"dni": dni, "license": license}
        )

    def replace_appointment(self, id: int, appointment: dict) -> dict:
        return self._request("PUT", f"/appointments/{id}", appointment)

    def patch_appointment(self, id: int, changes: dict) -> dict:
        return self._request("PATCH", f"/appointments/{id}", changes)

    def delete_appointment(self, id: int) -> None:
        self._request("DELETE", f"/appointments/{id}")
