from __future__ import annotations

from fastapi import Header, Request

from ..config import Settings
from ..security import get_subject
from ..services import AppointmentServiceProtocol, DentistServiceProtocol, PatientServiceProtocol
from .web import ApiError


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_patient_service(request: Request) -> PatientServiceProtocol:
    return request.app.state.patient_service


def get_dentist_service(request: Request) -> DentistServiceProtocol:
    return request.app.state.dentist_service


def get_appointment_service(request: Request) -> AppointmentServiceProtocol:
    return request.app.state.appointment_service


def require_token(request: Request, token: str | None = Header(default=None)) -> str:
    """Rotte che modificano dati: header `token` con un JWT valido."""
    if not token:
        raise ApiError(401, "token not found")

    # protezione extra: elimina spazi / virgolette accidentali
    token = token.strip().strip('"').strip("'")

    subject = get_subject(get_app_settings(request), token)
    if not subject:
        raise ApiError(401, "invalid token")
    return subject
