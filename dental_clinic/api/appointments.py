from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from ..config import Settings
from ..domain import Appointment
from ..errors import ClinicError
from ..services import AppointmentServiceProtocol
from ..validation import validate_appointment, validate_date, validate_hour, validate_schedule
from .deps import get_app_settings, get_appointment_service, require_token
from .web import ApiError, parse_int, success

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.get("/{id}")
def get_appointment(
    id: str, service: AppointmentServiceProtocol = Depends(get_appointment_service)
) -> JSONResponse:
    appointment_id = parse_int(id, "invalid id")
    try:
        appointment = service.get_by_id(appointment_id)
    except ClinicError as e:
        raise ApiError(404, str(e)) from e
    return success(200, appointment)


@router.get("/dni/{dni}")
def get_appointments_by_dni(
    dni: str, service: AppointmentServiceProtocol = Depends(get_appointment_service)
) -> JSONResponse:
    patient_dni = parse_int(dni, "invalid dni")
    try:
        appointments = service.get_by_dni(patient_dni)
    except ClinicError as e:
        raise ApiError(404, str(e)) from e
    return success(200, appointments)


@router.post("", dependencies=[Depends(require_token)])
def create_appointment(
    appointment: Appointment,
    service: AppointmentServiceProtocol = Depends(get_appointment_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    try:
        validate_appointment(appointment, settings.strict_datetime_validation)
        created = service.create(appointment)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(201, created)


@router.post("/dni/license", dependencies=[Depends(require_token)])
def create_appointment_by_dni_and_license(
    appointment: Appointment,
    dni: str | None = Query(default=None),
    license: str = Query(default=""),
    service: AppointmentServiceProtocol = Depends(get_appointment_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Prenotazione indicando il dni del paziente e la matricola del dentista:
    paziente e dentista nel body vengono ignorati.
    """
    patient_dni = parse_int(dni, "invalid dni")
    try:
        validate_schedule(appointment, settings.strict_datetime_validation)
        created = service.create_by_dni_and_license(patient_dni, license, appointment)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(201, created)


@router.put("/{id}", dependencies=[Depends(require_token)])
def replace_appointment(
    id: str,
    appointment: Appointment,
    service: AppointmentServiceProtocol = Depends(get_appointment_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    appointment_id = parse_int(id, "invalid id")
    try:
        validate_appointment(appointment, settings.strict_datetime_validation)
        updated = service.update(appointment_id, appointment)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(200, updated)


@router.patch("/{id}", dependencies=[Depends(require_token)])
def patch_appointment(
    id: str,
    appointment: Appointment,
    service: AppointmentServiceProtocol = Depends(get_appointment_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    appointment_id = parse_int(id, "invalid id")
    strict = settings.strict_datetime_validation
    try:
        if appointment.date != "":
            validate_date(appointment.date, "date", strict)
        if appointment.hour != "":
            validate_hour(appointment.hour, strict)
        updated = service.update(appointment_id, appointment)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(200, updated)


@router.delete("/{id}", dependencies=[Depends(require_token)])
def delete_appointment(
    id: str, service: AppointmentServiceProtocol = Depends(get_appointment_service)
) -> Response:
    appointment_id = parse_int(id, "invalid id")
    try:
        service.delete(appointment_id)
    except ClinicError as e:
        raise ApiError(404, str(e)) from e
    return success(204, f"appointment {appointment_id} deleted")
