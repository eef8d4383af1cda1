from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from ..config import Settings
from ..domain import Patient
from ..errors import ClinicError
from ..services import PatientServiceProtocol
from ..validation import validate_date, validate_patient
from .deps import get_app_settings, get_patient_service, require_token
from .web import ApiError, parse_int, success

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("/{id}")
def get_patient(id: str, service: PatientServiceProtocol = Depends(get_patient_service)) -> JSONResponse:
    patient_id = parse_int(id, "invalid id")
    try:
        patient = service.get_by_id(patient_id)
    except ClinicError as e:
        raise ApiError(404, str(e)) from e
    return success(200, patient)


@router.post("", dependencies=[Depends(require_token)])
def create_patient(
    patient: Patient,
    service: PatientServiceProtocol = Depends(get_patient_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    try:
        validate_patient(patient, settings.strict_datetime_validation)
        created = service.create(patient)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(201, created)


@router.put("/{id}", dependencies=[Depends(require_token)])
def replace_patient(
    id: str,
    patient: Patient,
    service: PatientServiceProtocol = Depends(get_patient_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    patient_id = parse_int(id, "invalid id")
    try:
        validate_patient(patient, settings.strict_datetime_validation)
        updated = service.update(patient_id, patient)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(200, updated)


@router.patch("/{id}", dependencies=[Depends(require_token)])
def patch_patient(
    id: str,
    patient: Patient,
    service: PatientServiceProtocol = Depends(get_patient_service),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    patient_id = parse_int(id, "invalid id")
    try:
        # la data si ricontrolla solo se e' nel body
        if patient.admission_date != "":
            validate_date(patient.admission_date, "admission_date", settings.strict_datetime_validation)
        updated = service.update(patient_id, patient)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(200, updated)


@router.delete("/{id}", dependencies=[Depends(require_token)])
def delete_patient(id: str, service: PatientServiceProtocol = Depends(get_patient_service)) -> Response:
    patient_id = parse_int(id, "invalid id")
    try:
        service.delete(patient_id)
    except ClinicError as e:
        raise ApiError(404, str(e)) from e
    return success(204, f"patient {patient_id} deleted")
