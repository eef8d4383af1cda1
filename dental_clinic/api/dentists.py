from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from ..domain import Dentist
from ..errors import ClinicError
from ..services import DentistServiceProtocol
from ..validation import validate_dentist
from .deps import get_dentist_service, require_token
from .web import ApiError, parse_int, success

router = APIRouter(prefix="/dentists", tags=["dentists"])


@router.get("/{id}")
def get_dentist(id: str, service: DentistServiceProtocol = Depends(get_dentist_service)) -> JSONResponse:
    dentist_id = parse_int(id, "invalid id")
    try:
        dentist = service.get_by_id(dentist_id)
    except ClinicError as e:
        raise ApiError(404, str(e)) from e
    return success(200, dentist)


@router.post("", dependencies=[Depends(require_token)])
def create_dentist(dentist: Dentist, service: DentistServiceProtocol = Depends(get_dentist_service)) -> JSONResponse:
    try:
        validate_dentist(dentist)
        created = service.create(dentist)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(201, created)


@router.put("/{id}", dependencies=[Depends(require_token)])
def replace_dentist(
    id: str,
    dentist: Dentist,
    service: DentistServiceProtocol = Depends(get_dentist_service),
) -> JSONResponse:
    dentist_id = parse_int(id, "invalid id")
    try:
        validate_dentist(dentist)
        updated = service.update(dentist_id, dentist)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(200, updated)


@router.patch("/{id}", dependencies=[Depends(require_token)])
def patch_dentist(
    id: str,
    dentist: Dentist,
    service: DentistServiceProtocol = Depends(get_dentist_service),
) -> JSONResponse:
    dentist_id = parse_int(id, "invalid id")
    try:
        updated = service.update(dentist_id, dentist)
    except ClinicError as e:
        raise ApiError(400, str(e)) from e
    return success(200, updated)


@router.delete("/{id}", dependencies=[Depends(require_token)])
def delete_dentist(id: str, service: DentistServiceProtocol = Depends(get_dentist_service)) -> Response:
    dentist_id = parse_int(id, "invalid id")
    try:
        service.delete(dentist_id)
    except ClinicError as e:
        raise ApiError(404, str(e)) from e
    return success(204, f"dentist {dentist_id} deleted")
