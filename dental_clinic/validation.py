"""
Validazione dei body prima di create / update.

Il controllo dei range su data e ora scarta il valore solo se TUTTI i
componenti sono fuori range (AND). E' il comportamento storico del servizio,
per cui ad es. "2024-13-45" passa e viene poi rifiutato dallo store quando
prova a convertirlo. Con strict=True il controllo diventa un OR sui
componenti letti nel layout corretto (yyyy-mm-dd o dd-mm-yyyy).
"""

from __future__ import annotations

import re

from .domain import Appointment, Dentist, Entity, Patient
from .errors import InvalidFieldError

_INT_RE = re.compile(r"^[+-]?\d+$")

PATIENT_REQUIRED = ("name", "last_name", "dni", "email", "admission_date")
DENTIST_REQUIRED = ("name", "last_name", "license")


def _out_of_range(value: int, low: int, high: int) -> bool:
    return value < low or value > high


def _split_numbers(value: str, sep: str, field: str, layout: str) -> list[int]:
    parts = value.split(sep)
    if len(parts) != 3:
        raise InvalidFieldError(f"invalid {field}, must be in format: {layout}")
    if not all(_INT_RE.match(p) for p in parts):
        raise InvalidFieldError(f"invalid {field}, must be numbers")
    return [int(p) for p in parts]


def require_fields(entity: Entity, fields: tuple[str, ...]) -> None:
    """Controlla i campi nell'ordine dato e segnala il primo vuoto."""
    for name in fields:
        if not entity.provided(name):
            raise InvalidFieldError(f"{name} can't be empty")


def validate_patient(patient: Patient, strict: bool = False) -> None:
    require_fields(patient, PATIENT_REQUIRED)
    validate_date(patient.admission_date, "admission_date", strict)


def validate_dentist(dentist: Dentist) -> None:
    require_fields(dentist, DENTIST_REQUIRED)


def validate_appointment(appointment: Appointment, strict: bool = False) -> None:
    if appointment.description == "":
        raise InvalidFieldError("Description can't be empty")
    if appointment.patient.is_zero():
        raise InvalidFieldError("Patient can't be empty")
    if appointment.patient.id == 0:
        raise InvalidFieldError("Patient.id can't be empty")
    if appointment.dentist.is_zero():
        raise InvalidFieldError("Dentist can't be empty")
    if appointment.dentist.id == 0:
        raise InvalidFieldError("Dentist.id can't be empty")
    validate_schedule(appointment, strict)


def validate_schedule(appointment: Appointment, strict: bool = False) -> None:
    """Data e ora di un turno, entrambe obbligatorie."""
    if appointment.date == "":
        raise InvalidFieldError("date can't be empty")
    validate_date(appointment.date, "date", strict)
    validate_hour(appointment.hour, strict)


def validate_date(value: str, field: str = "date", strict: bool = False) -> None:
    first, month, last = _split_numbers(value, "-", field, "dd-mm-yyyy")
    if strict:
        # layout ISO se il primo componente ha 4 cifre
        year, day = (first, last) if len(value.split("-")[0].lstrip("+-")) == 4 else (last, first)
        invalid = _out_of_range(day, 1, 31) or _out_of_range(month, 1, 12) or _out_of_range(year, 1, 9999)
    else:
        invalid = (
            _out_of_range(last, 1, 31)
            and _out_of_range(month, 1, 12)
            and _out_of_range(first, 1, 9999)
        )
    if invalid:
        raise InvalidFieldError(f"invalid {field}, date must be between 1 and 31-12-9999")


def validate_hour(value: str, strict: bool = False) -> None:
    if value == "":
        raise InvalidFieldError("hour can't be empty")
    hour, minute, second = _split_numbers(value, ":", "hour", "hh:mm:ss")
    checks = (
        _out_of_range(second, 0, 59),
        _out_of_range(minute, 0, 59),
        _out_of_range(hour, 0, 23),
    )
    if any(checks) if strict else all(checks):
        raise InvalidFieldError("invalid hour, hour must be between 00:00:00 and 23:59:59")
