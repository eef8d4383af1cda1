from __future__ import annotations

from typing import Any

from ..domain import Patient
from ..models import PatientRow
from .base import SqlStore, format_date, parse_date


def patient_from_row(row: PatientRow) -> Patient:
    return Patient(
        id=row.id,
        name=row.name,
        last_name=row.last_name,
        domicilio=row.domicilio,
        dni=row.dni,
        email=row.email,
        admission_date=format_date(row.admission_date),
    )


class PatientStore(SqlStore[Patient, PatientRow]):
    entity_name = "patient"
    row_model = PatientRow
    entity_model = Patient

    def to_entity(self, row: PatientRow) -> Patient:
        return patient_from_row(row)

    def to_columns(self, entity: Patient) -> dict[str, Any]:
        return {
            "name": entity.name,
            "last_name": entity.last_name,
            "domicilio": entity.domicilio,
            "dni": entity.dni,
            "email": entity.email,
            "admission_date": parse_date(entity.admission_date),
        }

    def get_by_dni(self, dni: int) -> Patient:
        return self._get_one_by("dni", dni)
