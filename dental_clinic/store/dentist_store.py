from __future__ import annotations

from typing import Any

from ..domain import Dentist
from ..models import DentistRow
from .base import SqlStore


def dentist_from_row(row: DentistRow) -> Dentist:
    return Dentist(id=row.id, name=row.name, last_name=row.last_name, license=row.license)


class DentistStore(SqlStore[Dentist, DentistRow]):
    entity_name = "dentist"
    row_model = DentistRow
    entity_model = Dentist

    def to_entity(self, row: DentistRow) -> Dentist:
        return dentist_from_row(row)

    def to_columns(self, entity: Dentist) -> dict[str, Any]:
        return {"name": entity.name, "last_name": entity.last_name, "license": entity.license}

    def get_by_license(self, license: str) -> Dentist:
        return self._get_one_by("license", license)
