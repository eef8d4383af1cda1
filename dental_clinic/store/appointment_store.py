from __future__ import annotations

from typing import Any

from sqlalchemy import Row, Select, select

from ..domain import Appointment, Dentist, Patient
from ..errors import NotFoundError
from ..models import AppointmentRow, DentistRow, PatientRow
from .base import SqlStore, format_date, normalize_hour, parse_date
from .dentist_store import dentist_from_row
from .patient_store import patient_from_row


def _joined() -> Select:
    # INNER JOIN: un turno con paziente o dentista cancellato non viene restituito
    return (
        select(AppointmentRow, PatientRow, DentistRow)
        .join(PatientRow, AppointmentRow.patient_id == PatientRow.id)
        .join(DentistRow, AppointmentRow.dentist_id == DentistRow.id)
    )


class AppointmentStore(SqlStore[Appointment, AppointmentRow]):
    """
    Turni: la tabella contiene solo le FK, in lettura paziente e dentista
    vengono materializzati completi con una join.
    """

    entity_name = "appointment"
    row_model = AppointmentRow
    entity_model = Appointment

    def to_entity(self, row: Row) -> Appointment:
        appointment, patient, dentist = row
        return Appointment(
            id=appointment.id,
            date=format_date(appointment.date),
            hour=appointment.hour,
            description=appointment.description,
            patient=patient_from_row(patient),
            dentist=dentist_from_row(dentist),
        )

    def to_columns(self, entity: Appointment) -> dict[str, Any]:
        return {
            "date": parse_date(entity.date),
            "hour": normalize_hour(entity.hour),
            "description": entity.description,
            "patient_id": entity.patient.id,
            "dentist_id": entity.dentist.id,
        }

    def _normalized(self, entity: Appointment, **changes: Any) -> Appointment:
        columns = self.to_columns(entity)
        return entity.model_copy(
            update={"date": format_date(columns["date"]), "hour": columns["hour"], **changes}
        )

    def get_by_id(self, id: int) -> Appointment:
        with self.db.session() as s:
            row = s.execute(_joined().where(AppointmentRow.id == id)).first()
            if row is None:
                raise NotFoundError(f"appointment {id} not found")
            return self.to_entity(row)

    def get_by_dni(self, dni: int) -> list[Appointment]:
        with self.db.session() as s:
            rows = s.execute(_joined().where(PatientRow.dni == dni).order_by(AppointmentRow.id)).all()
            return [self.to_entity(r) for r in rows]

    def create(self, appointment: Appointment) -> Appointment:
        """Inserisce il turno: data riletta da dd-mm-yyyy / ISO, ora normalizzata a hh:mm:ss."""
        with self.db.session() as s:
            row = AppointmentRow(**self.to_columns(appointment))
            s.add(row)
            s.flush()
            return self._normalized(appointment, id=row.id)

    def update(self, appointment: Appointment) -> tuple[bool, bool, Appointment]:  # type: ignore[override]
        """
        Ritorna (patient_changed, dentist_changed, turno aggiornato).

        Se paziente o dentista cambiano, nel turno restituito c'e' solo lo stub
        ricevuto: tocca al repository ricaricare il record completo.
        """
        with self.db.session() as s:
            patient_changed, dentist_changed, merged = self.complete_empty_attributes(appointment)
            row = s.get(AppointmentRow, merged.id)
            for column, value in self.to_columns(merged).items():
                setattr(row, column, value)
            s.flush()
            return patient_changed, dentist_changed, self._normalized(merged)

    def complete_empty_attributes(  # type: ignore[override]
        self, partial: Appointment
    ) -> tuple[bool, bool, Appointment]:
        current = self.get_by_id(partial.id)
        changes: dict[str, Any] = {
            name: getattr(partial, name)
            for name in Appointment.mutable_fields
            if partial.provided(name, self.explicit_fields)
        }

        patient_changed = False
        if self._reference_given(partial, "patient") and partial.patient.id != current.patient.id:
            patient_changed = True
            changes["patient"] = Patient(id=partial.patient.id)

        dentist_changed = False
        if self._reference_given(partial, "dentist") and partial.dentist.id != current.dentist.id:
            dentist_changed = True
            changes["dentist"] = Dentist(id=partial.dentist.id)

        return patient_changed, dentist_changed, current.model_copy(update=changes)

    def _reference_given(self, partial: Appointment, name: str) -> bool:
        # un riferimento senza id non puo' sostituire quello salvato
        return partial.provided(name, self.explicit_fields) and getattr(partial, name).id != 0
