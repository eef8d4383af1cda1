from __future__ import annotations

from typing import Generic, Protocol, TypeVar

from .domain import Appointment, Dentist, Entity, Patient
from .repositories import AppointmentRepository, CrudRepository, DentistRepository, PatientRepository

E = TypeVar("E", bound=Entity)


# =========================
# Interfacce usate dagli handler
# =========================
class PatientServiceProtocol(Protocol):
    def get_by_id(self, id: int) -> Patient: ...
    def create(self, patient: Patient) -> Patient: ...
    def update(self, id: int, patient: Patient) -> Patient: ...
    def delete(self, id: int) -> None: ...


class DentistServiceProtocol(Protocol):
    def get_by_id(self, id: int) -> Dentist: ...
    def create(self, dentist: Dentist) -> Dentist: ...
    def update(self, id: int, dentist: Dentist) -> Dentist: ...
    def delete(self, id: int) -> None: ...


class AppointmentServiceProtocol(Protocol):
    def get_by_id(self, id: int) -> Appointment: ...
    def get_by_dni(self, dni: int) -> list[Appointment]: ...
    def create(self, appointment: Appointment) -> Appointment: ...
    def create_by_dni_and_license(self, dni: int, license: str, appointment: Appointment) -> Appointment: ...
    def update(self, id: int, appointment: Appointment) -> Appointment: ...
    def delete(self, id: int) -> None: ...


# =========================
# Implementazioni: delega pura al repository
# =========================
class CrudService(Generic[E]):
    def __init__(self, repository: CrudRepository[E]) -> None:
        self.repository = repository

    def get_by_id(self, id: int) -> E:
        return self.repository.get_by_id(id)

    def create(self, entity: E) -> E:
        return self.repository.create(entity)

    def update(self, id: int, entity: E) -> E:
        return self.repository.update(id, entity)

    def delete(self, id: int) -> None:
        self.repository.delete(id)


class PatientService(CrudService[Patient]):
    repository: PatientRepository


class DentistService(CrudService[Dentist]):
    repository: DentistRepository


class AppointmentService(CrudService[Appointment]):
    repository: AppointmentRepository

    def get_by_dni(self, dni: int) -> list[Appointment]:
        return self.repository.get_by_dni(dni)

    def create_by_dni_and_license(self, dni: int, license: str, appointment: Appointment) -> Appointment:
        return self.repository.create_by_dni_and_license(dni, license, appointment)
