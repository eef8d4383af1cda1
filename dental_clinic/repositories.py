from __future__ import annotations

import logging
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from .db import Database
from .domain import Appointment, Dentist, Entity, Patient
from .errors import ConflictError, NotFoundError, StorageError
from .store import AppointmentStore, DentistStore, PatientStore, SqlStore

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

# errori del driver o dati non convertibili (date / ore non valide)
STORAGE_ERRORS = (SQLAlchemyError, ValueError)


class CrudRepository(Generic[E]):
    """
    Regole di business sopra lo store.

    Ogni operazione gira in una sola transazione: se un passo fallisce
    si fa rollback di tutto. Gli errori arrivano al service gia' riscritti
    con nome entita' e chiave.
    """

    entity_name: str = ""
    # chiave naturale controllata da _check_unique
    unique_field: str | None = None

    def __init__(self, db: Database, storage: SqlStore) -> None:
        self.db = db
        self.storage = storage

    def _check_unique(self, entity: E, id: int | None) -> None:
        """Alza ConflictError se un'altra riga ha la stessa chiave naturale."""

    def _storage_error(self, action: str, id: int | None = None) -> StorageError:
        key = f" {id}" if id is not None else ""
        logger.error("Errore SQL su %s %s%s", action, self.entity_name, key, exc_info=True)
        return StorageError(f"error {action} {self.entity_name}")

    def get_by_id(self, id: int) -> E:
        try:
            return self.storage.get_by_id(id)
        except NotFoundError:
            raise NotFoundError(f"{self.entity_name} {id} not found") from None

    def create(self, entity: E) -> E:
        with self.db.session():
            self._check_unique(entity, None)
            try:
                created = self.storage.create(entity)
            except STORAGE_ERRORS as e:
                raise self._storage_error("creating") from e
        logger.info("Creato %s %s", self.entity_name, created.id)
        return created

    def update(self, id: int, entity: E) -> E:
        entity = entity.model_copy(update={"id": id})
        with self.db.session():
            # la chiave si controlla solo se l'aggiornamento la applica davvero
            if self.unique_field and entity.provided(self.unique_field, self.storage.explicit_fields):
                self._check_unique(entity, id)
            try:
                return self.storage.update(entity)
            except NotFoundError:
                raise NotFoundError(f"{self.entity_name} {id} not found") from None
            except STORAGE_ERRORS as e:
                raise self._storage_error("updating", id) from e

    def delete(self, id: int) -> None:
        try:
            self.storage.delete(id)
        except NotFoundError:
            raise NotFoundError(f"{self.entity_name} {id} not found") from None
        except SQLAlchemyError as e:
            raise self._storage_error("deleting", id) from e
        logger.info("Cancellato %s %s", self.entity_name, id)


class PatientRepository(CrudRepository[Patient]):
    entity_name = "patient"
    unique_field = "dni"
    storage: PatientStore

    def _check_unique(self, entity: Patient, id: int | None) -> None:
        try:
            existing = self.storage.get_by_dni(entity.dni)
        except NotFoundError:
            return  # nessun paziente con quel dni: via libera
        if existing.id != id:
            raise ConflictError("dni already exists")


class DentistRepository(CrudRepository[Dentist]):
    entity_name = "dentist"
    unique_field = "license"
    storage: DentistStore

    def _check_unique(self, entity: Dentist, id: int | None) -> None:
        try:
            existing = self.storage.get_by_license(entity.license)
        except NotFoundError:
            return
        if existing.id != id:
            raise ConflictError("license already exists")


class AppointmentRepository(CrudRepository[Appointment]):
    """Turni: usa anche gli store di pazienti e dentisti per lookup e arricchimento."""

    entity_name = "appointment"
    storage: AppointmentStore

    def __init__(
        self,
        db: Database,
        storage: AppointmentStore,
        patient_store: PatientStore,
        dentist_store: DentistStore,
    ) -> None:
        super().__init__(db, storage)
        self.patient_store = patient_store
        self.dentist_store = dentist_store

    def get_by_dni(self, dni: int) -> list[Appointment]:
        try:
            return self.storage.get_by_dni(dni)
        except SQLAlchemyError:
            logger.error("Errore SQL cercando turni per dni %s", dni, exc_info=True)
            raise NotFoundError(f"appointments with patient.dni: {dni} not found") from None

    def create(self, appointment: Appointment) -> Appointment:
        with self.db.session():
            # paziente e dentista devono esistere; nel turno finiscono i record completi
            patient = self.patient_store.get_by_id(appointment.patient.id)
            dentist = self.dentist_store.get_by_id(appointment.dentist.id)
            return self._insert(appointment.model_copy(update={"patient": patient, "dentist": dentist}))

    def create_by_dni_and_license(self, dni: int, license: str, appointment: Appointment) -> Appointment:
        """Crea il turno risolvendo il paziente per dni e il dentista per matricola."""
        with self.db.session():
            patient = self.patient_store.get_by_dni(dni)
            dentist = self.dentist_store.get_by_license(license)
            return self._insert(appointment.model_copy(update={"patient": patient, "dentist": dentist}))

    def _insert(self, appointment: Appointment) -> Appointment:
        try:
            created = self.storage.create(appointment)
        except STORAGE_ERRORS as e:
            raise self._storage_error("creating") from e
        logger.info(
            "Creato appointment %s (patient %s, dentist %s)",
            created.id, created.patient.id, created.dentist.id,
        )
        return created

    def update(self, id: int, appointment: Appointment) -> Appointment:
        appointment = appointment.model_copy(update={"id": id})
        with self.db.session():
            try:
                patient_changed, dentist_changed, updated = self.storage.update(appointment)
            except NotFoundError:
                raise NotFoundError(f"appointment {id} not found") from None
            except STORAGE_ERRORS as e:
                raise self._storage_error("updating", id) from e

            # lo store restituisce solo l'id dei riferimenti cambiati
            if patient_changed:
                updated.patient = self.patient_store.get_by_id(updated.patient.id)
            if dentist_changed:
                updated.dentist = self.dentist_store.get_by_id(updated.dentist.id)
            return updated
