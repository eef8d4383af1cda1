from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import FastAPI

from .api import appointments_router, dentists_router, patients_router, register_exception_handlers
from .config import Settings, get_settings
from .db import Database
from .repositories import AppointmentRepository, DentistRepository, PatientRepository
from .services import AppointmentService, DentistService, PatientService
from .store import AppointmentStore, DentistStore, PatientStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@dataclass(frozen=True)
class Services:
    patient: PatientService
    dentist: DentistService
    appointment: AppointmentService


def build_services(db: Database, settings: Settings) -> Services:
    """Store -> Repository -> Service, dal basso verso l'alto."""
    explicit = settings.patch_explicit_fields

    patient_store = PatientStore(db, explicit_fields=explicit)
    dentist_store = DentistStore(db, explicit_fields=explicit)
    appointment_store = AppointmentStore(db, explicit_fields=explicit)

    return Services(
        patient=PatientService(PatientRepository(db, patient_store)),
        dentist=DentistService(DentistRepository(db, dentist_store)),
        appointment=AppointmentService(
            AppointmentRepository(db, appointment_store, patient_store, dentist_store)
        ),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    db = Database(settings.db_url, echo=settings.db_echo)

    app = FastAPI(title="Dental Clinic API", version="1.0.0")
    app.state.settings = settings
    app.state.db = db
    services = build_services(db, settings)
    app.state.patient_service = services.patient
    app.state.dentist_service = services.dentist
    app.state.appointment_service = services.appointment

    register_exception_handlers(app)
    app.include_router(patients_router)
    app.include_router(dentists_router)
    app.include_router(appointments_router)

    # Startup / shutdown

    @app.on_event("startup")
    def startup() -> None:
        # Crea tabelle (idempotente)
        db.create_all()
        logger.info("Dental Clinic API pronta (db: %s)", db.url)

    @app.on_event("shutdown")
    def shutdown() -> None:
        db.dispose()

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    logger.info("Avvio su %s:%s", settings.host, settings.port)
    uvicorn.run("dental_clinic.api_main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
