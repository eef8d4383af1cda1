"""Store SQL: un mapping diretto fra entita' e tabelle."""

from .appointment_store import AppointmentStore
from .base import SqlStore, format_date, normalize_hour, parse_date
from .dentist_store import DentistStore
from .patient_store import PatientStore

__all__ = [
    "AppointmentStore",
    "DentistStore",
    "PatientStore",
    "SqlStore",
    "format_date",
    "normalize_hour",
    "parse_date",
]
