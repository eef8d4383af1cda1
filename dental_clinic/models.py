from __future__ import annotations

import datetime as dt

from sqlalchemy import BigInteger, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class PatientRow(Base):
    __tablename__ = "patient"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False)
    domicilio: Mapped[str] = mapped_column(String(160), nullable=False, default="")
    dni: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(120), nullable=False)
    admission_date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        return f"PatientRow({self.id}, {self.name} {self.last_name}, dni={self.dni})"


class DentistRow(Base):
    __tablename__ = "dentist"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False)
    license: Mapped[str] = mapped_column(String(40), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"DentistRow({self.id}, {self.name} {self.last_name}, license={self.license})"


class AppointmentRow(Base):
    __tablename__ = "appointment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    hour: Mapped[str] = mapped_column(String(8), nullable=False)  # hh:mm:ss
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # nessuna relationship/cascade: la delete di paziente o dentista non tocca i turni
    patient_id: Mapped[int] = mapped_column(ForeignKey("patient.id"), nullable=False)
    dentist_id: Mapped[int] = mapped_column(ForeignKey("dentist.id"), nullable=False)

    def __repr__(self) -> str:
        return f"AppointmentRow({self.id}, {self.date} {self.hour})"
