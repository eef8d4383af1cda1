from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, Field, StrictInt, StrictStr


class Entity(BaseModel):
    """
    Valore di dominio scambiato fra i livelli e serializzato in JSON.

    I campi hanno sempre un valore zero ("" / 0): un campo assente nel body
    e un campo vuoto sono indistinguibili, a meno di guardare model_fields_set.
    I tipi sono stretti: "30111222" non diventa un intero.
    """

    # campi aggiornabili con PUT / PATCH (l'id non si aggiorna mai)
    mutable_fields: ClassVar[tuple[str, ...]] = ()

    id: StrictInt = 0

    def is_zero(self) -> bool:
        return self.model_dump() == type(self)().model_dump()

    def provided(self, name: str, explicit: bool = False) -> bool:
        """True se il campo va applicato in un aggiornamento parziale."""
        if explicit:
            return name in self.model_fields_set
        value: Any = getattr(self, name)
        if isinstance(value, Entity):
            return value.id != 0
        return value not in ("", 0, None)


class Patient(Entity):
    mutable_fields: ClassVar[tuple[str, ...]] = (
        "name", "last_name", "domicilio", "dni", "email", "admission_date",
    )

    name: StrictStr = ""
    last_name: StrictStr = ""
    domicilio: StrictStr = ""
    dni: StrictInt = 0
    email: StrictStr = ""
    admission_date: StrictStr = ""


class Dentist(Entity):
    mutable_fields: ClassVar[tuple[str, ...]] = ("name", "last_name", "license")

    name: StrictStr = ""
    last_name: StrictStr = ""
    license: StrictStr = ""


class Appointment(Entity):
    mutable_fields: ClassVar[tuple[str, ...]] = ("date", "hour", "description")

    date: StrictStr = ""
    hour: StrictStr = ""
    description: StrictStr = ""
    patient: Patient = Field(default_factory=Patient)
    dentist: Dentist = Field(default_factory=Dentist)
