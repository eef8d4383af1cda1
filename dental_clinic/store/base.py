from __future__ import annotations

import datetime as dt
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select

from ..db import Base, Database
from ..domain import Entity
from ..errors import NotFoundError

E = TypeVar("E", bound=Entity)
R = TypeVar("R", bound=Base)

# formato di visualizzazione accettato in input, ISO per la persistenza
DATE_INPUT_FORMATS = ("%d-%m-%Y", "%Y-%m-%d")
HOUR_FORMAT = "%H:%M:%S"


def parse_date(value: str) -> dt.date:
    """Converte "dd-mm-yyyy" o "yyyy-mm-dd" in date. ValueError se non valida."""
    for fmt in DATE_INPUT_FORMATS:
        try:
            return dt.datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unparseable date: {value!r}")


def format_date(value: dt.date | str) -> str:
    if isinstance(value, str):
        return value
    return value.isoformat()


def normalize_hour(value: str) -> str:
    """"9:5:0" -> "09:05:00". ValueError se fuori range."""
    return dt.datetime.strptime(value, HOUR_FORMAT).strftime(HOUR_FORMAT)


class SqlStore(Generic[E, R]):
    """
    Mapping diretto fra un'entita' e una tabella.

    Le sottoclassi dichiarano modello ORM, modello di dominio e la conversione
    riga <-> entita'; CRUD e merge per gli aggiornamenti parziali sono comuni.
    """

    entity_name: str = ""
    row_model: type[R]
    entity_model: type[E]

    def __init__(self, db: Database, explicit_fields: bool = False) -> None:
        self.db = db
        # True: il merge applica i campi presenti nel body anche se vuoti / zero
        self.explicit_fields = explicit_fields

    # --- mapping colonne <-> campi ---

    def to_entity(self, row: R) -> E:
        raise NotImplementedError

    def to_columns(self, entity: E) -> dict[str, Any]:
        raise NotImplementedError

    # --- query ---

    def get_by_id(self, id: int) -> E:
        with self.db.session() as s:
            row = s.get(self.row_model, id)
            if row is None:
                raise NotFoundError(f"{self.entity_name} {id} not found")
            return self.to_entity(row)

    def _get_one_by(self, column: str, value: Any) -> E:
        with self.db.session() as s:
            row = s.scalars(
                select(self.row_model).where(getattr(self.row_model, column) == value).limit(1)
            ).first()
            if row is None:
                raise NotFoundError(f"{self.entity_name} with {column} {value} not found")
            return self.to_entity(row)

    # --- scrittura ---

    def create(self, entity: E) -> E:
        with self.db.session() as s:
            row = self.row_model(**self.to_columns(entity))
            s.add(row)
            s.flush()
            return self.to_entity(row)

    def update(self, entity: E) -> E:
        with self.db.session() as s:
            merged = self.complete_empty_attributes(entity)
            row = s.get(self.row_model, merged.id)
            for column, value in self.to_columns(merged).items():
                setattr(row, column, value)
            s.flush()
            return self.to_entity(row)

    def delete(self, id: int) -> None:
        """Cancellazione fisica, senza controllare righe che la referenziano."""
        with self.db.session() as s:
            result = s.execute(delete(self.row_model).where(self.row_model.id == id))
            if result.rowcount == 0:
                raise NotFoundError(f"{self.entity_name} {id} not found")

    def complete_empty_attributes(self, partial: E) -> E:
        """
        Parte dalla riga salvata e sovrascrive i campi forniti in `partial`.

        Di default "fornito" vuol dire non vuoto / non zero: uno 0 o una
        stringa vuota lasciano il valore salvato com'e'.
        """
        current = self.get_by_id(partial.id)
        changes = {
            name: getattr(partial, name)
            for name in self.entity_model.mutable_fields
            if partial.provided(name, self.explicit_fields)
        }
        return current.model_copy(update=changes)
