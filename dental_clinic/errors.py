from __future__ import annotations


class ClinicError(Exception):
    """Errore di dominio: il messaggio e' quello restituito al client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(ClinicError):
    pass


class ConflictError(ClinicError):
    pass


class StorageError(ClinicError):
    """Errore SQL / driver: il dettaglio resta nei log, non arriva al client."""
    pass


class InvalidFieldError(ClinicError):
    """Campo obbligatorio mancante o in formato non valido."""
    pass
