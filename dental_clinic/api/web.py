"""Envelope uniforme delle risposte e parsing dei parametri di path/query."""

from __future__ import annotations

import re
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

_INT_RE = re.compile(r"^[+-]?\d+$")


class ApiError(Exception):
    """Errore HTTP: lo status lo sceglie l'handler che lo solleva."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def success(status_code: int, data: Any) -> Response:
    if status_code == 204:
        # il 204 non ha body: il messaggio non arriva al client
        return Response(status_code=204)
    return JSONResponse(status_code=status_code, content={"data": jsonable_encoder(data)})


def failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": status_code, "error": message})


def parse_int(value: str | None, message: str) -> int:
    """Solo cifre con segno opzionale; altrimenti 400 con `message`."""
    if value is None or not _INT_RE.match(value):
        raise ApiError(400, message)
    return int(value)
