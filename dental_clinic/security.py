from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from .config import Settings


def create_access_token(settings: Settings, subject: str, extra: dict[str, Any] | None = None) -> str:
    """
    Token da mettere nell'header `token` delle rotte che modificano dati.

    subject: tipicamente il nome dell'operatore o del sistema chiamante.
    Usa datetime timezone-aware per evitare offset/bug su timestamp.
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.access_token_expire_minutes)

    payload: dict[str, Any] = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    if extra:
        payload.update(extra)

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)


def decode_token(settings: Settings, token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])


def get_subject(settings: Settings, token: str) -> str | None:
    try:
        payload = decode_token(settings, token)
        return payload.get("sub")
    except JWTError:
        return None
