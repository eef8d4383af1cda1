from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# DB SQLite su file nella root del progetto se DB_URL non e' impostata
DEFAULT_DB_PATH = Path(__file__).resolve().parents[1] / "dental_clinic.sqlite"
DEFAULT_DB_URL = f"sqlite:///{DEFAULT_DB_PATH}"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Configurazione letta una sola volta all'avvio."""

    db_url: str = DEFAULT_DB_URL
    db_echo: bool = False
    host: str = "127.0.0.1"
    port: int = 8080

    # In produzione: mettila in variabile d'ambiente
    jwt_secret: str = "CHANGE_ME_DEV_SECRET"
    jwt_alg: str = "HS256"
    access_token_expire_minutes: int = 60

    # AND sui range (comportamento storico) se False, OR se True
    strict_datetime_validation: bool = False
    # PATCH applica solo i campi presenti nel body, anche se vuoti / zero
    patch_explicit_fields: bool = False

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_url=os.getenv("DB_URL", DEFAULT_DB_URL),
            db_echo=_env_bool("DB_ECHO"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8080")),
            jwt_secret=os.getenv("JWT_SECRET", "CHANGE_ME_DEV_SECRET"),
            access_token_expire_minutes=int(os.getenv("JWT_EXPIRE_MINUTES", "60")),
            strict_datetime_validation=_env_bool("STRICT_DATETIME_VALIDATION"),
            patch_explicit_fields=_env_bool("PATCH_EXPLICIT_FIELDS"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
