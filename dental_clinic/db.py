from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base ORM per tutti i modelli."""
    pass


class Database:
    """
    Handle del database condiviso dal processo.

    Viene creato una volta all'avvio, passato per riferimento a ogni store
    e chiuso allo shutdown con dispose().

    session() apre una transazione; se ne e' gia' aperta una nello stesso
    contesto la riusa, cosi' un repository puo' chiamare piu' store dentro
    un'unica transazione.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine: Engine = create_engine(
            url,
            echo=echo,              # metti True se vuoi vedere le query
            future=True,
            connect_args=connect_args,
        )
        self._session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            future=True,
            expire_on_commit=False,
        )
        self._current: ContextVar[Session | None] = ContextVar(f"session_{id(self)}", default=None)

    @property
    def url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    def create_all(self) -> None:
        """Crea le tabelle se non esistono."""
        # registra i modelli nel metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Tabelle pronte su %s", self.url)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Context manager per gestire correttamente la sessione:
        - commit se tutto ok
        - rollback su eccezioni
        - close sempre
        """
        active = self._current.get()
        if active is not None:
            yield active
            return

        session: Session = self._session_factory()
        token = self._current.set(session)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            self._current.reset(token)
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
