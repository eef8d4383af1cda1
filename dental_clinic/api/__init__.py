"""Handler HTTP: un router per entita', envelope ed exception handler comuni."""

from .appointments import router as appointments_router
from .dentists import router as dentists_router
from .errors import register_exception_handlers
from .patients import router as patients_router

__all__ = [
    "appointments_router",
    "dentists_router",
    "patients_router",
    "register_exception_handlers",
]
