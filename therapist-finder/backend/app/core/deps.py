"""
Dependencias comunes para FastAPI:
- current_store (handle creado en el lifespan)
"""
from fastapi import Request

from ..db.store import TherapistStore


def current_store(request: Request) -> TherapistStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store no inicializado. Se abre en el lifespan de la app.")
    return store
