# app/db/store.py
"""
Interfaz del store de terapeutas y su construcción en el arranque.

El handle se crea explícitamente en el lifespan (open_store) y se cuelga de
app.state.store; no hay conexión global a nivel de módulo.
"""
from __future__ import annotations

import abc
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId

from ..core.config import Settings
from ..core.errors import InvalidTherapistId
from ..services.facets import FacetCounts
from ..services.filters import FilterCriteria

logger = logging.getLogger("app.db")


def parse_object_id(raw_id: str) -> ObjectId:
    if not ObjectId.is_valid(raw_id):
        raise InvalidTherapistId(raw_id)
    return ObjectId(raw_id)


class TherapistStore(abc.ABC):
    """Solo lectura para la API; replace_all existe para el import."""

    @abc.abstractmethod
    async def search(self, criteria: FilterCriteria) -> Tuple[int, List[Dict[str, Any]]]:
        """(total de coincidencias, página ordenada por nombre)."""

    @abc.abstractmethod
    async def get(self, therapist_id: str) -> Optional[Dict[str, Any]]:
        """None si el id es válido pero no existe; InvalidTherapistId si está mal formado."""

    @abc.abstractmethod
    async def facet_counts(self) -> FacetCounts:
        ...

    @abc.abstractmethod
    async def count(self) -> int:
        ...

    @abc.abstractmethod
    async def replace_all(self, docs: Sequence[Dict[str, Any]]) -> int:
        ...

    async def ensure_indexes(self) -> None:
        return None

    async def close(self) -> None:
        return None


def open_store(settings: Settings) -> TherapistStore:
    backend = settings.STORE_BACKEND
    if backend == "memory":
        from .memory import MemoryTherapistStore
        logger.info("Using in-memory therapist store")
        return MemoryTherapistStore()
    if backend == "mongo":
        from .mongo import MongoTherapistStore
        return MongoTherapistStore.connect(
            settings.MONGO_URI,
            settings.MONGO_DB,
            settings.MONGO_COLLECTION,
            timeout_ms=settings.MONGO_TIMEOUT_MS,
        )
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")
