# app/db/memory.py
"""
Store en memoria con la misma semántica que el de Mongo.
Para desarrollo local (SEED_CSV) y pruebas sin servidor.

Diferencia conocida: la búsqueda larga compara tokens completos (sin stemming
ni stopwords), mientras que $text de Mongo aplica stemming en inglés.
"""
from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId

from ..services import facets
from ..services.filters import FilterCriteria
from ..services.pagination import paginate
from ..services.query_planner import record_matches
from .store import TherapistStore, parse_object_id


class MemoryTherapistStore(TherapistStore):
    def __init__(self, docs: Optional[Sequence[Dict[str, Any]]] = None):
        self._docs: List[Dict[str, Any]] = []
        if docs:
            self._insert(docs)

    def _insert(self, docs: Sequence[Dict[str, Any]]) -> int:
        for d in docs:
            doc = copy.deepcopy(dict(d))
            doc.setdefault("_id", ObjectId())
            doc.setdefault("created_at", datetime.now(timezone.utc))
            self._docs.append(doc)
        return len(docs)

    async def search(self, criteria: FilterCriteria) -> Tuple[int, List[Dict[str, Any]]]:
        matched = [d for d in self._docs if record_matches(d, criteria)]
        total, page = paginate(matched, criteria.page, criteria.limit)
        return total, copy.deepcopy(page)

    async def get(self, therapist_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(therapist_id)
        for d in self._docs:
            if d["_id"] == oid:
                return copy.deepcopy(d)
        return None

    async def facet_counts(self) -> facets.FacetCounts:
        return facets.from_documents(self._docs)

    async def count(self) -> int:
        return len(self._docs)

    async def replace_all(self, docs: Sequence[Dict[str, Any]]) -> int:
        self._docs = []
        return self._insert(docs)
