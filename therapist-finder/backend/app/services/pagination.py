"""
Paginación del listado: orden por nombre, skip/limit, total independiente de la ventana.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from pydantic import BaseModel

from ..models.therapist import TherapistPublic


class Page(BaseModel):
    page: int
    limit: int
    total: int
    data: List[TherapistPublic] = []


def window(page: int, limit: int) -> Tuple[int, int]:
    return (page - 1) * limit, limit


def sort_key(doc: Mapping[str, Any]) -> str:
    return str(doc.get("name") or "")


def paginate(docs: Sequence[Dict[str, Any]], page: int, limit: int) -> Tuple[int, List[Dict[str, Any]]]:
    """sorted() es estable: empates conservan el orden de inserción."""
    skip, take = window(page, limit)
    ordered = sorted(docs, key=sort_key)
    return len(ordered), ordered[skip:skip + take]
