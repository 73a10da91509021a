# backend/app/db/indexes.py
"""
Índices de la colección de terapeutas: texto para la búsqueda larga
y simples para los filtros por igualdad / rango.
"""
from pymongo import ASCENDING, TEXT
from pymongo.collection import Collection

from ..services.query_planner import TEXT_INDEX_FIELDS


def ensure_indexes(col: Collection) -> None:
    # Mongo admite un solo índice de texto por colección
    col.create_index([(f, TEXT) for f in TEXT_INDEX_FIELDS], name="therapist_text")
    col.create_index([("name", ASCENDING)])
    col.create_index([("city", ASCENDING)])
    col.create_index([("gender", ASCENDING)])
    col.create_index([("experience_years", ASCENDING)])
    col.create_index([("fee_amount", ASCENDING)])
