"""
Planner: FilterCriteria -> pipelines de Mongo (datos paginados + facetas),
y su equivalente en memoria (record_matches) para MemoryTherapistStore.

- Todas las condiciones activas se combinan con AND.
- Búsqueda corta (< 3 chars): regex case-insensitive (escapada) sobre
  name/specialties/education/about. Búsqueda larga: $text (índice de texto);
  los tokenizadores descartan términos cortos, por eso el corte en 3.
- Las facetas se calculan sobre la colección COMPLETA, sin filtros.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from unidecode import unidecode

from .filters import ExperienceBucket, FeeBucket, FilterCriteria, Range
from .modes import matches_any_mode, variants_for

SEARCH_FIELDS = ("name", "specialties", "education", "about")
TEXT_INDEX_FIELDS = SEARCH_FIELDS
SORT_FIELD = "name"


# ---------- Mongo ----------
def build_search_stage(criteria: FilterCriteria) -> Optional[Dict[str, Any]]:
    if not criteria.search:
        return None
    if criteria.is_short_search:
        ci = {"$regex": re.escape(criteria.search), "$options": "i"}
        return {"$match": {"$or": [{f: ci} for f in SEARCH_FIELDS]}}
    return {"$match": {"$text": {"$search": criteria.search}}}


def build_match(criteria: FilterCriteria) -> Dict[str, Any]:
    match: Dict[str, Any] = {}
    if criteria.cities:
        match["city"] = {"$in": sorted(criteria.cities)}
    if criteria.genders:
        match["gender"] = {"$in": sorted(criteria.genders)}
    if criteria.experience is not None:
        match["experience_years"] = criteria.experience.range.to_mongo()
    if criteria.fee_range is not None:
        match["fee_amount"] = criteria.fee_range.range.to_mongo()
    if criteria.modes:
        match["$or"] = [{"modes": {"$in": list(variants_for(m))}} for m in sorted(criteria.modes)]
    return match


def build_search_pipeline(criteria: FilterCriteria) -> List[Dict[str, Any]]:
    """
    Un solo aggregate: total y página salen del mismo snapshot ($facet).
    $text tiene que ir en el primer $match del pipeline.
    """
    pipeline: List[Dict[str, Any]] = []
    search_stage = build_search_stage(criteria)
    if search_stage:
        pipeline.append(search_stage)
    match = build_match(criteria)
    if match:
        pipeline.append({"$match": match})
    pipeline.append({
        "$facet": {
            "metadata": [{"$count": "total"}],
            "data": [
                {"$sort": {SORT_FIELD: 1, "_id": 1}},
                {"$skip": criteria.skip},
                {"$limit": criteria.limit},
            ],
        }
    })
    return pipeline


def build_group_pipeline(field: str, *, by_count: bool = False) -> List[Dict[str, Any]]:
    pipeline: List[Dict[str, Any]] = [{"$group": {"_id": f"${field}", "count": {"$sum": 1}}}]
    if by_count:
        pipeline.append({"$sort": {"count": -1, "_id": 1}})
    return pipeline


def build_unwind_pipeline(field: str) -> List[Dict[str, Any]]:
    """Conteo por ocurrencia de cada string crudo (no por documento)."""
    return [
        {"$unwind": {"path": f"${field}", "preserveNullAndEmptyArrays": False}},
        {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
    ]


def _range_expr(field: str, rng: Range) -> Dict[str, Any]:
    ref = f"${field}"
    conds: List[Dict[str, Any]] = [{"$isNumber": ref}]
    if rng.low is not None:
        conds.append({"$gte" if rng.low_inclusive else "$gt": [ref, rng.low]})
    if rng.high is not None:
        conds.append({"$lte" if rng.high_inclusive else "$lt": [ref, rng.high]})
    return {"$and": conds}


def build_bucket_pipeline(field: str, buckets: Sequence[ExperienceBucket] | Sequence[FeeBucket]) -> List[Dict[str, Any]]:
    branches = [{"case": _range_expr(field, b.range), "then": b.value} for b in buckets]
    return [
        {"$group": {
            "_id": {"$switch": {"branches": branches, "default": None}},
            "count": {"$sum": 1},
        }},
    ]


# ---------- en memoria ----------
def fold(text: Any) -> str:
    """Minúsculas y sin acentos, como el índice de texto de Mongo."""
    return unidecode(str(text or "")).lower()


_TOKEN_RE = re.compile(r"[a-z0-9]+")


def tokenize(text: Any) -> List[str]:
    return _TOKEN_RE.findall(fold(text))


def _field_values(doc: Mapping[str, Any], field: str) -> List[str]:
    value = doc.get(field)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def _search_values(doc: Mapping[str, Any]) -> Iterable[str]:
    for f in SEARCH_FIELDS:
        yield from _field_values(doc, f)


def matches_search(doc: Mapping[str, Any], search: str) -> bool:
    if not search:
        return True
    if len(search) < 3:
        needle = search.lower()
        return any(needle in v.lower() for v in _search_values(doc))
    # OR entre términos; coincidencia por token completo
    terms = set(tokenize(search))
    if not terms:
        return False
    return any(terms.intersection(tokenize(v)) for v in _search_values(doc))


def record_matches(doc: Mapping[str, Any], criteria: FilterCriteria) -> bool:
    if criteria.cities and doc.get("city") not in criteria.cities:
        return False
    if criteria.genders and doc.get("gender") not in criteria.genders:
        return False
    if criteria.experience is not None and not criteria.experience.range.contains(doc.get("experience_years")):
        return False
    if criteria.fee_range is not None and not criteria.fee_range.range.contains(doc.get("fee_amount")):
        return False
    if criteria.modes and not matches_any_mode(doc.get("modes") or [], criteria.modes):
        return False
    return matches_search(doc, criteria.search)
