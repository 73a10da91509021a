"""
Normalización de parámetros de búsqueda -> FilterCriteria tipado.

Frontera única: los routers reciben strings/listas sueltas y todo lo que viene
después (planner, stores) consume solo FilterCriteria. Valores inválidos nunca
producen error; se reemplazan por defaults seguros.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional

DEFAULT_LIMIT = 12
UI_DEFAULT_LIMIT = 18
MAX_LIMIT = 100
SHORT_SEARCH_LEN = 3


@dataclass(frozen=True)
class Range:
    """Intervalo numérico; None en un extremo = no acotado."""
    low: Optional[float] = None
    high: Optional[float] = None
    low_inclusive: bool = True
    high_inclusive: bool = True

    def contains(self, value: Optional[float]) -> bool:
        if value is None:
            return False
        if self.low is not None:
            if value < self.low or (value == self.low and not self.low_inclusive):
                return False
        if self.high is not None:
            if value > self.high or (value == self.high and not self.high_inclusive):
                return False
        return True

    def to_mongo(self) -> dict[str, float]:
        cond: dict[str, float] = {}
        if self.low is not None:
            cond["$gte" if self.low_inclusive else "$gt"] = self.low
        if self.high is not None:
            cond["$lte" if self.high_inclusive else "$lt"] = self.high
        return cond


class ExperienceBucket(str, Enum):
    ZERO_FIVE = "0-5"
    FIVE_TEN = "5-10"
    TEN_FIFTEEN = "10-15"
    FIFTEEN_PLUS = "15+"

    @property
    def range(self) -> Range:
        return _EXPERIENCE_RANGES[self]


class FeeBucket(str, Enum):
    UNDER_2000 = "under-2000"
    R2000_4000 = "2000-4000"
    R4000_6000 = "4000-6000"
    ABOVE_6000 = "above-6000"

    @property
    def range(self) -> Range:
        return _FEE_RANGES[self]


# Cerrados a la izquierda solo en 0-5 / 2000-4000; el resto abre por abajo,
# así cada valor cae en exactamente una cubeta (5 -> 0-5, 15 -> 10-15).
_EXPERIENCE_RANGES = {
    ExperienceBucket.ZERO_FIVE: Range(0, 5),
    ExperienceBucket.FIVE_TEN: Range(5, 10, low_inclusive=False),
    ExperienceBucket.TEN_FIFTEEN: Range(10, 15, low_inclusive=False),
    ExperienceBucket.FIFTEEN_PLUS: Range(15, None, low_inclusive=False),
}

_FEE_RANGES = {
    FeeBucket.UNDER_2000: Range(None, 2000, high_inclusive=False),
    FeeBucket.R2000_4000: Range(2000, 4000),
    FeeBucket.R4000_6000: Range(4000, 6000, low_inclusive=False),
    FeeBucket.ABOVE_6000: Range(6000, None, low_inclusive=False),
}


@dataclass(frozen=True)
class FilterCriteria:
    cities: frozenset[str] = field(default_factory=frozenset)
    genders: frozenset[str] = field(default_factory=frozenset)
    modes: frozenset[str] = field(default_factory=frozenset)
    experience: Optional[ExperienceBucket] = None
    fee_range: Optional[FeeBucket] = None
    search: str = ""
    page: int = 1
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def is_short_search(self) -> bool:
        return 0 < len(self.search) < SHORT_SEARCH_LEN


# ---------- parsers ----------
def _to_int(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def normalize_page(raw: Any) -> int:
    value = _to_int(raw)
    if value is None or value < 1:
        return 1
    return value


def normalize_limit(raw: Any, default: int = DEFAULT_LIMIT) -> int:
    value = _to_int(raw)
    if not value:  # None o 0 -> default
        value = default
    return max(1, min(MAX_LIMIT, value))


def parse_list(raw: Any) -> frozenset[str]:
    """Acepta None, "a,b" o ["a", "b,c"]; recorta y descarta vacíos."""
    if not raw:
        return frozenset()
    items: Iterable[Any] = raw if isinstance(raw, (list, tuple, set, frozenset)) else [raw]
    out: set[str] = set()
    for item in items:
        if item is None:
            continue
        out.update(s.strip() for s in str(item).split(",") if s.strip())
    return frozenset(out)


# "15+" sin codificar llega como "15 " ('+' = espacio en query strings)
_EXPERIENCE_ALIASES = {"15": ExperienceBucket.FIFTEEN_PLUS}


def parse_experience(raw: Any) -> Optional[ExperienceBucket]:
    value = str(raw).strip() if raw else ""
    if value in _EXPERIENCE_ALIASES:
        return _EXPERIENCE_ALIASES[value]
    try:
        return ExperienceBucket(value) if value else None
    except ValueError:
        return None


def parse_fee_range(raw: Any) -> Optional[FeeBucket]:
    try:
        return FeeBucket(str(raw).strip()) if raw else None
    except ValueError:
        return None


def bucket_for_experience(value: Optional[float]) -> Optional[ExperienceBucket]:
    for bucket in ExperienceBucket:
        if bucket.range.contains(value):
            return bucket
    return None


def bucket_for_fee(value: Optional[float]) -> Optional[FeeBucket]:
    if value is None or value < 0:
        return None
    for bucket in FeeBucket:
        if bucket.range.contains(value):
            return bucket
    return None


def normalize_criteria(
    *,
    page: Any = None,
    limit: Any = None,
    search: Any = None,
    cities: Any = None,
    genders: Any = None,
    modes: Any = None,
    experience: Any = None,
    fee_range: Any = None,
    default_limit: int = DEFAULT_LIMIT,
) -> FilterCriteria:
    return FilterCriteria(
        cities=parse_list(cities),
        genders=parse_list(genders),
        modes=parse_list(modes),
        experience=parse_experience(experience),
        fee_range=parse_fee_range(fee_range),
        search=str(search or "").strip(),
        page=normalize_page(page),
        limit=normalize_limit(limit, default_limit),
    )
