"""
Conteos por dimensión para el panel de filtros.
Siempre sobre el dataset completo: responden "cuántos hay en X", no
"cuántos hay en X dentro del filtro actual".
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from .filters import ExperienceBucket, FeeBucket, bucket_for_experience, bucket_for_fee
from .modes import CanonicalMode, classify_mode


class FacetCount(BaseModel):
    key: Optional[str] = None
    count: int = 0


class FacetCounts(BaseModel):
    city_counts: List[FacetCount] = Field(default_factory=list, alias="cityCounts")
    gender_counts: List[FacetCount] = Field(default_factory=list, alias="genderCounts")
    mode_counts: List[FacetCount] = Field(default_factory=list, alias="modeCounts")
    experience_counts: List[FacetCount] = Field(default_factory=list, alias="experienceCounts")
    fee_range_counts: List[FacetCount] = Field(default_factory=list, alias="feeRangeCounts")

    class Config:
        populate_by_name = True


def _as_counter(raw_counts: Iterable[Mapping[str, Any]]) -> Counter:
    """[{"_id": k, "count": n}, ...] (salida de $group) -> Counter."""
    out: Counter = Counter()
    for row in raw_counts:
        out[row.get("_id")] += int(row.get("count") or 0)
    return out


def ranked(counts: Counter) -> List[FacetCount]:
    """Orden por conteo desc; empate por clave."""
    rows = sorted(counts.items(), key=lambda kv: (-kv[1], "" if kv[0] is None else str(kv[0])))
    return [FacetCount(key=k, count=n) for k, n in rows]


def consolidate_mode_counts(raw_counts: Counter) -> List[FacetCount]:
    """Cada string crudo suma sus ocurrencias a su cubeta; "Other" no cuenta."""
    totals = {mode: 0 for mode in CanonicalMode}
    for raw, n in raw_counts.items():
        mode = classify_mode(raw)
        if mode is not None:
            totals[mode] += n
    return [FacetCount(key=mode.value, count=totals[mode]) for mode in CanonicalMode]


def fixed_buckets(counts: Counter, buckets: Sequence[ExperienceBucket] | Sequence[FeeBucket]) -> List[FacetCount]:
    """Todas las cubetas en el orden de la tabla, incluso con 0."""
    return [FacetCount(key=b.value, count=counts.get(b.value, 0)) for b in buckets]


def from_group_results(
    *,
    cities: Iterable[Mapping[str, Any]],
    genders: Iterable[Mapping[str, Any]],
    modes: Iterable[Mapping[str, Any]],
    experience: Iterable[Mapping[str, Any]],
    fees: Iterable[Mapping[str, Any]],
) -> FacetCounts:
    return FacetCounts(
        city_counts=ranked(_as_counter(cities)),
        gender_counts=ranked(_as_counter(genders)),
        mode_counts=consolidate_mode_counts(_as_counter(modes)),
        experience_counts=fixed_buckets(_as_counter(experience), list(ExperienceBucket)),
        fee_range_counts=fixed_buckets(_as_counter(fees), list(FeeBucket)),
    )


def from_documents(docs: Iterable[Mapping[str, Any]]) -> FacetCounts:
    cities: Counter = Counter()
    genders: Counter = Counter()
    modes: Counter = Counter()
    experience: Counter = Counter()
    fees: Counter = Counter()
    for d in docs:
        cities[d.get("city")] += 1
        genders[d.get("gender")] += 1
        modes.update(m for m in (d.get("modes") or []) if m is not None)
        exp = bucket_for_experience(d.get("experience_years"))
        if exp is not None:
            experience[exp.value] += 1
        fee = bucket_for_fee(d.get("fee_amount"))
        if fee is not None:
            fees[fee.value] += 1
    return FacetCounts(
        city_counts=ranked(cities),
        gender_counts=ranked(genders),
        mode_counts=consolidate_mode_counts(modes),
        experience_counts=fixed_buckets(experience, list(ExperienceBucket)),
        fee_range_counts=fixed_buckets(fees, list(FeeBucket)),
    )
