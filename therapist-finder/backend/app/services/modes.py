"""
Clasificador de modalidades de consulta.

Los datos importados traen etiquetas inconsistentes o truncadas ("Virtual telepho",
"-perso", "I", ...). Se agrupan en dos cubetas canónicas: "In-person" y "Online".

Hay dos fuentes de verdad para las mismas cubetas:
- classify_mode(): heurística por subcadenas, usada para CONTAR (facetas).
- MODE_VARIANTS: listas fijas de variantes, usadas para FILTRAR en el store
  (un $in indexable en vez de regex).
Brecha conocida: "Online"/"online" están en MODE_VARIANTS (se filtran) pero la
heurística no los reconoce, así que al contar caen en "Other" (ver tests).
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional


class CanonicalMode(str, Enum):
    IN_PERSON = "In-person"
    ONLINE = "Online"


_IN_PERSON_SUBSTRINGS = ("person", "perso")
_IN_PERSON_EXACT = ("I", "-perso")
_ONLINE_SUBSTRINGS = ("virtual", "telepho", "video", "ic")

MODE_VARIANTS: dict[CanonicalMode, tuple[str, ...]] = {
    CanonicalMode.IN_PERSON: (
        "In-person", "I", "-perso", "In person", "in-person", "in person",
    ),
    CanonicalMode.ONLINE: (
        "Virtual telephonic", "Virtual video-based", "Virtual telepho", "ic",
        "Online", "online", "Virtual", "virtual",
    ),
}


def classify_mode(raw: Optional[str]) -> Optional[CanonicalMode]:
    """
    In-person se evalúa primero: una etiqueta que calza con ambas reglas
    (p.ej. "in person clinic") queda como In-person.
    Devuelve None para "Other".
    """
    if not raw:
        return None
    low = raw.lower()
    if raw in _IN_PERSON_EXACT or any(s in low for s in _IN_PERSON_SUBSTRINGS):
        return CanonicalMode.IN_PERSON
    if any(s in low for s in _ONLINE_SUBSTRINGS):
        return CanonicalMode.ONLINE
    return None


def canonical_label(value: str) -> Optional[CanonicalMode]:
    """Etiqueta de filtro -> cubeta canónica (solo coincidencia exacta con la etiqueta)."""
    try:
        return CanonicalMode(value)
    except ValueError:
        return None


def variants_for(value: str) -> tuple[str, ...]:
    """Variantes crudas que satisfacen un valor de filtro; valores no canónicos se comparan tal cual."""
    mode = canonical_label(value)
    if mode is None:
        return (value,)
    return MODE_VARIANTS[mode]


def matches_any_mode(raw_modes: Iterable[str], selected: Iterable[str]) -> bool:
    raw = set(raw_modes or ())
    return any(raw.intersection(variants_for(v)) for v in selected)
