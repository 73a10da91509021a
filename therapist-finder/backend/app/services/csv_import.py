# app/services/csv_import.py
"""
Lectura del CSV de terapeutas y conversión a documentos del store.
Columnas esperadas: name, profile_url, gender, city, experience_years, email,
emails_all, phone, modes, education, experience, expertise, about, fees_raw,
fee_amount, fee_currency.
"""
from __future__ import annotations

import csv
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..models.therapist import TherapistCreate, to_document

logger = logging.getLogger("app.import")

_LIST_SPLIT = re.compile(r"[;,|\n]")
_NON_NUMERIC = re.compile(r"[^0-9.]")


def parse_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [s.strip() for s in _LIST_SPLIT.split(raw) if s.strip()]


def parse_number(raw: Optional[str]) -> Optional[float]:
    """"PKR 3,500" -> 3500.0; None si no queda un número."""
    if not raw:
        return None
    try:
        return float(_NON_NUMERIC.sub("", raw))
    except ValueError:
        return None


def parse_quoted_semicolon_list(raw: Optional[str]) -> List[str]:
    """Campos entre comillas que pueden traer comas internas; solo ';' separa."""
    if not raw:
        return []
    cleaned = raw.strip()
    if len(cleaned) >= 2 and cleaned.startswith('"') and cleaned.endswith('"'):
        cleaned = cleaned[1:-1]
    return [s.strip() for s in cleaned.split(";") if s.strip()]


def row_to_document(row: Mapping[str, Any], *, created_at: Optional[datetime] = None) -> Dict[str, Any]:
    def col(key: str) -> str:
        return (row.get(key) or "").strip()

    data = TherapistCreate(
        name=col("name") or "Unknown",
        profile_url=col("profile_url"),
        gender=col("gender"),
        city=col("city"),
        experience_years=parse_number(col("experience_years")) or 0,
        email=col("email"),
        emails_all=parse_list(col("emails_all")),
        phone=col("phone"),
        modes=parse_list(col("modes")),
        education=parse_quoted_semicolon_list(col("education")),
        prior_roles=parse_quoted_semicolon_list(col("experience")),
        specialties=parse_quoted_semicolon_list(col("expertise")),
        about=col("about"),
        fees_raw=col("fees_raw"),
        fee_amount=parse_number(col("fee_amount")) or 0,
        fee_currency=col("fee_currency") or "PKR",
    )
    return to_document(data, created_at=created_at)


def read_csv(path: Path) -> Tuple[List[Dict[str, Any]], int]:
    """Devuelve (documentos, filas descartadas)."""
    docs: List[Dict[str, Any]] = []
    skipped = 0
    now = datetime.now(timezone.utc)
    with Path(path).open(newline="", encoding="utf-8-sig") as fh:
        for lineno, row in enumerate(csv.DictReader(fh), start=2):
            try:
                docs.append(row_to_document(row, created_at=now))
            except ValidationError as e:
                skipped += 1
                logger.warning(f"{path}:{lineno} skipped: {e.errors()[0].get('msg')}")
    logger.info(f"Loaded {len(docs)} rows from {path} ({skipped} skipped)")
    return docs, skipped
