# app/models/therapist.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


# ---------- Pydantic ----------
class TherapistCreate(BaseModel):
    """Registro tal como llega del import (CSV). Listas nunca None."""
    name: str = Field(..., min_length=1)
    profile_url: str = ""
    gender: str = ""
    city: str = ""
    experience_years: float = Field(default=0, ge=0)
    email: str = ""
    emails_all: List[str] = []
    phone: str = ""
    modes: List[str] = []
    education: List[str] = []
    prior_roles: List[str] = []
    specialties: List[str] = []
    about: str = ""
    fees_raw: str = ""
    fee_amount: float = Field(default=0, ge=0)
    fee_currency: str = "PKR"

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("emails_all", "modes", "education", "prior_roles", "specialties", mode="before")
    @classmethod
    def _none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("experience_years", "fee_amount", mode="before")
    @classmethod
    def _none_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class TherapistPublic(TherapistCreate):
    id: str = Field(..., alias="_id")
    created_at: Optional[datetime] = None

    class Config:
        populate_by_name = True


def to_document(data: TherapistCreate, *, created_at: Optional[datetime] = None) -> Dict[str, Any]:
    """Documento listo para insertar; created_at se fija una sola vez."""
    doc: Dict[str, Any] = data.model_dump()
    doc["created_at"] = created_at or datetime.now(timezone.utc)
    return doc


def to_public(doc: Dict[str, Any]) -> TherapistPublic:
    """Doc de Mongo (ObjectId) -> modelo público con id string."""
    out = dict(doc)
    if "_id" in out and not isinstance(out["_id"], str):
        out["_id"] = str(out["_id"])
    return TherapistPublic.model_validate(out)
