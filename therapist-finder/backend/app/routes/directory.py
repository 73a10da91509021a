# app/routes/directory.py
"""
Alias público del directorio: /directory/search?q=... usa el mismo motor que
/providers con search=q, sin filtros adicionales.
"""
from fastapi import APIRouter, Depends, Query

from ..core.deps import current_store
from ..db.store import TherapistStore
from ..models.therapist import to_public
from ..services.filters import UI_DEFAULT_LIMIT, normalize_criteria
from ..services.pagination import Page

router = APIRouter()


@router.get(
    "/search",
    response_model=Page,
    response_model_by_alias=False,
    summary="Buscar terapeutas por texto libre",
)
async def directory_search(
    q: str | None = Query(default=None, description="Texto: nombre, especialidad, formación o descripción"),
    page: str | None = None,
    limit: str | None = None,
    store: TherapistStore = Depends(current_store),
):
    criteria = normalize_criteria(page=page, limit=limit, search=q, default_limit=UI_DEFAULT_LIMIT)
    total, docs = await store.search(criteria)
    return Page(page=criteria.page, limit=criteria.limit, total=total, data=[to_public(d) for d in docs])
