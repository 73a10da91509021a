# app/routes/therapists.py
"""
Listado filtrado/paginado, facetas y detalle de terapeutas (solo lectura).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..core.deps import current_store
from ..db.store import TherapistStore
from ..models.therapist import TherapistPublic, to_public
from ..services.facets import FacetCounts
from ..services.filters import DEFAULT_LIMIT, normalize_criteria
from ..services.pagination import Page

router = APIRouter()
log = logging.getLogger("app.therapists")


@router.get(
    "",
    response_model=Page,
    response_model_by_alias=False,   # "id" en vez de "_id"
    summary="Buscar y filtrar terapeutas",
)
async def list_therapists(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    search: str | None = Query(default=None),
    cities: list[str] | None = Query(default=None, description="Repetido o separado por comas"),
    genders: list[str] | None = Query(default=None),
    modes: list[str] | None = Query(default=None, description="In-person, Online u otra etiqueta exacta"),
    experience: str | None = Query(default=None, description="0-5 | 5-10 | 10-15 | 15+"),
    fee_range: str | None = Query(default=None, alias="feeRange", description="under-2000 | 2000-4000 | 4000-6000 | above-6000"),
    store: TherapistStore = Depends(current_store),
):
    # page/limit llegan como str: valores basura se normalizan, no dan 422
    criteria = normalize_criteria(
        page=page,
        limit=limit,
        search=search,
        cities=cities,
        genders=genders,
        modes=modes,
        experience=experience,
        fee_range=fee_range,
        default_limit=DEFAULT_LIMIT,
    )
    total, docs = await store.search(criteria)
    log.info(f"list page={criteria.page} limit={criteria.limit} total={total} returned={len(docs)}")
    return Page(
        page=criteria.page,
        limit=criteria.limit,
        total=total,
        data=[to_public(d) for d in docs],
    )


@router.get("/_filters/options", response_model=FacetCounts, summary="Conteos por filtro (dataset completo)")
async def filter_options(store: TherapistStore = Depends(current_store)):
    counts = await store.facet_counts()
    log.info(
        f"filter options cities={len(counts.city_counts)} genders={len(counts.gender_counts)} "
        f"modes={len(counts.mode_counts)}"
    )
    return counts


@router.get(
    "/{therapist_id}",
    response_model=TherapistPublic,
    response_model_by_alias=False,
    summary="Detalle de terapeuta",
)
async def get_therapist(therapist_id: str, store: TherapistStore = Depends(current_store)):
    doc = await store.get(therapist_id)  # InvalidTherapistId -> 400
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return to_public(doc)
