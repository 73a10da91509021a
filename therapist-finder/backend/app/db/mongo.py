# app/db/mongo.py
"""
Store respaldado por MongoDB (PyMongo síncrono).
Las llamadas bloqueantes se ejecutan en un thread (anyio.to_thread) para no
frenar el event loop, igual que el resto de repos.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from anyio import to_thread
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from ..core.errors import StoreUnavailable
from ..services import facets
from ..services.filters import ExperienceBucket, FeeBucket, FilterCriteria
from ..services.query_planner import (
    build_bucket_pipeline,
    build_group_pipeline,
    build_search_pipeline,
    build_unwind_pipeline,
)
from .indexes import ensure_indexes
from .store import TherapistStore, parse_object_id

logger = logging.getLogger("app.db.mongo")

T = TypeVar("T")


class MongoTherapistStore(TherapistStore):
    def __init__(self, client: MongoClient, col: Collection):
        self.client = client
        self.col = col

    @classmethod
    def connect(cls, uri: str, dbname: str, collection: str = "therapists", *, timeout_ms: int = 5000) -> "MongoTherapistStore":
        """
        El cliente conecta de forma perezosa: un Mongo caído se detecta en la
        primera operación (StoreUnavailable), no aquí.
        """
        client = MongoClient(uri, uuidRepresentation="standard", serverSelectionTimeoutMS=timeout_ms)
        logger.info(f"Mongo store -> db={dbname} collection={collection}")
        return cls(client, client[dbname][collection])

    async def _run(self, fn: Callable[[], T]) -> T:
        try:
            return await to_thread.run_sync(fn)
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            raise StoreUnavailable(str(e)) from e

    async def ensure_indexes(self) -> None:
        await self._run(lambda: ensure_indexes(self.col))

    async def search(self, criteria: FilterCriteria) -> Tuple[int, List[Dict[str, Any]]]:
        pipeline = build_search_pipeline(criteria)

        def _aggregate():
            results = list(self.col.aggregate(pipeline))
            if not results:
                return 0, []
            meta = results[0].get("metadata") or []
            total = meta[0]["total"] if meta else 0
            return total, results[0].get("data") or []

        return await self._run(_aggregate)

    async def get(self, therapist_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(therapist_id)
        return await self._run(lambda: self.col.find_one({"_id": oid}))

    async def facet_counts(self) -> facets.FacetCounts:
        def _groups():
            return {
                "cities": list(self.col.aggregate(build_group_pipeline("city", by_count=True))),
                "genders": list(self.col.aggregate(build_group_pipeline("gender"))),
                "modes": list(self.col.aggregate(build_unwind_pipeline("modes"))),
                "experience": list(self.col.aggregate(build_bucket_pipeline("experience_years", list(ExperienceBucket)))),
                "fees": list(self.col.aggregate(build_bucket_pipeline("fee_amount", list(FeeBucket)))),
            }

        return facets.from_group_results(**await self._run(_groups))

    async def count(self) -> int:
        return await self._run(lambda: self.col.count_documents({}))

    async def replace_all(self, docs: Sequence[Dict[str, Any]]) -> int:
        def _replace():
            self.col.delete_many({})
            if not docs:
                return 0
            res = self.col.insert_many([dict(d) for d in docs])
            return len(res.inserted_ids)

        return await self._run(_replace)

    async def close(self) -> None:
        self.client.close()
