# backend/app/tests/test_mongo_store.py
"""
Integración contra un Mongo real (MONGO_URI). Se salta si no hay servidor.
Usa una DB única por corrida y la borra al final.

Sin servidor solo se verifica la forma de los pipelines (test_query_planner.py);
$text, $facet y $switch corren de verdad únicamente cuando MONGO_URI apunta a
un Mongo alcanzable, p.ej. un job de CI con un servicio mongo.
"""
import os
import uuid

import pytest
import pytest_asyncio
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from app.db.mongo import MongoTherapistStore
from app.services.filters import normalize_criteria

MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017")


def _mongo_available() -> bool:
    client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=500)
    try:
        client.admin.command("ping")
        return True
    except PyMongoError:
        return False
    finally:
        client.close()


pytestmark = [
    pytest.mark.asyncio,
    pytest.mark.skipif(not _mongo_available(), reason="MongoDB no disponible"),
]


@pytest_asyncio.fixture
async def mongo_store(sample_docs):
    dbname = f"therapist_finder_test_{uuid.uuid4().hex[:8]}"
    store = MongoTherapistStore.connect(MONGO_URI, dbname)
    await store.ensure_indexes()
    await store.replace_all(sample_docs)
    yield store
    store.client.drop_database(dbname)
    await store.close()


async def test_search_and_pagination(mongo_store):
    total, docs = await mongo_store.search(normalize_criteria(cities="Karachi", page="2", limit="1"))
    assert total == 2
    assert [d["name"] for d in docs] == ["Dr. Sarah Ahmed"]

    total, docs = await mongo_store.search(normalize_criteria(cities="Karachi", genders="Female", experience="0-5"))
    assert total == 1


async def test_text_and_regex_search(mongo_store):
    total, docs = await mongo_store.search(normalize_criteria(search="Anxiety"))
    assert sorted(d["name"] for d in docs) == ["Dr. Ali Khan", "Dr. Sarah Ahmed"]

    _, docs = await mongo_store.search(normalize_criteria(search="Sa"))
    assert "Dr. Sarah Ahmed" in [d["name"] for d in docs]


async def test_mode_and_range_filters(mongo_store):
    total, _ = await mongo_store.search(normalize_criteria(modes="Online"))
    assert total == 3
    total, _ = await mongo_store.search(normalize_criteria(fee_range="2000-4000"))
    assert total == 2


async def test_facets_and_get(mongo_store):
    counts = (await mongo_store.facet_counts()).model_dump(by_alias=True)
    assert counts["cityCounts"][0] == {"key": "Karachi", "count": 2}
    assert counts["modeCounts"] == [{"key": "In-person", "count": 3}, {"key": "Online", "count": 2}]
    assert [c["count"] for c in counts["experienceCounts"]] == [2, 1, 1, 0]
    assert [c["count"] for c in counts["feeRangeCounts"]] == [1, 2, 1, 0]

    _, docs = await mongo_store.search(normalize_criteria(limit="1"))
    found = await mongo_store.get(str(docs[0]["_id"]))
    assert found["name"] == docs[0]["name"]
    assert await mongo_store.get("0" * 24) is None
