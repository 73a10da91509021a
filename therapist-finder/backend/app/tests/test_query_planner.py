# backend/app/tests/test_query_planner.py
from app.services.filters import ExperienceBucket, normalize_criteria
from app.services.pagination import paginate, window
from app.services.query_planner import (
    build_bucket_pipeline,
    build_match,
    build_search_pipeline,
    build_search_stage,
    matches_search,
    record_matches,
)


def test_empty_criteria_builds_no_match():
    c = normalize_criteria()
    assert build_match(c) == {}
    assert build_search_stage(c) is None
    pipeline = build_search_pipeline(c)
    assert len(pipeline) == 1
    assert pipeline[0]["$facet"]["data"] == [
        {"$sort": {"name": 1, "_id": 1}},
        {"$skip": 0},
        {"$limit": 12},
    ]


def test_match_combines_dimensions():
    c = normalize_criteria(cities="Lahore,Karachi", genders="Female", experience="5-10", fee_range="under-2000", modes="Online")
    match = build_match(c)
    assert match["city"] == {"$in": ["Karachi", "Lahore"]}
    assert match["gender"] == {"$in": ["Female"]}
    assert match["experience_years"] == {"$gt": 5, "$lte": 10}
    assert match["fee_amount"] == {"$lt": 2000}
    assert len(match["$or"]) == 1
    assert "Virtual telepho" in match["$or"][0]["modes"]["$in"]


def test_open_ended_ranges():
    assert build_match(normalize_criteria(experience="15+"))["experience_years"] == {"$gt": 15}
    assert build_match(normalize_criteria(fee_range="2000-4000"))["fee_amount"] == {"$gte": 2000, "$lte": 4000}


def test_search_strategy_by_length():
    short = build_search_stage(normalize_criteria(search="D("))
    ors = short["$match"]["$or"]
    assert {next(iter(o)) for o in ors} == {"name", "specialties", "education", "about"}
    assert ors[0]["name"] == {"$regex": r"D\(", "$options": "i"}

    long = build_search_stage(normalize_criteria(search="Anxiety"))
    assert long == {"$match": {"$text": {"$search": "Anxiety"}}}


def test_text_stage_comes_first_and_window_applies():
    c = normalize_criteria(search="therapy", cities="Karachi", page="3", limit="10")
    pipeline = build_search_pipeline(c)
    assert "$text" in pipeline[0]["$match"]
    assert pipeline[1] == {"$match": {"city": {"$in": ["Karachi"]}}}
    data = pipeline[2]["$facet"]["data"]
    assert data[1:] == [{"$skip": 20}, {"$limit": 10}]


def test_bucket_pipeline_branches():
    stage = build_bucket_pipeline("experience_years", list(ExperienceBucket))[0]["$group"]
    branches = stage["_id"]["$switch"]["branches"]
    assert [b["then"] for b in branches] == ["0-5", "5-10", "10-15", "15+"]
    assert {"$gt": ["$experience_years", 5]} in branches[1]["case"]["$and"]


def test_in_memory_search():
    doc = {"name": "Dr. Sarah Ahmed", "specialties": ["Anxiety"], "education": ["MD Psychiatry"], "about": "Terapia cognitiva"}
    assert matches_search(doc, "Sa")
    assert matches_search(doc, "anxiety")
    assert matches_search(doc, "panic anxiety")  # OR entre términos
    assert matches_search(doc, "terapía")  # sin acentos
    assert not matches_search(doc, "Anx")  # token completo
    assert not matches_search(doc, "!!!")


def test_record_matches_and_semantics():
    doc = {"name": "A", "city": "Karachi", "gender": "Female", "experience_years": 5, "fee_amount": 2000, "modes": ["-perso"]}
    assert record_matches(doc, normalize_criteria(cities="Karachi", experience="0-5", fee_range="2000-4000", modes="In-person"))
    assert not record_matches(doc, normalize_criteria(cities="Karachi", experience="5-10"))
    assert not record_matches(doc, normalize_criteria(modes="Online"))


def test_paginate_is_stable_and_reports_total():
    docs = [{"name": n, "i": i} for i, n in enumerate(["b", "a", "b", "C"])]
    assert window(2, 2) == (2, 2)
    total, page = paginate(docs, 1, 3)
    assert total == 4
    # orden por bytes: mayúsculas antes que minúsculas
    assert [(d["name"], d["i"]) for d in page] == [("C", 3), ("a", 1), ("b", 0)]
    assert paginate(docs, 2, 3)[1] == [{"name": "b", "i": 2}]
