# backend/app/tests/test_csv_import.py
from app.services.csv_import import (
    parse_list,
    parse_number,
    parse_quoted_semicolon_list,
    read_csv,
    row_to_document,
)


def test_parsers():
    assert parse_list("Online; In-person|I\n-perso,") == ["Online", "In-person", "I", "-perso"]
    assert parse_list("") == []
    assert parse_number("PKR 3,500") == 3500.0
    assert parse_number("n/a") is None
    assert parse_number(None) is None
    assert parse_quoted_semicolon_list('"MBBS, Dow; MD Psychiatry ;"') == ["MBBS, Dow", "MD Psychiatry"]


def test_row_to_document_defaults():
    doc = row_to_document({"name": "  Dr. X ", "experience_years": "7 years", "fee_amount": ""})
    assert doc["name"] == "Dr. X"
    assert doc["experience_years"] == 7
    assert doc["fee_amount"] == 0
    assert doc["fee_currency"] == "PKR"
    assert doc["modes"] == [] and doc["specialties"] == [] and doc["prior_roles"] == []
    assert doc["created_at"] is not None


def test_read_csv_maps_columns(tmp_path):
    path = tmp_path / "therapists.csv"
    path.write_text(
        "name,gender,city,experience_years,modes,education,experience,expertise,about,fee_amount,fee_currency\n"
        'Dr. Sarah Ahmed,Female,Karachi,3,"In-person, Virtual telepho","MBBS; MD Psychiatry",'
        '"3 years at Aga Khan","Depression; Anxiety",Psychiatrist,"PKR 2,500",\n'
        ",Male,Lahore,,,,,,,,\n",
        encoding="utf-8",
    )
    docs, skipped = read_csv(path)
    assert skipped == 0
    first, second = docs
    assert first["modes"] == ["In-person", "Virtual telepho"]
    assert first["education"] == ["MBBS", "MD Psychiatry"]
    assert first["prior_roles"] == ["3 years at Aga Khan"]
    assert first["specialties"] == ["Depression", "Anxiety"]
    assert first["fee_amount"] == 2500
    assert first["fee_currency"] == "PKR"
    assert second["name"] == "Unknown"
