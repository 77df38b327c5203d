"""Tests for seed payload parsing."""
from datetime import timezone

import pytest
from salesboard.parse.records import parse_records


def test_parse_valid_items(sample_items):
    """All sample items become records."""
    records, errors = parse_records(sample_items)
    assert len(records) == len(sample_items)
    assert errors == []


def test_extra_fields_ignored(sample_items):
    """id and image from the source are not kept."""
    records, _ = parse_records(sample_items[:1])
    dumped = records[0].model_dump()
    assert "image" not in dumped
    assert "id" not in dumped


def test_date_normalized_to_utc():
    """Offsets are converted to UTC before the month is taken."""
    records, _ = parse_records([
        {
            "title": "Cotton Jacket",
            "description": "",
            "price": 55.99,
            "category": "men's clothing",
            "sold": False,
            "dateOfSale": "2021-04-01T02:00:00+05:30",
        }
    ])
    assert records[0].date_of_sale.tzinfo == timezone.utc
    assert records[0].sale_month == 3


def test_naive_date_treated_as_utc():
    """Timestamps without offset are taken as UTC."""
    records, _ = parse_records([
        {"title": "Ring", "price": 10, "sold": True, "dateOfSale": "2022-12-31T23:59:59"}
    ])
    assert records[0].sale_month == 12
    assert records[0].date_of_sale.tzinfo == timezone.utc


def test_invalid_items_skipped(sample_items):
    """Broken items are reported, the rest are kept."""
    payload = sample_items[:2] + [
        {"title": "No date", "price": 5},
        {"title": "Bad price", "price": "cheap", "dateOfSale": "2021-03-01T00:00:00Z"},
        "not an object",
    ]
    records, errors = parse_records(payload)
    assert len(records) == 2
    assert [error["index"] for error in errors] == [2, 3, 4]
    assert "dateOfSale" in errors[0]["reason"]
    assert errors[2]["reason"] == "not an object"


def test_non_list_payload_rejected():
    """The payload must be a JSON array."""
    with pytest.raises(ValueError):
        parse_records({"title": "x"})


def test_null_description_kept(sample_items):
    """A null description is stored as empty text, not skipped."""
    records, errors = parse_records([dict(sample_items[0], description=None)])
    assert errors == []
    assert len(records) == 1
    assert records[0].description == ""
