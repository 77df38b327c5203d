"""Shared fixtures: a seeded temporary store and an API test client."""
import asyncio
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from salesboard.api.main import create_app
from salesboard.config import config
from salesboard.parse.records import parse_records
from salesboard.store.records import RecordStore

# Five March records over two years (three sold), plus April and November.
SAMPLE_ITEMS: list[dict[str, Any]] = [
    {
        "id": 1,
        "title": "Mens Casual Slim Fit",
        "description": "The color could be slightly different between on the screen and in practice.",
        "price": 150.0,
        "category": "men's clothing",
        "image": "https://example.com/1.jpg",
        "sold": True,
        "dateOfSale": "2021-03-05T10:00:00+00:00",
    },
    {
        "id": 2,
        "title": "Gold Plated Princess Ring",
        "description": "Solid gold petite micropave, a gift for her.",
        "price": 100,
        "category": "jewelery",
        "sold": True,
        "dateOfSale": "2022-03-15T08:30:00+00:00",
    },
    {
        "id": 3,
        "title": "SanDisk SSD PLUS 1TB Internal SSD",
        "description": "Easy upgrade for faster boot up, shutdown and application load.",
        "price": 999.99,
        "category": "electronics",
        "sold": False,
        "dateOfSale": "2021-03-27T20:29:54+00:00",
    },
    {
        "id": 4,
        "title": "WD 2TB Elements Portable External Hard Drive",
        "description": "USB 3.0 and USB 2.0 compatibility, fast data transfers.",
        "price": 64,
        "category": "electronics",
        "sold": True,
        "dateOfSale": "2022-03-01T12:00:00+00:00",
    },
    {
        "id": 5,
        "title": "Womens Rain Jacket",
        "description": "Lightweight, windproof and hooded.",
        "price": 200,
        "category": "women's clothing",
        "sold": False,
        "dateOfSale": "2021-03-30T23:00:00+00:00",
    },
    {
        "id": 6,
        "title": "Fjallraven Backpack",
        "description": "Your perfect pack for everyday use and walks in the forest.",
        "price": 109.95,
        "category": "men's clothing",
        "sold": True,
        "dateOfSale": "2021-04-10T09:00:00+00:00",
    },
    {
        "id": 7,
        "title": "Samsung 49-Inch Gaming Monitor",
        "description": "Super ultrawide screen QLED.",
        "price": 599,
        "category": "electronics",
        "sold": False,
        "dateOfSale": "2021-11-20T16:00:00+00:00",
    },
]

MARCH_TOTAL = 150.0 + 100 + 999.99 + 64 + 200


def run(coro):
    """Drive a coroutine from a sync test."""
    return asyncio.run(coro)


@pytest.fixture
def sample_items() -> list[dict[str, Any]]:
    return [dict(item) for item in SAMPLE_ITEMS]


@pytest.fixture
def store(tmp_path, sample_items) -> RecordStore:
    """A temporary store seeded with SAMPLE_ITEMS."""
    record_store = RecordStore(tmp_path / "transactions.db")
    records, _ = parse_records(sample_items)
    run(record_store.initialize())
    run(record_store.replace_all(records))
    return record_store


@pytest.fixture
def client(store, monkeypatch) -> Generator[TestClient, None, None]:
    """Test client over the seeded store, seed endpoint unprotected."""
    monkeypatch.setattr(config, "API_KEY", None)
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client
