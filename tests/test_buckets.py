"""Tests for bar chart price buckets."""
import pytest

from conftest import run
from salesboard.parse.records import parse_records
from salesboard.query.buckets import PRICE_BUCKETS
from salesboard.query.filters import month_predicate
from salesboard.store.records import RecordStore

BOUNDARY_PRICES = [
    (-5, "0-100"),
    (0, "0-100"),
    (64, "0-100"),
    (100, "0-100"),
    (100.5, "101-200"),
    (150, "101-200"),
    (200, "101-200"),
    (200.01, "201-300"),
    (900, "801-900"),
    (900.5, "901-above"),
    (901, "901-above"),
    (15000, "901-above"),
]


def bucket_counts(tmp_path, prices) -> dict[str, int]:
    """Store one March record per price and count each bucket as the bar chart does."""
    store = RecordStore(tmp_path / "buckets.db")
    records, _ = parse_records([
        {"title": f"Item {i}", "price": price, "dateOfSale": "2021-03-10T00:00:00Z"}
        for i, price in enumerate(prices)
    ])
    run(store.initialize())
    run(store.replace_all(records))
    month = month_predicate(3)
    return {
        bucket.label: run(store.count(month.and_(bucket.predicate())))
        for bucket in PRICE_BUCKETS
    }


def test_ten_buckets_in_label_order():
    """Buckets keep their fixed order and labels."""
    assert [bucket.label for bucket in PRICE_BUCKETS] == [
        "0-100",
        "101-200",
        "201-300",
        "301-400",
        "401-500",
        "501-600",
        "601-700",
        "701-800",
        "801-900",
        "901-above",
    ]


def test_buckets_are_contiguous():
    """Each lower bound is the previous upper bound."""
    assert PRICE_BUCKETS[0].lower is None
    assert PRICE_BUCKETS[-1].upper is None
    for previous, current in zip(PRICE_BUCKETS, PRICE_BUCKETS[1:]):
        assert current.lower == previous.upper


@pytest.mark.parametrize("price,label", BOUNDARY_PRICES)
def test_bucket_boundaries(tmp_path, price, label):
    """Upper bounds are inclusive, lower bounds exclusive."""
    counts = bucket_counts(tmp_path, [price])
    assert counts[label] == 1
    assert sum(counts.values()) == 1


def test_bucket_counts_cover_every_record(tmp_path):
    """No gaps or overlaps: counts add up to the record count."""
    prices = [price for price, _ in BOUNDARY_PRICES] + [99.99, 100.01, 300, 450, 800]
    counts = bucket_counts(tmp_path, prices)
    assert sum(counts.values()) == len(prices)


def test_bucket_predicate_sql():
    """Open-ended buckets drop the missing bound."""
    assert PRICE_BUCKETS[0].predicate().sql == "price <= ?"
    assert PRICE_BUCKETS[1].predicate().sql == "price > ? AND price <= ?"
    assert PRICE_BUCKETS[1].predicate().params == (100, 200)
    assert PRICE_BUCKETS[-1].predicate().sql == "price > ?"
