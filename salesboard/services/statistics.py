"""Monthly sale statistics."""
import asyncio

from salesboard.parse.models import Statistics
from salesboard.query.filters import month_predicate, sold_predicate
from salesboard.store.records import RecordStore


async def get_statistics(store: RecordStore, month_number: int) -> Statistics:
    """Total sale amount and sold/unsold counts for the month."""
    total_amount, sold_items, unsold_items = await asyncio.gather(
        store.sum_price(month_predicate(month_number)),
        store.count(sold_predicate(month_number, True)),
        store.count(sold_predicate(month_number, False)),
    )
    return Statistics(
        total_sale_amount=round(total_amount, 2),
        sold_items=sold_items,
        unsold_items=unsold_items,
    )
