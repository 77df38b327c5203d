"""Chart data: price-range histogram and category breakdown."""
import asyncio
import logging

from salesboard.parse.models import CategoryCount, PriceRangeCount
from salesboard.query.buckets import PRICE_BUCKETS
from salesboard.query.filters import month_predicate
from salesboard.store.records import RecordStore

logger = logging.getLogger(__name__)


async def get_bar_chart(store: RecordStore, month_number: int) -> list[PriceRangeCount]:
    """Record count per price bucket, in bucket order."""
    month = month_predicate(month_number)
    counts = await asyncio.gather(
        *(store.count(month.and_(bucket.predicate())) for bucket in PRICE_BUCKETS)
    )
    return [
        PriceRangeCount(range=bucket.label, count=count)
        for bucket, count in zip(PRICE_BUCKETS, counts)
    ]


async def get_pie_chart(store: RecordStore, month_number: int) -> list[CategoryCount]:
    """Record count per category for the month."""
    groups = await store.count_by_category(month_predicate(month_number))
    logger.debug(f"Pie chart month={month_number}: {len(groups)} categories")
    return [CategoryCount(category=category, count=count) for category, count in groups]
