"""Paginated, searchable listing of a month's transactions."""
import asyncio
import logging
import math

from salesboard.parse.models import Pagination, TransactionsPage
from salesboard.query.filters import listing_predicate
from salesboard.store.records import RecordStore

logger = logging.getLogger(__name__)


async def list_transactions(
    store: RecordStore,
    month_number: int,
    page: int = 1,
    per_page: int = 10,
    search: str = "",
) -> TransactionsPage:
    """One page of records for the month plus the total match count.

    page and per_page are expected to be validated (>= 1) by the caller.
    """
    where = listing_predicate(month_number, search)
    offset = (page - 1) * per_page

    transactions, total_count = await asyncio.gather(
        store.find(where, offset=offset, limit=per_page),
        store.count(where),
    )
    logger.debug(
        f"Listing month={month_number} page={page} per_page={per_page} "
        f"search={search!r}: {len(transactions)}/{total_count}"
    )

    return TransactionsPage(
        transactions=transactions,
        pagination=Pagination(
            page=page,
            per_page=per_page,
            total_count=total_count,
            total_pages=math.ceil(total_count / per_page) if per_page else 0,
        ),
    )
