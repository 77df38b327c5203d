"""All dashboard sections for one month in a single response."""
import asyncio

from salesboard.parse.models import CombinedResponse
from salesboard.services.charts import get_bar_chart, get_pie_chart
from salesboard.services.statistics import get_statistics
from salesboard.services.transactions import list_transactions
from salesboard.store.records import RecordStore


async def get_combined(
    store: RecordStore,
    month_number: int,
    page: int = 1,
    per_page: int = 10,
    search: str = "",
) -> CombinedResponse:
    """Run the four sections concurrently; any failure fails the whole call."""
    transactions, statistics, bar_chart, pie_chart = await asyncio.gather(
        list_transactions(store, month_number, page=page, per_page=per_page, search=search),
        get_statistics(store, month_number),
        get_bar_chart(store, month_number),
        get_pie_chart(store, month_number),
    )
    return CombinedResponse(
        transactions=transactions,
        statistics=statistics,
        bar_chart=bar_chart,
        pie_chart=pie_chart,
    )
