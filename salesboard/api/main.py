"""FastAPI main application."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse
from fastapi.security import APIKeyHeader

from salesboard.api.middleware import setup_error_handlers, setup_middleware
from salesboard.config import config, Config
from salesboard.fetch.client import DatasetClient
from salesboard.jobs.seed import seed_database
from salesboard.parse.models import (
    CategoryCount,
    CombinedResponse,
    PriceRangeCount,
    Statistics,
    TransactionsPage,
)
from salesboard.query.months import InvalidMonthError, MissingMonthError, resolve_month
from salesboard.services.charts import get_bar_chart, get_pie_chart
from salesboard.services.combined import get_combined
from salesboard.services.statistics import get_statistics
from salesboard.services.transactions import list_transactions
from salesboard.store.records import RecordStore

logger = logging.getLogger(__name__)

# Largest page whose offset still fits in a SQLite INTEGER
MAX_PAGE = (2**63 - 1) // config.MAX_PER_PAGE

# API Key security (if configured)
API_KEY_HEADER = APIKeyHeader(name="X-API-KEY", auto_error=False)


def verify_api_key(api_key: Optional[str] = Depends(API_KEY_HEADER)) -> bool:
    """Verify API key if configured."""
    expected_key = config.API_KEY
    if expected_key:
        if not api_key or api_key != expected_key:
            raise HTTPException(status_code=403, detail="Invalid API key")
    return True


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_month_number(
    month: Optional[str] = Query(None, description="Month name, e.g. March"),
) -> int:
    """Resolve the required month parameter or answer 400."""
    try:
        return resolve_month(month)
    except MissingMonthError:
        raise HTTPException(status_code=400, detail="Month parameter is required")
    except InvalidMonthError:
        raise HTTPException(status_code=400, detail="Invalid month parameter")


class ListingParams:
    """Validated page/perPage/search query parameters."""

    def __init__(
        self,
        page: int = Query(1, ge=1, le=MAX_PAGE),
        per_page: int = Query(
            config.DEFAULT_PER_PAGE, alias="perPage", ge=1, le=config.MAX_PER_PAGE
        ),
        search: str = Query("", max_length=config.MAX_SEARCH_LENGTH),
    ):
        self.page = page
        self.per_page = per_page
        self.search = search


def create_app(
    store: Optional[RecordStore] = None,
    dataset_client_factory: Callable[[], DatasetClient] = DatasetClient,
) -> FastAPI:
    """Build the API around a record store."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await app.state.store.initialize()
        logger.info("Transaction dashboard API started")
        yield
        logger.info("Transaction dashboard API stopped")

    app = FastAPI(title="Transaction Dashboard API", version="0.1.0", lifespan=lifespan)
    app.state.store = store or RecordStore()
    app.state.dataset_client_factory = dataset_client_factory

    setup_error_handlers(app)
    setup_middleware(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness message."""
        return "Welcome to the API!"

    @app.get("/health")
    async def health(store: RecordStore = Depends(get_store)):
        """Health check endpoint (no auth required)."""
        try:
            record_count = await store.count()
            status = "ok"
        except Exception as e:
            logger.warning(f"Health check could not read the store: {e}")
            record_count = None
            status = "degraded"
        return {
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "record_count": record_count,
        }

    @app.get("/seed-database", response_class=PlainTextResponse)
    async def seed(
        request: Request,
        store: RecordStore = Depends(get_store),
        _: bool = Depends(verify_api_key),
    ):
        """Replace the whole collection with the third-party dataset."""
        try:
            async with request.app.state.dataset_client_factory() as client:
                await seed_database(store, client)
        except Exception as e:
            logger.error(f"Error seeding the database: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error seeding the database")
        return "Database seeded successfully"

    @app.get("/transactions", response_model=TransactionsPage)
    async def transactions(
        month_number: int = Depends(get_month_number),
        params: ListingParams = Depends(),
        store: RecordStore = Depends(get_store),
    ):
        """Paginated transactions for a month, optionally searched."""
        try:
            return await list_transactions(
                store,
                month_number,
                page=params.page,
                per_page=params.per_page,
                search=params.search,
            )
        except Exception as e:
            logger.error(f"Error fetching transactions: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching transactions")

    @app.get("/statistics", response_model=Statistics)
    async def statistics(
        month_number: int = Depends(get_month_number),
        store: RecordStore = Depends(get_store),
    ):
        """Total sale amount and sold/unsold counts for a month."""
        try:
            return await get_statistics(store, month_number)
        except Exception as e:
            logger.error(f"Error fetching statistics: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching statistics")

    @app.get("/bar-chart", response_model=list[PriceRangeCount])
    async def bar_chart(
        month_number: int = Depends(get_month_number),
        store: RecordStore = Depends(get_store),
    ):
        """Price-range distribution for a month."""
        try:
            return await get_bar_chart(store, month_number)
        except Exception as e:
            logger.error(f"Error fetching bar chart data: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching bar chart data")

    @app.get("/pie-chart", response_model=list[CategoryCount])
    async def pie_chart(
        month_number: int = Depends(get_month_number),
        store: RecordStore = Depends(get_store),
    ):
        """Items per category for a month."""
        try:
            return await get_pie_chart(store, month_number)
        except Exception as e:
            logger.error(f"Error fetching pie chart data: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching pie chart data")

    @app.get("/combined", response_model=CombinedResponse)
    async def combined(
        month_number: int = Depends(get_month_number),
        params: ListingParams = Depends(),
        store: RecordStore = Depends(get_store),
    ):
        """Transactions, statistics and both charts in one response."""
        try:
            return await get_combined(
                store,
                month_number,
                page=params.page,
                per_page=params.per_page,
                search=params.search,
            )
        except Exception as e:
            logger.error(f"Error fetching combined data: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Error fetching combined data")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from salesboard.logging_conf import setup_logging

    setup_logging()
    Config.validate()
    uvicorn.run(app, host=config.HOST, port=config.PORT)
