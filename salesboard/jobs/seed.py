"""Seed job: load the third-party dataset and replace the store contents."""
import logging
import time
from typing import Optional

from salesboard.config import config
from salesboard.fetch.client import DatasetClient
from salesboard.parse.models import SeedSummary
from salesboard.parse.records import parse_records
from salesboard.store.records import RecordStore

logger = logging.getLogger(__name__)


async def seed_database(
    store: RecordStore,
    client: DatasetClient,
    source: Optional[str] = None,
) -> SeedSummary:
    """
    Fetch the dataset and replace the whole collection with it.

    Any fetch or decode failure propagates before the store is touched,
    so a failed seed leaves the previous contents in place.
    """
    source = source or config.SEED_URL
    start_time = time.time()

    payload = await client.load(source)
    records, errors = parse_records(payload)
    inserted = await store.replace_all(records)

    summary = SeedSummary(
        source=source,
        fetched=len(payload),
        inserted=inserted,
        skipped=len(payload) - len(records),
        elapsed_seconds=round(time.time() - start_time, 3),
        errors=errors,
    )
    logger.info(
        f"Seed complete: fetched={summary.fetched} | "
        f"inserted={summary.inserted} | "
        f"skipped={summary.skipped} | "
        f"elapsed={summary.elapsed_seconds}s"
    )
    return summary

