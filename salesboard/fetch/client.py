"""Dataset source: HTTP client with retries, or a local JSON file."""
import logging
from pathlib import Path
from typing import Any, Optional

import aiofiles
import httpx
import orjson
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from salesboard.config import config

logger = logging.getLogger(__name__)


class RetryableStatusError(Exception):
    """Server answered with a status worth retrying."""

    def __init__(self, response: httpx.Response):
        self.response = response
        super().__init__(f"HTTP {response.status_code} from {response.url}")


def is_retryable_status(response: httpx.Response) -> bool:
    """Check if status code is retryable."""
    return response.status_code in (429, 500, 502, 503, 504)


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def read_dataset_file(path: Path) -> Any:
    """Read and decode a local JSON dataset."""
    async with aiofiles.open(path, "rb") as f:
        content = await f.read()
    return orjson.loads(content)


class DatasetClient:
    """Fetches the seed dataset from a URL or a file path."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = httpx.AsyncClient(
            timeout=timeout or config.TIMEOUT,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(config.MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type(
            (httpx.TimeoutException, httpx.NetworkError, RetryableStatusError)
        ),
        reraise=True,
    )
    async def fetch_json(self, url: str) -> Any:
        """GET a URL and decode the JSON body."""
        try:
            response = await self.client.get(url)
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            logger.warning(f"Network error for {url}: {e}")
            raise

        if is_retryable_status(response):
            logger.warning(f"Retryable status {response.status_code} for {url}")
            raise RetryableStatusError(response)
        response.raise_for_status()
        return orjson.loads(response.content)

    async def load(self, source: Optional[str] = None) -> Any:
        """Load the dataset from `source` (defaults to SEED_URL)."""
        source = source or config.SEED_URL
        if is_remote(source):
            logger.info(f"Fetching dataset from {source}")
            return await self.fetch_json(source)
        logger.info(f"Reading dataset from file {source}")
        return await read_dataset_file(Path(source))
