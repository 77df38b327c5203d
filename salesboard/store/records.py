"""SQLite record store for sale transactions."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Iterable, Optional

import aiosqlite

from salesboard.config import config
from salesboard.parse.models import SaleRecord, Transaction
from salesboard.query.filters import Predicate

logger = logging.getLogger(__name__)

TABLE = "transactions"

COLUMNS = "id, title, description, price, category, date_of_sale, sold"


def contains_ci(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Literal, Unicode case-insensitive substring test."""
    if needle is None:
        return True
    return needle.casefold() in (haystack or "").casefold()


def _row_to_transaction(row: aiosqlite.Row) -> Transaction:
    return Transaction(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        price=row["price"],
        category=row["category"],
        date_of_sale=row["date_of_sale"],
        sold=bool(row["sold"]),
    )


class RecordStore:
    """Flat collection of sale records.

    Each operation opens its own connection, so reads can run concurrently.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path) if db_path is not None else config.DATABASE_PATH

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            await db.create_function("contains_ci", 2, contains_ci, deterministic=True)
            yield db

    async def initialize(self) -> None:
        """Create the table if it doesn't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect() as db:
            await db.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    price REAL NOT NULL,
                    category TEXT,
                    date_of_sale TEXT NOT NULL,
                    sale_month INTEGER NOT NULL,
                    sold INTEGER NOT NULL DEFAULT 0
                )
                """
            )
            await db.commit()
            logger.info(f"Record store initialized at {self.db_path}")

    async def replace_all(self, records: Iterable[SaleRecord]) -> int:
        """Replace the whole collection in one transaction. Returns rows inserted."""
        rows = [
            (
                record.title,
                record.description,
                record.price,
                record.category,
                record.date_of_sale.isoformat(),
                record.sale_month,
                1 if record.sold else 0,
            )
            for record in records
        ]
        async with self._connect() as db:
            try:
                await db.execute(f"DELETE FROM {TABLE}")
                await db.executemany(
                    f"""
                    INSERT INTO {TABLE}
                        (title, description, price, category, date_of_sale, sale_month, sold)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.info(f"Replaced collection with {len(rows)} records")
        return len(rows)

    async def find(
        self,
        where: Predicate,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """Records matching `where`, in insertion order."""
        sql = f"SELECT {COLUMNS} FROM {TABLE} WHERE {where.sql} ORDER BY id"
        params: tuple[Any, ...] = where.params
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params = params + (limit, offset)
        elif offset:
            sql += " LIMIT -1 OFFSET ?"
            params = params + (offset,)
        async with self._connect() as db:
            cursor = await db.execute(sql, params)
            rows = await cursor.fetchall()
        return [_row_to_transaction(row) for row in rows]

    async def count(self, where: Optional[Predicate] = None) -> int:
        sql = f"SELECT COUNT(*) FROM {TABLE}"
        params: tuple[Any, ...] = ()
        if where is not None:
            sql += f" WHERE {where.sql}"
            params = where.params
        async with self._connect() as db:
            cursor = await db.execute(sql, params)
            row = await cursor.fetchone()
        return row[0]

    async def sum_price(self, where: Predicate) -> float:
        """Sum of price over matching records, 0.0 when none match."""
        async with self._connect() as db:
            cursor = await db.execute(
                f"SELECT TOTAL(price) FROM {TABLE} WHERE {where.sql}", where.params
            )
            row = await cursor.fetchone()
        return float(row[0])

    async def count_by_category(self, where: Predicate) -> list[tuple[Optional[str], int]]:
        """(category, count) pairs for matching records."""
        async with self._connect() as db:
            cursor = await db.execute(
                f"""
                SELECT category, COUNT(*) FROM {TABLE}
                WHERE {where.sql}
                GROUP BY category
                ORDER BY category
                """,
                where.params,
            )
            rows = await cursor.fetchall()
        return [(row[0], row[1]) for row in rows]
