"""Data models for sale records and API responses."""
from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SaleRecord(BaseModel):
    """One sale record as delivered by the seed dataset."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    description: str = Field(default="")
    price: float = Field(..., allow_inf_nan=False, description="Not validated as non-negative")
    category: Optional[str] = Field(default=None)
    date_of_sale: datetime = Field(..., alias="dateOfSale")
    sold: bool = Field(default=False)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("date_of_sale")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        """Naive timestamps are taken as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def sale_month(self) -> int:
        return self.date_of_sale.month


class Transaction(BaseModel):
    """A stored sale record as returned by the listing endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., alias="_id")
    title: str
    description: str
    price: float
    category: Optional[str] = None
    date_of_sale: datetime = Field(..., alias="dateOfSale")
    sold: bool


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    per_page: int = Field(..., alias="perPage")
    total_count: int = Field(..., alias="totalCount")
    total_pages: int = Field(..., alias="totalPages")


class TransactionsPage(BaseModel):
    transactions: list[Transaction]
    pagination: Pagination


class Statistics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_sale_amount: float = Field(..., alias="totalSaleAmount")
    sold_items: int = Field(..., alias="soldItems")
    unsold_items: int = Field(..., alias="unsoldItems")


class PriceRangeCount(BaseModel):
    range: str
    count: int


class CategoryCount(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: Optional[str] = Field(..., alias="_id")
    count: int


class CombinedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transactions: TransactionsPage
    statistics: Statistics
    bar_chart: list[PriceRangeCount] = Field(..., alias="barChart")
    pie_chart: list[CategoryCount] = Field(..., alias="pieChart")


class SeedSummary(BaseModel):
    """Outcome of a seed run."""

    source: str
    fetched: int
    inserted: int
    skipped: int
    elapsed_seconds: float
    errors: list[dict[str, Any]] = Field(default_factory=list)
