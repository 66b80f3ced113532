"""Report and response models."""
from typing import List
from pydantic import BaseModel, ConfigDict, Field

from sales_api.models.transaction import Transaction


class TransactionPage(BaseModel):
    """One page of the monthly transaction listing."""

    model_config = ConfigDict(populate_by_name=True)

    transactions: List[Transaction] = Field(default_factory=list)
    total_pages: int = Field(..., ge=0, alias="totalPages", description="ceil(matching / perPage)")


class Statistics(BaseModel):
    """Sale totals for one month."""

    model_config = ConfigDict(populate_by_name=True)

    total_sale_amount: float = Field(..., alias="totalSaleAmount", description="Sum of price, sold or not")
    total_sold_items: int = Field(..., alias="totalSoldItems")
    total_unsold_items: int = Field(..., alias="totalUnsoldItems")


class BarChartEntry(BaseModel):
    """Count of records in one price bucket."""

    range: str = Field(..., description="Bucket label, e.g. '101-200'")
    count: int = Field(..., ge=0)


class PieChartEntry(BaseModel):
    """Count of records in one category."""

    model_config = ConfigDict(populate_by_name=True)

    category: str = Field(..., alias="_id")
    count: int = Field(..., ge=0)


class CombinedReport(BaseModel):
    """All four monthly views in one response."""

    model_config = ConfigDict(populate_by_name=True)

    transactions: TransactionPage
    statistics: Statistics
    bar_chart: List[BarChartEntry] = Field(..., alias="barChart")
    pie_chart: List[PieChartEntry] = Field(..., alias="pieChart")
