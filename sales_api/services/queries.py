"""Monthly query service: listing, statistics and chart breakdowns."""
import asyncio
import math
from typing import List, NamedTuple, Optional

from sales_api.config import settings
from sales_api.models.report import (
    BarChartEntry,
    CombinedReport,
    PieChartEntry,
    Statistics,
    TransactionPage,
)
from sales_api.storage.database import TransactionStore
from sales_api.utils.months import month_range


class PriceBucket(NamedTuple):
    """A bar-chart bucket covering above < price <= up_to."""

    label: str
    above: Optional[float]
    up_to: Optional[float]


def _build_buckets() -> List[PriceBucket]:
    buckets = [PriceBucket("0-100", None, 100.0)]
    for upper in range(200, 1000, 100):
        buckets.append(PriceBucket(f"{upper - 99}-{upper}", float(upper - 100), float(upper)))
    buckets.append(PriceBucket("901-above", 900.0, None))
    return buckets


PRICE_BUCKETS = _build_buckets()


class TransactionQueryService:
    """Read-only queries over one month of the transaction collection."""

    def __init__(self, store: TransactionStore, year: Optional[int] = None):
        self.store = store
        self.year = year if year is not None else settings.report_year

    async def list_transactions(
        self,
        month: str,
        page: int = 1,
        per_page: Optional[int] = None,
        search: str = "",
    ) -> TransactionPage:
        """
        List one page of a month's transactions.

        A non-empty search keeps records whose title or description contain it
        (case-insensitive) or whose price renders exactly as it.

        Args:
            month: Month name, e.g. "March"
            page: 1-based page number
            per_page: Page size, defaults to settings.default_per_page
            search: Free-text filter

        Returns:
            TransactionPage with the slice and total page count
        """
        if per_page is None:
            per_page = settings.default_per_page
        if page < 1 or per_page < 1:
            raise ValueError("page and per_page must be positive")

        start, end = month_range(month, self.year)
        skip = (page - 1) * per_page

        records, matching = await asyncio.gather(
            asyncio.to_thread(self.store.find, start, end, search, skip, per_page),
            asyncio.to_thread(self.store.count_matching, start, end, search),
        )
        return TransactionPage(
            transactions=records,
            total_pages=math.ceil(matching / per_page),
        )

    async def statistics(self, month: str) -> Statistics:
        """Total sale amount and sold/unsold counts for a month."""
        start, end = month_range(month, self.year)
        amount, sold, unsold = await asyncio.gather(
            asyncio.to_thread(self.store.sum_price, start, end),
            asyncio.to_thread(self.store.count_by_sold, start, end, True),
            asyncio.to_thread(self.store.count_by_sold, start, end, False),
        )
        return Statistics(
            total_sale_amount=round(amount, 2),
            total_sold_items=sold,
            total_unsold_items=unsold,
        )

    async def bar_chart(self, month: str) -> List[BarChartEntry]:
        """Record counts per price bucket, in fixed bucket order."""
        start, end = month_range(month, self.year)
        counts = await asyncio.gather(*[
            asyncio.to_thread(self.store.count_in_price_range, start, end, bucket.above, bucket.up_to)
            for bucket in PRICE_BUCKETS
        ])
        return [
            BarChartEntry(range=bucket.label, count=count)
            for bucket, count in zip(PRICE_BUCKETS, counts)
        ]

    async def pie_chart(self, month: str) -> List[PieChartEntry]:
        """Record counts per category present in the month."""
        start, end = month_range(month, self.year)
        groups = await asyncio.to_thread(self.store.count_by_category, start, end)
        return [PieChartEntry(category=category, count=count) for category, count in groups]

    async def combined(self, month: str) -> CombinedReport:
        """Run the four monthly views concurrently; any failure fails the whole report."""
        # Resolve first so a bad month fails before any query is scheduled
        month_range(month, self.year)
        page, stats, bars, pie = await asyncio.gather(
            self.list_transactions(month),
            self.statistics(month),
            self.bar_chart(month),
            self.pie_chart(month),
        )
        return CombinedReport(
            transactions=page,
            statistics=stats,
            bar_chart=bars,
            pie_chart=pie,
        )
