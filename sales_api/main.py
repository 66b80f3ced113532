"""FastAPI main application."""
import logging
import sqlite3
from typing import List, Optional
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sales_api.config import settings
from sales_api.errors import InvalidMonthError, SeedFetchError
from sales_api.models.report import (
    BarChartEntry,
    CombinedReport,
    PieChartEntry,
    Statistics,
    TransactionPage,
)
from sales_api.services.queries import TransactionQueryService
from sales_api.services.seed import SeedLoader
from sales_api.storage.database import get_db

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("sales_api")

app = FastAPI(title=settings.app_name, version=settings.version, debug=settings.debug)

# Allow a browser dashboard to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

seed_loader = SeedLoader()


def _query_service() -> TransactionQueryService:
    return TransactionQueryService(get_db())


@app.exception_handler(InvalidMonthError)
async def invalid_month_handler(request: Request, exc: InvalidMonthError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(SeedFetchError)
async def seed_fetch_handler(request: Request, exc: SeedFetchError):
    logger.error("Seeding failed on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=502, content={"detail": "Failed to fetch seed data"})


@app.exception_handler(sqlite3.Error)
async def store_error_handler(request: Request, exc: sqlite3.Error):
    logger.error("Store operation failed on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": settings.version}


@app.get("/api/init", response_class=PlainTextResponse)
async def init_database():
    """
    Replace the whole collection with the remote seed data.

    Not safe to retry blindly: each call re-fetches and re-replaces.
    """
    count = await seed_loader.load(get_db())
    return f"Database initialized with {count} transactions"


@app.get("/api/transactions", response_model=TransactionPage)
async def list_transactions(
    month: str = Query(..., description="Month name, e.g. March"),
    page: int = Query(1, ge=1, le=settings.max_page, description="1-based page number"),
    per_page: Optional[int] = Query(None, alias="perPage", ge=1, le=settings.max_per_page, description="Page size"),
    search: str = Query("", description="Matches title, description or exact price"),
):
    """List a month's transactions with search and pagination."""
    return await _query_service().list_transactions(month, page, per_page, search)


@app.get("/api/statistics", response_model=Statistics)
async def get_statistics(month: str = Query(..., description="Month name, e.g. March")):
    """Total sale amount and sold/unsold item counts for a month."""
    return await _query_service().statistics(month)


@app.get("/api/barchart", response_model=List[BarChartEntry])
async def get_bar_chart(month: str = Query(..., description="Month name, e.g. March")):
    """Item counts per price range for a month."""
    return await _query_service().bar_chart(month)


@app.get("/api/piechart", response_model=List[PieChartEntry])
async def get_pie_chart(month: str = Query(..., description="Month name, e.g. March")):
    """Item counts per category for a month."""
    return await _query_service().pie_chart(month)


@app.get("/api/combined", response_model=CombinedReport)
async def get_combined(month: str = Query(..., description="Month name, e.g. March")):
    """Listing, statistics, bar chart and pie chart for a month in one response."""
    return await _query_service().combined(month)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
