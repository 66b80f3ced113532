"""Seed loader: replaces the collection with the remote seed dataset."""
import asyncio
import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from sales_api.config import settings
from sales_api.errors import SeedFetchError
from sales_api.models.transaction import Transaction
from sales_api.storage.database import TransactionStore

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(List[Transaction])


class SeedLoader:
    """Fetches seed records over HTTP and bulk-replaces the store."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.seed_url
        self.timeout = timeout if timeout is not None else settings.seed_timeout
        self.transport = transport

    async def fetch(self) -> List[Transaction]:
        """
        Fetch and type the seed records.

        Raises:
            SeedFetchError: On network errors, timeouts, non-2xx responses,
                a body that is not a JSON array, or records that fail typing
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.get(self.url)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as e:
            logger.error("Seed fetch from %s failed: %s", self.url, e)
            raise SeedFetchError(f"Failed to fetch seed data from {self.url}") from e
        except ValueError as e:
            logger.error("Seed source %s returned invalid JSON: %s", self.url, e)
            raise SeedFetchError("Seed source returned invalid JSON") from e

        if not isinstance(payload, list):
            raise SeedFetchError("Seed source did not return a JSON array")

        try:
            return _records_adapter.validate_python(payload)
        except ValidationError as e:
            logger.error("Seed records failed validation: %s", e)
            raise SeedFetchError("Seed records failed validation") from e

    async def load(self, store: TransactionStore) -> int:
        """Fetch the seed data and replace the store contents; returns the stored count."""
        transactions = await self.fetch()
        logger.info("Fetched %d seed transactions from %s", len(transactions), self.url)
        count = await asyncio.to_thread(store.replace_all, transactions)
        return count
