from .queries import PRICE_BUCKETS, PriceBucket, TransactionQueryService
from .seed import SeedLoader

__all__ = [
    "PRICE_BUCKETS",
    "PriceBucket",
    "TransactionQueryService",
    "SeedLoader",
]
