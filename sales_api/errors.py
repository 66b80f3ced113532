"""Exceptions raised by the query and seed layers."""


class SalesApiError(Exception):
    """Base class for application errors."""


class InvalidMonthError(SalesApiError):
    """Raised when a month name cannot be resolved."""

    def __init__(self, month: str):
        self.month = month
        super().__init__(f"Invalid month: {month}")


class SeedFetchError(SalesApiError):
    """Raised when the seed source cannot be fetched or decoded."""
