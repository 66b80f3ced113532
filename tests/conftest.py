"""Shared pytest fixtures."""
import pytest
from datetime import datetime, timezone

from sales_api.models.transaction import Transaction
from sales_api.storage import database
from sales_api.storage.database import TransactionStore


def make_transaction(tx_id, price, category="A", sold=False, when=None, title=None, description=None):
    """Build a transaction dated in March 2023 unless told otherwise."""
    return Transaction(
        id=tx_id,
        title=title or f"Item {tx_id}",
        description=description or f"Description for item {tx_id}",
        price=price,
        category=category,
        sold=sold,
        date_of_sale=when or datetime(2023, 3, 10, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def store(tmp_path, monkeypatch):
    """A fresh store swapped in as the application's database."""
    test_store = TransactionStore(str(tmp_path / "test.db"))
    monkeypatch.setattr(database, "_transaction_store", test_store)
    return test_store


@pytest.fixture
def march_transactions():
    """The three-record March example: prices 50, 150, 999; categories A, B, A."""
    return [
        make_transaction(1, 50.0, category="A", sold=True, title="Cotton Shirt"),
        make_transaction(2, 150.0, category="B", sold=False, title="Leather Wallet"),
        make_transaction(3, 999.0, category="A", sold=True, title="Laptop Backpack"),
    ]


@pytest.fixture
def seeded_store(store, march_transactions):
    """Store holding the March example plus records from other months."""
    store.replace_all(march_transactions + [
        make_transaction(10, 300.0, category="C", when=datetime(2023, 2, 28, 23, 59, tzinfo=timezone.utc)),
        make_transaction(11, 400.0, category="C", when=datetime(2023, 4, 1, tzinfo=timezone.utc)),
        make_transaction(12, 500.0, category="A", when=datetime(2022, 3, 15, tzinfo=timezone.utc)),
    ])
    return store


@pytest.fixture
def make_tx():
    """Factory for single transactions."""
    return make_transaction
