"""Database storage layer using SQLite."""
import logging
import sqlite3
from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from contextlib import contextmanager
from sales_api.models.transaction import Transaction
from sales_api.utils.timestamp import format_timestamp
from sales_api.config import settings

logger = logging.getLogger(__name__)


def format_price(price: float) -> str:
    """Render a price the way it is matched by text search ("150", "329.85")."""
    value = float(price)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _fold(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


class TransactionStore:
    """Storage for transactions."""

    def __init__(self, db_path: str = "sales.db"):
        self.db_path = db_path
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS transactions (
                    id INTEGER PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    price REAL NOT NULL,
                    price_text TEXT NOT NULL,
                    category TEXT NOT NULL,
                    image TEXT,
                    sold INTEGER NOT NULL,
                    date_of_sale TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_date_of_sale
                ON transactions(date_of_sale)
            """)
            conn.commit()

    @contextmanager
    def _get_conn(self):
        """Get database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        # SQLite's lower() only folds ASCII
        conn.create_function("fold", 1, _fold, deterministic=True)
        try:
            yield conn
        finally:
            conn.close()

    @staticmethod
    def _date_clause(start: datetime, end: datetime) -> Tuple[str, list]:
        return "date_of_sale >= ? AND date_of_sale < ?", [format_timestamp(start), format_timestamp(end)]

    @staticmethod
    def _search_clause(search: str) -> Tuple[str, list]:
        search = (search or "").strip()
        if not search:
            return "", []
        folded = search.lower()
        return (
            " AND (instr(fold(title), ?) > 0 OR instr(fold(description), ?) > 0 OR price_text = ?)",
            [folded, folded, search],
        )

    @staticmethod
    def _row_to_transaction(row: sqlite3.Row) -> Transaction:
        return Transaction(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            price=row["price"],
            category=row["category"],
            image=row["image"],
            sold=bool(row["sold"]),
            date_of_sale=row["date_of_sale"],
        )

    def replace_all(self, transactions: Iterable[Transaction]) -> int:
        """
        Replace the whole collection with the given transactions.

        Delete and insert run in one SQLite transaction, so a failure
        leaves the previous contents in place.
        """
        rows = [
            (
                tx.id,
                tx.title,
                tx.description,
                tx.price,
                format_price(tx.price),
                tx.category,
                tx.image,
                int(tx.sold),
                format_timestamp(tx.date_of_sale),
            )
            for tx in transactions
        ]
        with self._get_conn() as conn:
            try:
                deleted = conn.execute("DELETE FROM transactions").rowcount
                conn.executemany("""
                    INSERT INTO transactions
                    (id, title, description, price, price_text, category, image, sold, date_of_sale)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, rows)
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
        logger.info("Replaced %d transactions with %d", deleted, len(rows))
        return len(rows)

    def count_all(self) -> int:
        """Count every stored transaction."""
        with self._get_conn() as conn:
            return conn.execute("SELECT COUNT(*) FROM transactions").fetchone()[0]

    def find(
        self,
        start: datetime,
        end: datetime,
        search: str = "",
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Get transactions in [start, end) matching search, ordered by id."""
        date_sql, params = self._date_clause(start, end)
        search_sql, search_params = self._search_clause(search)
        query = f"SELECT * FROM transactions WHERE {date_sql}{search_sql} ORDER BY id ASC"
        params += search_params
        if limit is not None:
            query += " LIMIT ? OFFSET ?"
            params += [limit, skip]
        elif skip:
            query += " LIMIT -1 OFFSET ?"
            params.append(skip)

        with self._get_conn() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_transaction(row) for row in rows]

    def count_matching(self, start: datetime, end: datetime, search: str = "") -> int:
        """Count transactions in [start, end) matching search."""
        date_sql, params = self._date_clause(start, end)
        search_sql, search_params = self._search_clause(search)
        with self._get_conn() as conn:
            row = conn.execute(
                f"SELECT COUNT(*) FROM transactions WHERE {date_sql}{search_sql}",
                params + search_params,
            ).fetchone()
        return row[0]

    def sum_price(self, start: datetime, end: datetime) -> float:
        """Sum of price over [start, end); 0 when nothing matches."""
        date_sql, params = self._date_clause(start, end)
        with self._get_conn() as conn:
            row = conn.execute(
                f"SELECT COALESCE(SUM(price), 0) FROM transactions WHERE {date_sql}",
                params,
            ).fetchone()
        return float(row[0])

    def count_by_sold(self, start: datetime, end: datetime, sold: bool) -> int:
        date_sql, params = self._date_clause(start, end)
        with self._get_conn() as conn:
            row = conn.execute(
                f"SELECT COUNT(*) FROM transactions WHERE {date_sql} AND sold = ?",
                params + [int(sold)],
            ).fetchone()
        return row[0]

    def count_in_price_range(
        self,
        start: datetime,
        end: datetime,
        above: Optional[float],
        up_to: Optional[float],
    ) -> int:
        """Count transactions in [start, end) with above < price <= up_to; None leaves a side open."""
        date_sql, params = self._date_clause(start, end)
        query = f"SELECT COUNT(*) FROM transactions WHERE {date_sql}"
        if above is not None:
            query += " AND price > ?"
            params.append(above)
        if up_to is not None:
            query += " AND price <= ?"
            params.append(up_to)
        with self._get_conn() as conn:
            row = conn.execute(query, params).fetchone()
        return row[0]

    def count_by_category(self, start: datetime, end: datetime) -> List[Tuple[str, int]]:
        """Group transactions in [start, end) by category."""
        date_sql, params = self._date_clause(start, end)
        with self._get_conn() as conn:
            rows = conn.execute(
                f"""
                SELECT category, COUNT(*) AS count FROM transactions
                WHERE {date_sql}
                GROUP BY category
                ORDER BY category ASC
                """,
                params,
            ).fetchall()
        return [(row["category"], row["count"]) for row in rows]


# Global instance
_transaction_store = None


def get_db() -> TransactionStore:
    """Get the database store instance."""
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = TransactionStore(settings.database_path)
    return _transaction_store
