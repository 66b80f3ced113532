from .transaction import Transaction
from .report import (
    TransactionPage,
    Statistics,
    BarChartEntry,
    PieChartEntry,
    CombinedReport,
)

__all__ = [
    "Transaction",
    "TransactionPage",
    "Statistics",
    "BarChartEntry",
    "PieChartEntry",
    "CombinedReport",
]
