"""Boundary loaders turning external payloads into validated records."""

from .extracted import from_receipt_data, from_statement_data
from .records import (
    RecordLoadError,
    load_budgets,
    load_cravings,
    load_recurring,
    load_rules,
    load_transactions,
)

__all__ = [
    "RecordLoadError",
    "load_transactions",
    "load_rules",
    "load_budgets",
    "load_recurring",
    "load_cravings",
    "from_receipt_data",
    "from_statement_data",
]
