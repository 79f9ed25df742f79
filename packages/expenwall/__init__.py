"""Public interface for the ``expenwall`` package.

This module exposes the merchant-rule resolution pipeline, the aggregation
helpers and the public models as the stable import surface. There is no
runtime logic here, only symbol re-exports.
"""

from .aggregation import (
    budget_status,
    budget_statuses,
    category_totals,
    filter_by_currency,
    filter_by_date_range,
    filter_by_preset,
    rank_top,
    recent_transactions,
    spending_trend,
    summary_stats,
    top_items,
    top_merchants,
)
from .cravings import craving_stats
from .insights import generate_local_insights, weekend_spending
from .lookup_tables import (
    get_category_emoji,
    get_merchant_emoji,
    get_subcategory_emoji,
)
from .models import (
    Budget,
    BudgetStatus,
    Category,
    Craving,
    MerchantRule,
    NamedValue,
    ProcessedTransaction,
    RecurringTransaction,
    SubcategorySuggestion,
    Transaction,
    TransactionType,
    TrendPoint,
)
from .projection import project_transaction, project_transactions
from .recurring import due_recurring, next_due_date
from .rules import RuleMatchStrategy, build_rule_from_edit, match_rule
from .settings import Settings, load_settings
from .suggestions import suggest_subcategories

__all__ = [
    # Pipeline
    "match_rule",
    "build_rule_from_edit",
    "RuleMatchStrategy",
    "project_transaction",
    "project_transactions",
    "suggest_subcategories",
    "get_merchant_emoji",
    "get_category_emoji",
    "get_subcategory_emoji",
    # Aggregation
    "filter_by_currency",
    "filter_by_date_range",
    "filter_by_preset",
    "rank_top",
    "category_totals",
    "top_merchants",
    "top_items",
    "spending_trend",
    "summary_stats",
    "recent_transactions",
    "budget_status",
    "budget_statuses",
    "generate_local_insights",
    "weekend_spending",
    "next_due_date",
    "due_recurring",
    "craving_stats",
    # Config
    "Settings",
    "load_settings",
    # Models / types
    "Category",
    "TransactionType",
    "Transaction",
    "ProcessedTransaction",
    "MerchantRule",
    "Budget",
    "BudgetStatus",
    "RecurringTransaction",
    "Craving",
    "SubcategorySuggestion",
    "NamedValue",
    "TrendPoint",
]
