"""Data models and boundary coercion for ``expenwall``.

Records that cross the package boundary (transactions, merchant rules, budgets,
recurring templates, cravings) are pydantic models: frozen, validated, and
addressable either by their snake_case field names or by the camelCase keys the
sync layer and the AI-extraction service use (``originalName``, ``walletId``,
``merchantEmoji``, ...). Derived, display-only values (suggestions, totals,
trend points, budget status) are plain frozen dataclasses.

Categories form a closed enumeration. Anything outside it (legacy strings,
AI-invented labels, ``None``) is coerced to :attr:`Category.OTHER` by
:func:`coerce_category`, which every category field runs through on
validation.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Category(StrEnum):
    FOOD = "Food & Dining"
    TRANSPORT = "Transportation"
    UTILITIES = "Utilities"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    HEALTH = "Health & Fitness"
    GROCERIES = "Groceries"
    INCOME = "Income"
    EDUCATION = "Education"
    PERSONAL_CARE = "Personal Care"
    GOVERNMENT = "Government & Official"
    BANKING = "Banking & Finance"
    OTHER = "Other"


class TransactionType(StrEnum):
    EXPENSE = "expense"
    INCOME = "income"


class BudgetPeriod(StrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class RecurringFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class CravingOutcome(StrEnum):
    PENDING = "pending"
    RESISTED = "resisted"
    GAVE_IN = "gave_in"


def _fold(text: str) -> str:
    return " ".join(text.split()).casefold()


# Display values, member names ("PERSONAL_CARE"), spaced member names
# ("personal care") and short labels ("Food", "Transport") all resolve.
_CATEGORY_LOOKUP: dict[str, Category] = {}
for _member in Category:
    _CATEGORY_LOOKUP[_fold(_member.value)] = _member
    _CATEGORY_LOOKUP[_fold(_member.name)] = _member
    _CATEGORY_LOOKUP[_fold(_member.name.replace("_", " "))] = _member
del _member


def coerce_category(value: Any) -> Category:
    """Map an arbitrary boundary value onto the closed :class:`Category` set.

    Matching is case- and whitespace-insensitive. Unknown strings, non-strings
    and ``None`` fall back to :attr:`Category.OTHER`; this never raises.
    """

    if isinstance(value, Category):
        return value
    if not isinstance(value, str):
        return Category.OTHER
    return _CATEGORY_LOOKUP.get(_fold(value), Category.OTHER)


_TYPE_ALIASES: dict[str, TransactionType] = {
    "expense": TransactionType.EXPENSE,
    "debit": TransactionType.EXPENSE,
    "dr": TransactionType.EXPENSE,
    "income": TransactionType.INCOME,
    "credit": TransactionType.INCOME,
    "cr": TransactionType.INCOME,
}


def coerce_transaction_type(value: Any) -> TransactionType:
    """Resolve a transaction direction; missing or unknown means expense.

    Older records carry no ``type`` at all and bank statements speak in
    debit/credit terms, so both are accepted here.
    """

    if isinstance(value, TransactionType):
        return value
    if not isinstance(value, str):
        return TransactionType.EXPENSE
    return _TYPE_ALIASES.get(value.strip().casefold(), TransactionType.EXPENSE)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# ---------------------------------------------------------------------------
# Boundary records (pydantic)
# ---------------------------------------------------------------------------


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class TransactionItem(_Record):
    """A single receipt line item."""

    name: str
    price: Decimal = Decimal("0")
    quantity: int = Field(default=1, ge=0)
    brand: str | None = None
    weight: Decimal | None = None
    weight_unit: str | None = None
    mrp: Decimal | None = None
    discount: Decimal | None = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Transaction(_Record):
    """A raw, persisted transaction as supplied by the sync layer.

    ``amount`` is always non-negative; direction lives in ``type``. Fields the
    core does not interpret (``notes``, ``currency``, ``wallet_id``,
    ``merchant_emoji``) are carried through to the projection untouched.
    """

    id: str
    merchant: str
    amount: Decimal = Field(ge=0)
    category: Category = Category.OTHER
    subcategory: str | None = None
    type: TransactionType = TransactionType.EXPENSE
    date: dt.date
    time: str | None = None
    items: tuple[TransactionItem, ...] = ()
    notes: str | None = None
    currency: str | None = None
    wallet_id: str | None = None
    merchant_emoji: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v: Any) -> Category:
        return coerce_category(v)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> TransactionType:
        return coerce_transaction_type(v)

    @field_validator("items", mode="before")
    @classmethod
    def _none_items(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("subcategory", "merchant_emoji", "currency", mode="before")
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE


class MerchantRule(_Record):
    """A user-authored aliasing rule for raw merchant strings.

    ``original_name`` is matched against ``Transaction.merchant`` by
    case-insensitive containment in either direction (see
    :func:`expenwall.rules.match_rule`).
    """

    id: str = Field(default_factory=lambda: uuid4().hex)
    original_name: str
    renamed_to: str
    forced_category: Category | None = None
    forced_subcategory: str | None = None
    emoji: str | None = None

    @field_validator("original_name")
    @classmethod
    def _original_name_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("originalName must be non-empty")
        return v

    @field_validator("forced_category", mode="before")
    @classmethod
    def _coerce_forced_category(cls, v: Any) -> Category | None:
        v = _blank_to_none(v)
        return None if v is None else coerce_category(v)

    @field_validator("forced_subcategory", "emoji", mode="before")
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)


class ProcessedTransaction(Transaction):
    """Display projection of a :class:`Transaction`; derived, never persisted."""

    display_merchant: str
    display_category: Category
    display_subcategory: str
    display_emoji: str
    is_aliased: bool

    @field_validator("display_category", mode="before")
    @classmethod
    def _coerce_display_category(cls, v: Any) -> Category:
        return coerce_category(v)


class Budget(_Record):
    """A spending cap for one category over a weekly or monthly window."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    category: Category
    subcategory: str | None = None
    amount: Decimal = Field(gt=0)
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: dt.date | None = None
    alert_at_80: bool = True
    alert_at_100: bool = True

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v: Any) -> Category:
        return coerce_category(v)

    @field_validator("subcategory", mode="before")
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return _blank_to_none(v)


class RecurringTransaction(_Record):
    """A template that produces a transaction every ``frequency`` period."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    merchant: str
    amount: Decimal = Field(ge=0)
    currency: str | None = None
    category: Category = Category.OTHER
    subcategory: str | None = None
    type: TransactionType = TransactionType.EXPENSE
    frequency: RecurringFrequency = RecurringFrequency.MONTHLY
    start_date: dt.date
    end_date: dt.date | None = None
    last_generated: dt.date | None = None
    next_due_date: dt.date
    is_active: bool = True

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v: Any) -> Category:
        return coerce_category(v)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> TransactionType:
        return coerce_transaction_type(v)


class Craving(_Record):
    """An impulse purchase the user logged before deciding whether to buy."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    platform: str = ""
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)
    items: tuple[TransactionItem, ...] = ()
    outcome: CravingOutcome = CravingOutcome.PENDING
    craved_at: dt.datetime
    notes: str | None = None


# ---------------------------------------------------------------------------
# Derived values (frozen dataclasses)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SubcategorySuggestion:
    """A ranked subcategory candidate for free-text input.

    ``confidence`` lies in ``(0, 1]`` and is used for ordering/display only.
    """

    subcategory: str
    category: Category
    emoji: str
    confidence: float

    def __post_init__(self) -> None:
        if not 0.0 < self.confidence <= 1.0:
            raise ValueError("SubcategorySuggestion.confidence must be within (0, 1]")


@dataclass(frozen=True, slots=True)
class NamedValue:
    """A ``{name, value}`` pair as consumed by charts and rankings."""

    name: str
    value: Decimal


@dataclass(frozen=True, slots=True)
class TrendPoint:
    date: dt.date
    income: Decimal
    expense: Decimal


@dataclass(frozen=True, slots=True)
class SummaryStats:
    total_income: Decimal
    total_expense: Decimal
    net_balance: Decimal
    avg_expense: Decimal
    transaction_count: int


@dataclass(frozen=True, slots=True)
class BudgetStatus:
    """Spend against a :class:`Budget` for its current period.

    ``percentage`` is capped at 100; ``is_over_budget`` is the uncapped signal.
    """

    budget: Budget
    spent: Decimal
    remaining: Decimal
    percentage: Decimal
    is_over_budget: bool

    @property
    def triggered_alerts(self) -> tuple[int, ...]:
        """Alert thresholds (80 and/or 100) reached and enabled on the budget."""

        out: list[int] = []
        if self.budget.alert_at_80 and self.percentage >= 80:
            out.append(80)
        if self.budget.alert_at_100 and self.percentage >= 100:
            out.append(100)
        return tuple(out)


class InsightType(StrEnum):
    PATTERN = "pattern"
    ANOMALY = "anomaly"
    SUGGESTION = "suggestion"
    WARNING = "warning"


class InsightPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class Insight:
    id: str
    type: InsightType
    title: str
    description: str
    priority: InsightPriority
    category: Category | None = None
    amount: Decimal | None = None
    actionable: bool = False


@dataclass(frozen=True, slots=True)
class ItemTally:
    name: str
    count: int
    total_amount: Decimal


@dataclass(frozen=True, slots=True)
class CravingStats:
    total_saved: Decimal
    total_wasted: Decimal
    resistance_rate: int
    total_cravings: int
    resisted_count: int
    gave_in_count: int
    most_craved_items: tuple[ItemTally, ...]


__all__ = [
    "Category",
    "TransactionType",
    "BudgetPeriod",
    "RecurringFrequency",
    "CravingOutcome",
    "coerce_category",
    "coerce_transaction_type",
    "TransactionItem",
    "Transaction",
    "MerchantRule",
    "ProcessedTransaction",
    "Budget",
    "RecurringTransaction",
    "Craving",
    "SubcategorySuggestion",
    "NamedValue",
    "TrendPoint",
    "SummaryStats",
    "BudgetStatus",
    "InsightType",
    "InsightPriority",
    "Insight",
    "ItemTally",
    "CravingStats",
]
