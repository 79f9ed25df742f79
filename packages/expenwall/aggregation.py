"""Pure reducers over (processed) transactions for dashboards and analytics.

Every function here is deterministic and side-effect free, takes its inputs
(including "today" and the display currency) as explicit arguments, and
recomputes from scratch on each call.

Functions that group by display fields (``display_category``,
``display_merchant``) expect :class:`~expenwall.models.ProcessedTransaction`
records. Filters and budget math accept raw transactions too; budget matching
uses the display category when one is available.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from enum import StrEnum
from typing import TypeVar

from .models import (
    Budget,
    BudgetPeriod,
    BudgetStatus,
    Category,
    ItemTally,
    NamedValue,
    ProcessedTransaction,
    SummaryStats,
    Transaction,
    TransactionItem,
    TransactionType,
    TrendPoint,
)
from .settings import DEFAULT_CURRENCY, DEFAULT_TOP_N

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

T = TypeVar("T", bound=Transaction)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class DateRangePreset(StrEnum):
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "3months"
    YEAR = "year"
    CUSTOM = "custom"


PRESET_DAYS: Mapping[DateRangePreset, int] = {
    DateRangePreset.WEEK: 7,
    DateRangePreset.MONTH: 30,
    DateRangePreset.THREE_MONTHS: 90,
    DateRangePreset.YEAR: 365,
}


def filter_by_currency(
    transactions: Iterable[T],
    currency: str,
    *,
    default_currency: str = DEFAULT_CURRENCY,
) -> list[T]:
    """Keep transactions in ``currency``; records without one count as ``default_currency``."""

    return [t for t in transactions if (t.currency or default_currency) == currency]


def filter_by_date_range(
    transactions: Iterable[T],
    start: dt.date | None = None,
    end: dt.date | None = None,
) -> list[T]:
    """Keep transactions dated within ``[start, end]`` (either bound optional)."""

    return [
        t
        for t in transactions
        if (start is None or t.date >= start) and (end is None or t.date <= end)
    ]


def filter_by_preset(
    transactions: Iterable[T],
    preset: DateRangePreset | str,
    *,
    today: dt.date,
) -> list[T]:
    """Keep transactions on or after ``today - PRESET_DAYS[preset]``.

    ``custom`` (or any preset without a day count) leaves the input unfiltered.
    """

    days = PRESET_DAYS.get(DateRangePreset(preset))
    if days is None:
        return list(transactions)
    return filter_by_date_range(transactions, start=today - dt.timedelta(days=days))


def _expenses(transactions: Iterable[T]) -> list[T]:
    return [t for t in transactions if t.type is TransactionType.EXPENSE]


# ---------------------------------------------------------------------------
# Rankings and totals
# ---------------------------------------------------------------------------


def rank_top(
    pairs: Iterable[tuple[str, Decimal]], n: int | None = None
) -> list[NamedValue]:
    """Sum values per key and return them sorted descending, truncated to ``n``.

    Keys keep their first-appearance order before sorting and the sort is
    stable, so equal totals come out in input order.
    """

    totals: dict[str, Decimal] = {}
    for key, value in pairs:
        totals[key] = totals.get(key, _ZERO) + value
    ranked = sorted(
        (NamedValue(name=k, value=v) for k, v in totals.items()),
        key=lambda nv: nv.value,
        reverse=True,
    )
    return ranked if n is None else ranked[: max(n, 0)]


def category_totals(transactions: Iterable[ProcessedTransaction]) -> list[NamedValue]:
    """Expense totals per display category, largest first (income excluded)."""

    return rank_top((str(t.display_category), t.amount) for t in _expenses(transactions))


def top_merchants(
    transactions: Iterable[ProcessedTransaction], n: int = DEFAULT_TOP_N
) -> list[NamedValue]:
    """Top ``n`` display merchants by summed expense."""

    return rank_top(((t.display_merchant, t.amount) for t in _expenses(transactions)), n)


def tally_items(items: Iterable[TransactionItem], n: int | None = None) -> list[ItemTally]:
    """Count line items by name (summing ``price * quantity``), most frequent first.

    Blank names are skipped. Stable for equal counts.
    """

    counts: dict[str, int] = {}
    amounts: dict[str, Decimal] = {}
    for item in items:
        name = item.name.strip()
        if not name:
            continue
        counts[name] = counts.get(name, 0) + 1
        amounts[name] = amounts.get(name, _ZERO) + item.line_total
    ranked = sorted(
        (ItemTally(name=k, count=counts[k], total_amount=amounts[k]) for k in counts),
        key=lambda it: it.count,
        reverse=True,
    )
    return ranked if n is None else ranked[: max(n, 0)]


def top_items(
    transactions: Iterable[Transaction], n: int = DEFAULT_TOP_N
) -> list[ItemTally]:
    """Most frequently bought line items across expense transactions."""

    return tally_items((item for t in _expenses(transactions) for item in t.items), n)


def spending_trend(transactions: Iterable[Transaction]) -> list[TrendPoint]:
    """Per-day income and expense sums, ascending by date.

    Anything that is not income counts toward the expense series.
    """

    grouped: dict[dt.date, tuple[Decimal, Decimal]] = {}
    for t in transactions:
        income, expense = grouped.get(t.date, (_ZERO, _ZERO))
        if t.type is TransactionType.INCOME:
            income += t.amount
        else:
            expense += t.amount
        grouped[t.date] = (income, expense)
    return [
        TrendPoint(date=d, income=inc, expense=exp) for d, (inc, exp) in sorted(grouped.items())
    ]


def summary_stats(transactions: Iterable[Transaction]) -> SummaryStats:
    txs = list(transactions)
    income = sum((t.amount for t in txs if t.type is TransactionType.INCOME), _ZERO)
    expenses = _expenses(txs)
    expense = sum((t.amount for t in expenses), _ZERO)
    avg = expense / len(expenses) if expenses else _ZERO
    return SummaryStats(
        total_income=income,
        total_expense=expense,
        net_balance=income - expense,
        avg_expense=avg,
        transaction_count=len(txs),
    )


def recent_transactions(transactions: Iterable[T], n: int = 5) -> list[T]:
    """The ``n`` most recent transactions, newest first (stable within a day)."""

    ordered = sorted(transactions, key=lambda t: (t.date, t.time or ""), reverse=True)
    return ordered[: max(n, 0)]


# ---------------------------------------------------------------------------
# Budgets
# ---------------------------------------------------------------------------


def period_start(period: BudgetPeriod | str, today: dt.date) -> dt.date:
    """Start of the budget window containing ``today``.

    Monthly windows start on the 1st of the current month; weekly windows on
    the most recent Sunday (``today`` itself when it is a Sunday).
    """

    if BudgetPeriod(period) is BudgetPeriod.MONTHLY:
        return today.replace(day=1)
    # date.weekday(): Monday == 0 ... Sunday == 6
    return today - dt.timedelta(days=(today.weekday() + 1) % 7)


def effective_category(t: Transaction) -> Category:
    if isinstance(t, ProcessedTransaction):
        return t.display_category
    return t.category


def effective_merchant(t: Transaction) -> str:
    if isinstance(t, ProcessedTransaction):
        return t.display_merchant
    return t.merchant


def effective_subcategory(t: Transaction) -> str:
    if isinstance(t, ProcessedTransaction):
        return t.display_subcategory
    return t.subcategory or ""


def budget_status(
    budget: Budget,
    transactions: Iterable[Transaction],
    *,
    today: dt.date | None = None,
) -> BudgetStatus:
    """Spend against ``budget`` for the window ``[period_start, today]``.

    Only expenses of the budget's category count; when the budget names a
    subcategory, the transaction's subcategory must match it
    (case-insensitively). ``percentage`` is capped at 100 while
    ``is_over_budget`` compares the uncapped spend.
    """

    today = today or dt.date.today()
    start = period_start(budget.period, today)
    wanted_sub = budget.subcategory.strip().casefold() if budget.subcategory else None

    spent = _ZERO
    for t in _expenses(transactions):
        if effective_category(t) != budget.category:
            continue
        if wanted_sub is not None and effective_subcategory(t).strip().casefold() != wanted_sub:
            continue
        if start <= t.date <= today:
            spent += t.amount

    percentage = spent / budget.amount * _HUNDRED
    return BudgetStatus(
        budget=budget,
        spent=spent,
        remaining=budget.amount - spent,
        percentage=min(percentage, _HUNDRED),
        is_over_budget=spent > budget.amount,
    )


def budget_statuses(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    *,
    today: dt.date | None = None,
) -> list[BudgetStatus]:
    today = today or dt.date.today()
    txs: Sequence[Transaction] = list(transactions)
    return [budget_status(b, txs, today=today) for b in budgets]


__all__ = [
    "DateRangePreset",
    "PRESET_DAYS",
    "filter_by_currency",
    "filter_by_date_range",
    "filter_by_preset",
    "rank_top",
    "category_totals",
    "top_merchants",
    "tally_items",
    "top_items",
    "spending_trend",
    "summary_stats",
    "recent_transactions",
    "period_start",
    "effective_category",
    "effective_merchant",
    "effective_subcategory",
    "budget_status",
    "budget_statuses",
]
