"""Local spending insights computed without any model call.

These are the offline counterparts of the AI insights: a handful of fixed
heuristics over the last 30 days of expenses.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from decimal import Decimal
from typing import NamedTuple

from .aggregation import effective_category, effective_merchant, rank_top
from .models import (
    Category,
    Insight,
    InsightPriority,
    InsightType,
    Transaction,
    TransactionType,
)

LOOKBACK_DAYS = 30
ANOMALY_MULTIPLIER = Decimal("3")
SAVINGS_THRESHOLD = Decimal("5000")
SAVINGS_RATE = Decimal("0.15")


class WeekendSplit(NamedTuple):
    weekend: Decimal
    weekday: Decimal


def _money(symbol: str, value: Decimal) -> str:
    return f"{symbol}{value:.2f}"


def generate_local_insights(
    transactions: Iterable[Transaction],
    *,
    today: dt.date,
    currency_symbol: str = "₹",
) -> list[Insight]:
    """Return pattern, anomaly and savings insights for the last 30 days.

    - pattern: the category with the highest expense total;
    - anomaly: the largest expense above 3x the average expense;
    - suggestion: a 15% cut of the top category when it exceeds 5000.
    """

    recent = [
        t
        for t in transactions
        if t.type is TransactionType.EXPENSE and (today - t.date).days <= LOOKBACK_DAYS
    ]
    insights: list[Insight] = []
    if not recent:
        return insights

    ranked = rank_top((str(effective_category(t)), t.amount) for t in recent)
    top = ranked[0]
    top_category = Category(top.name)
    insights.append(
        Insight(
            id="pattern-1",
            type=InsightType.PATTERN,
            title="Top Spending Category",
            description=(
                f"{top.name} accounts for most of your expenses "
                f"({_money(currency_symbol, top.value)})"
            ),
            priority=InsightPriority.MEDIUM,
            category=top_category,
            amount=top.value,
        )
    )

    average = sum((t.amount for t in recent), Decimal("0")) / len(recent)
    large = [t for t in recent if t.amount > average * ANOMALY_MULTIPLIER]
    if large:
        # max() keeps the first of equal amounts.
        largest = max(large, key=lambda t: t.amount)
        insights.append(
            Insight(
                id="anomaly-1",
                type=InsightType.ANOMALY,
                title="Unusual Large Expense",
                description=(
                    f"{effective_merchant(largest)} - {_money(currency_symbol, largest.amount)} "
                    "is 3x above your average"
                ),
                priority=InsightPriority.HIGH,
                category=effective_category(largest),
                amount=largest.amount,
            )
        )

    if top.value > SAVINGS_THRESHOLD:
        insights.append(
            Insight(
                id="suggestion-1",
                type=InsightType.SUGGESTION,
                title="Savings Opportunity",
                description=(
                    f"Try reducing {top.name} by 15% to save "
                    f"{_money(currency_symbol, top.value * SAVINGS_RATE)}/month"
                ),
                priority=InsightPriority.MEDIUM,
                category=top_category,
                actionable=True,
            )
        )

    return insights


def weekend_spending(transactions: Iterable[Transaction]) -> WeekendSplit:
    """Split expense totals into weekend (Sat/Sun) and weekday buckets."""

    weekend = Decimal("0")
    weekday = Decimal("0")
    for t in transactions:
        if t.type is not TransactionType.EXPENSE:
            continue
        if t.date.weekday() >= 5:
            weekend += t.amount
        else:
            weekday += t.amount
    return WeekendSplit(weekend=weekend, weekday=weekday)


__all__ = ["WeekendSplit", "generate_local_insights", "weekend_spending"]
