import datetime as dt
from decimal import Decimal

from expenwall.aggregation import (
    DateRangePreset,
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
from expenwall.models import NamedValue, TransactionItem, TransactionType, TrendPoint
from expenwall.projection import project_transactions

from helpers.records import rule, tx


def _processed(*txs, rules=()):
    return project_transactions(txs, rules)


def test_category_totals_exclude_income():
    processed = _processed(
        tx("Swiggy", 300, category="Food & Dining"),
        tx("Zepto", 200, category="Groceries"),
        tx("Salary", 50000, category="Income", type="income"),
        tx("Zomato", 150, category="Food & Dining"),
    )
    assert category_totals(processed) == [
        NamedValue("Food & Dining", Decimal("450")),
        NamedValue("Groceries", Decimal("200")),
    ]


def test_category_totals_group_by_display_category():
    processed = _processed(
        tx("IDFC FastTag", 150),
        tx("Uber", 100, category="Transportation"),
        rules=[rule("FastTag", "FASTag", forced_category="Transportation")],
    )
    assert category_totals(processed) == [NamedValue("Transportation", Decimal("250"))]


def test_top_merchants_uses_display_names_and_truncates():
    processed = _processed(
        tx("UPI-SWIGGY-1", 100),
        tx("UPI-SWIGGY-2", 150),
        tx("Zepto", 200),
        tx("Blinkit", 50),
        rules=[rule("UPI-SWIGGY", "Swiggy")],
    )
    assert top_merchants(processed, 2) == [
        NamedValue("Swiggy", Decimal("250")),
        NamedValue("Zepto", Decimal("200")),
    ]


def test_rank_top_ties_keep_first_appearance_order():
    pairs = [("b", Decimal("5")), ("a", Decimal("5")), ("c", Decimal("9")), ("a", Decimal("0"))]
    assert [nv.name for nv in rank_top(pairs)] == ["c", "b", "a"]
    assert [nv.name for nv in rank_top(pairs, 1)] == ["c"]
    assert rank_top([]) == []


def test_spending_trend_sorted_by_date_and_untyped_counts_as_expense():
    txs = [
        tx(amount=30, date=dt.date(2024, 5, 2)),
        tx(amount=1000, type="income", date=dt.date(2024, 5, 1)),
        tx(amount=20, type=None, date=dt.date(2024, 5, 1)),
        tx(amount=5, date=dt.date(2024, 5, 2)),
    ]
    assert spending_trend(txs) == [
        TrendPoint(dt.date(2024, 5, 1), Decimal("1000"), Decimal("20")),
        TrendPoint(dt.date(2024, 5, 2), Decimal("0"), Decimal("35")),
    ]


def test_untyped_record_defaults_to_expense():
    assert tx(type=None).type is TransactionType.EXPENSE
    assert tx(type="credit").type is TransactionType.INCOME


def test_filter_by_currency_treats_missing_as_default():
    inr = tx(currency="INR")
    unset = tx()
    usd = tx(currency="USD")
    assert filter_by_currency([inr, unset, usd], "INR") == [inr, unset]
    assert filter_by_currency([inr, unset, usd], "USD") == [usd]
    assert filter_by_currency([unset], "USD", default_currency="USD") == [unset]


def test_date_filters():
    old = tx(date=dt.date(2024, 1, 1))
    mid = tx(date=dt.date(2024, 5, 1))
    new = tx(date=dt.date(2024, 5, 30))
    txs = [old, mid, new]
    assert filter_by_date_range(txs, start=dt.date(2024, 5, 1)) == [mid, new]
    assert filter_by_date_range(txs, end=dt.date(2024, 5, 1)) == [old, mid]
    today = dt.date(2024, 5, 31)
    assert filter_by_preset(txs, DateRangePreset.WEEK, today=today) == [new]
    assert filter_by_preset(txs, "month", today=today) == [mid, new]
    assert filter_by_preset(txs, "custom", today=today) == txs


def test_summary_stats():
    stats = summary_stats(
        [tx(amount=100), tx(amount=300), tx(amount=1000, type="income")]
    )
    assert stats.total_income == Decimal("1000")
    assert stats.total_expense == Decimal("400")
    assert stats.net_balance == Decimal("600")
    assert stats.avg_expense == Decimal("200")
    assert stats.transaction_count == 3


def test_summary_stats_empty():
    stats = summary_stats([])
    assert stats.avg_expense == 0
    assert stats.transaction_count == 0


def test_recent_transactions_newest_first():
    a = tx(date=dt.date(2024, 5, 1))
    b = tx(date=dt.date(2024, 5, 3), time="09:00")
    c = tx(date=dt.date(2024, 5, 3), time="18:30")
    assert recent_transactions([a, b, c], 2) == [c, b]


def test_top_items_counts_line_items_of_expenses():
    milk = TransactionItem(name="Milk", price=Decimal("30"), quantity=2)
    bread = TransactionItem(name="Bread", price=Decimal("45"))
    txs = [
        tx(items=(bread, milk)),
        tx(items=(milk,)),
        tx(type="income", items=(bread, bread)),
    ]
    got = top_items(txs)
    assert [(i.name, i.count, i.total_amount) for i in got] == [
        ("Milk", 2, Decimal("120")),
        ("Bread", 1, Decimal("45")),
    ]
