import datetime as dt
from decimal import Decimal

import pytest
from pydantic import ValidationError

from expenwall.aggregation import budget_status, budget_statuses, period_start
from expenwall.models import Budget, BudgetPeriod
from expenwall.projection import project_transactions

from helpers.records import budget, rule, tx

TODAY = dt.date(2024, 5, 20)


def _food(amount, **kw):
    return tx("Swiggy", amount, category="Food & Dining", **kw)


def test_spend_exactly_at_budget_is_not_over():
    status = budget_status(budget("Food & Dining", 100), [_food("100")], today=TODAY)
    assert status.spent == Decimal("100")
    assert status.remaining == Decimal("0")
    assert status.percentage == Decimal("100")
    assert status.is_over_budget is False
    assert status.triggered_alerts == (80, 100)


def test_spend_just_above_budget_is_over_with_capped_percentage():
    status = budget_status(budget("Food & Dining", 100), [_food("100.01")], today=TODAY)
    assert status.is_over_budget is True
    assert status.percentage == Decimal("100")
    assert status.remaining == Decimal("-0.01")


def test_only_current_period_expenses_of_the_category_count():
    txs = [
        _food(10, date=dt.date(2024, 5, 1)),
        _food(20, date=dt.date(2024, 4, 30)),
        _food(40, date=dt.date(2024, 5, 21)),
        _food(80, type="income"),
        tx("Zepto", 160, category="Groceries"),
    ]
    status = budget_status(budget("Food & Dining", 1000), txs, today=TODAY)
    assert status.spent == Decimal("10")
    assert status.percentage == Decimal("1")
    assert status.triggered_alerts == ()


def test_weekly_period_starts_on_sunday():
    assert period_start(BudgetPeriod.WEEKLY, dt.date(2024, 5, 22)) == dt.date(2024, 5, 19)
    assert period_start(BudgetPeriod.WEEKLY, dt.date(2024, 5, 19)) == dt.date(2024, 5, 19)
    assert period_start("monthly", dt.date(2024, 5, 22)) == dt.date(2024, 5, 1)


def test_weekly_budget_window():
    txs = [_food(50, date=dt.date(2024, 5, 18)), _food(70, date=dt.date(2024, 5, 19))]
    status = budget_status(
        budget("Food & Dining", 100, period="weekly"), txs, today=dt.date(2024, 5, 22)
    )
    assert status.spent == Decimal("70")
    assert status.triggered_alerts == ()


def test_subcategory_budget_matches_case_insensitively():
    txs = [
        _food(60, subcategory="Biryani"),
        _food(30, subcategory="Pizza"),
    ]
    status = budget_status(
        budget("Food & Dining", 100, subcategory="biryani "), txs, today=TODAY
    )
    assert status.spent == Decimal("60")


def test_budget_uses_display_category_of_processed_transactions():
    processed = project_transactions(
        [tx("IDFC FastTag", 90)],
        [rule("FastTag", "FASTag", forced_category="Transportation")],
    )
    status = budget_status(budget("Transportation", 100), processed, today=TODAY)
    assert status.spent == Decimal("90")
    assert status.triggered_alerts == (80,)


def test_alerts_respect_budget_flags():
    b = budget("Food & Dining", 100, alert_at_80=False)
    assert budget_status(b, [_food(85)], today=TODAY).triggered_alerts == ()


def test_budget_statuses_preserve_budget_order():
    budgets = [budget("Groceries", 500), budget("Food & Dining", 100)]
    statuses = budget_statuses(budgets, [_food(10)], today=TODAY)
    assert [s.budget.category for s in statuses] == [b.category for b in budgets]


@pytest.mark.parametrize("amount", ["0", "-5"])
def test_budget_amount_must_be_positive(amount):
    with pytest.raises(ValidationError):
        Budget(category="Food & Dining", amount=Decimal(amount))
