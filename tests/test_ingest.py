import datetime as dt
import json
from decimal import Decimal

import pytest

from expenwall.ingest import (
    RecordLoadError,
    from_receipt_data,
    from_statement_data,
    load_budgets,
    load_cravings,
    load_recurring,
    load_rules,
    load_transactions,
)
from expenwall.ingest.extracted import UNKNOWN_MERCHANT
from expenwall.models import (
    BudgetPeriod,
    Category,
    CravingOutcome,
    RecurringFrequency,
    TransactionType,
)


def _write(tmp_path, name, payload):
    p = tmp_path / name
    p.write_text(json.dumps(payload), encoding="utf-8")
    return p


def test_load_transactions_accepts_camel_case_and_legacy_values(tmp_path):
    p = _write(
        tmp_path,
        "tx.json",
        [
            {
                "id": "a",
                "merchant": "Swiggy",
                "amount": 250.5,
                "category": "Food & Dining",
                "date": "2024-05-10",
                "walletId": "w1",
                "merchantEmoji": "",
                "items": [{"name": "Biryani", "price": 250.5, "quantity": 1}],
            },
            {
                "id": "b",
                "merchant": "Salary",
                "amount": "90000",
                "category": "Salary Credit",
                "type": "credit",
                "date": "2024-05-01",
                "someFutureField": True,
            },
        ],
    )
    a, b = load_transactions(p)
    assert a.amount == Decimal("250.5")
    assert a.wallet_id == "w1"
    assert a.merchant_emoji is None
    assert a.items[0].name == "Biryani"
    assert b.category is Category.OTHER
    assert b.type is TransactionType.INCOME


def test_load_rules_from_wrapped_object_keeps_order(tmp_path):
    p = _write(
        tmp_path,
        "rules.json",
        {
            "rules": [
                {"originalName": "FastTag", "renamedTo": "FASTag"},
                {"originalName": "Swiggy", "renamedTo": "Swiggy", "forcedCategory": "Food"},
            ]
        },
    )
    rules = load_rules(p)
    assert [r.original_name for r in rules] == ["FastTag", "Swiggy"]
    assert rules[1].forced_category is Category.FOOD


def test_load_budgets(tmp_path):
    p = _write(
        tmp_path,
        "budgets.json",
        [{"category": "Groceries", "amount": 5000, "period": "weekly", "alert_at_80": False}],
    )
    (b,) = load_budgets(p)
    assert b.period is BudgetPeriod.WEEKLY
    assert b.alert_at_80 is False


def test_invalid_record_reports_position(tmp_path):
    p = _write(
        tmp_path,
        "tx.json",
        [
            {"id": "ok", "merchant": "x", "amount": 1, "date": "2024-05-01"},
            {"id": "bad", "merchant": "x", "amount": -1, "date": "2024-05-01"},
        ],
    )
    with pytest.raises(RecordLoadError) as exc:
        load_transactions(p)
    assert exc.value.index == 1
    assert "[1]" in str(exc.value)
    assert "amount" in str(exc.value)


def test_non_object_record_is_rejected(tmp_path):
    p = _write(tmp_path, "tx.json", ["nope"])
    with pytest.raises(RecordLoadError) as exc:
        load_transactions(p)
    assert exc.value.index == 0


def test_unreadable_files(tmp_path):
    with pytest.raises(RecordLoadError, match="file not found"):
        load_transactions(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")
    with pytest.raises(RecordLoadError, match="invalid JSON"):
        load_transactions(broken)

    scalar = _write(tmp_path, "scalar.json", {"unexpected": 1})
    with pytest.raises(RecordLoadError, match="expected a JSON array"):
        load_transactions(scalar)


def test_record_load_error_is_a_value_error():
    assert issubclass(RecordLoadError, ValueError)


def test_from_receipt_data():
    t = from_receipt_data(
        {
            "merchant": "  DMart   Avenue ",
            "date": "2024-05-10T18:22:00",
            "totalAmount": 1234.5,
            "currency": "inr",
            "category": "groceries",
            "subcategory": "Supermarket",
            "items": [{"name": "Rice", "price": 600, "quantity": 1}, "garbage", {"price": 3}],
            "tax": {"total": 12},
        },
        default_date=dt.date(2024, 1, 1),
        make_id=lambda: "r1",
    )
    assert t.id == "r1"
    assert t.merchant == "DMart Avenue"
    assert t.date == dt.date(2024, 5, 10)
    assert t.amount == Decimal("1234.5")
    assert t.currency == "INR"
    assert t.category is Category.GROCERIES
    assert [i.name for i in t.items] == ["Rice"]
    assert t.type is TransactionType.EXPENSE


def test_from_receipt_data_fills_missing_fields():
    t = from_receipt_data(
        {"merchant": "", "category": "Snacks & Things", "date": "yesterday"},
        default_date=dt.date(2024, 1, 1),
    )
    assert t.merchant == UNKNOWN_MERCHANT
    assert t.date == dt.date(2024, 1, 1)
    assert t.amount == Decimal("0")
    assert t.category is Category.OTHER
    assert t.currency is None


def test_from_statement_data():
    ids = iter(["s1", "s2"])
    txs = list(
        from_statement_data(
            {
                "transactions": [
                    {"merchant": "UPI/SWIGGY", "date": "2024-05-02", "amount": -320,
                     "type": "debit", "category": "Food & Dining"},
                    None,
                    {"merchant": "NEFT SALARY", "date": "2024-05-01", "amount": "90,000",
                     "type": "credit", "category": "Income"},
                ]
            },
            default_date=dt.date(2024, 5, 31),
            currency="INR",
            make_id=lambda: next(ids),
        )
    )
    assert [t.id for t in txs] == ["s1", "s2"]
    assert txs[0].amount == Decimal("320")
    assert txs[0].type is TransactionType.EXPENSE
    assert txs[1].amount == Decimal("90000")
    assert txs[1].type is TransactionType.INCOME
    assert all(t.currency == "INR" for t in txs)


def test_from_statement_data_without_lines():
    assert list(from_statement_data({}, default_date=dt.date(2024, 1, 1))) == []


def test_load_recurring_and_cravings(tmp_path):
    rec = _write(
        tmp_path,
        "recurring.json",
        {
            "recurring": [
                {"merchant": "Netflix", "amount": 649, "frequency": "monthly",
                 "startDate": "2024-01-05", "nextDueDate": "2024-06-05", "isActive": True}
            ]
        },
    )
    (r,) = load_recurring(rec)
    assert r.frequency is RecurringFrequency.MONTHLY
    assert r.next_due_date == dt.date(2024, 6, 5)

    cr = _write(
        tmp_path,
        "cravings.json",
        [{"platform": "Zomato", "totalAmount": 420, "outcome": "resisted",
          "cravedAt": "2024-05-10T23:15:00", "items": [{"name": "Fries", "price": 120}]}],
    )
    (c,) = load_cravings(cr)
    assert c.outcome is CravingOutcome.RESISTED
    assert c.items[0].name == "Fries"
