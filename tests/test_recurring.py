import datetime as dt

import pytest

from expenwall.models import RecurringFrequency, RecurringTransaction
from expenwall.recurring import due_recurring, next_due_date


@pytest.mark.parametrize(
    ("frequency", "last", "expected"),
    [
        ("daily", dt.date(2024, 2, 28), dt.date(2024, 2, 29)),
        ("weekly", dt.date(2024, 12, 28), dt.date(2025, 1, 4)),
        ("monthly", dt.date(2024, 12, 15), dt.date(2025, 1, 15)),
        ("monthly", dt.date(2024, 1, 31), dt.date(2024, 2, 29)),
        ("monthly", dt.date(2023, 1, 31), dt.date(2023, 2, 28)),
        ("yearly", dt.date(2024, 2, 29), dt.date(2025, 2, 28)),
        (RecurringFrequency.YEARLY, dt.date(2024, 6, 1), dt.date(2025, 6, 1)),
    ],
)
def test_next_due_date(frequency, last, expected):
    assert next_due_date(frequency, last) == expected


def test_unknown_frequency_raises():
    with pytest.raises(ValueError):
        next_due_date("fortnightly", dt.date(2024, 1, 1))


def _template(merchant, next_due, **kw):
    return RecurringTransaction(
        merchant=merchant,
        amount=499,
        start_date=dt.date(2024, 1, 1),
        next_due_date=next_due,
        **kw,
    )


def test_due_recurring_filters_active_and_arrived():
    today = dt.date(2024, 5, 20)
    rent = _template("Rent", dt.date(2024, 5, 1))
    netflix = _template("Netflix", dt.date(2024, 5, 20))
    gym = _template("Gym", dt.date(2024, 5, 25))
    paused = _template("Spotify", dt.date(2024, 5, 1), is_active=False)
    ended = _template("Loan EMI", dt.date(2024, 5, 5), end_date=dt.date(2024, 4, 30))
    assert due_recurring([rent, netflix, gym, paused, ended], today=today) == [rent, netflix]
