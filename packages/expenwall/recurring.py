"""Due-date arithmetic for recurring transaction templates."""

from __future__ import annotations

import calendar
import datetime as dt
from collections.abc import Iterable

from .models import RecurringFrequency, RecurringTransaction


def _add_months(d: dt.date, months: int) -> dt.date:
    # Clamp to the target month's last day (Jan 31 + 1 month -> Feb 28/29).
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def next_due_date(frequency: RecurringFrequency | str, last_date: dt.date) -> dt.date:
    """Return the occurrence after ``last_date`` for ``frequency``."""

    freq = RecurringFrequency(frequency)
    if freq is RecurringFrequency.DAILY:
        return last_date + dt.timedelta(days=1)
    if freq is RecurringFrequency.WEEKLY:
        return last_date + dt.timedelta(days=7)
    if freq is RecurringFrequency.MONTHLY:
        return _add_months(last_date, 1)
    return _add_months(last_date, 12)


def due_recurring(
    templates: Iterable[RecurringTransaction], *, today: dt.date
) -> list[RecurringTransaction]:
    """Active templates whose next due date has arrived and have not ended."""

    return [
        r
        for r in templates
        if r.is_active
        and r.next_due_date <= today
        and (r.end_date is None or r.next_due_date <= r.end_date)
    ]


__all__ = ["next_due_date", "due_recurring"]
