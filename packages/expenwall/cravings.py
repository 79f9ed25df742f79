"""Craving statistics: money saved by resisting impulse buys, and what tempts most."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from .aggregation import tally_items
from .models import Craving, CravingOutcome, CravingStats


def craving_stats(cravings: Iterable[Craving], *, top_n: int | None = None) -> CravingStats:
    """Aggregate outcomes and rank craved items by how often they appear.

    ``resistance_rate`` is the rounded percentage of resisted cravings over all
    logged cravings (pending ones included), or 0 when none are logged.
    """

    items = list(cravings)
    saved = sum(
        (c.total_amount for c in items if c.outcome is CravingOutcome.RESISTED), Decimal("0")
    )
    wasted = sum(
        (c.total_amount for c in items if c.outcome is CravingOutcome.GAVE_IN), Decimal("0")
    )
    resisted = sum(1 for c in items if c.outcome is CravingOutcome.RESISTED)
    gave_in = sum(1 for c in items if c.outcome is CravingOutcome.GAVE_IN)
    rate = 0
    if items:
        # Halves round up (2.5% -> 3%), unlike round().
        rate = int((Decimal(resisted * 100) / len(items)).quantize(Decimal("1"), ROUND_HALF_UP))

    return CravingStats(
        total_saved=saved,
        total_wasted=wasted,
        resistance_rate=rate,
        total_cravings=len(items),
        resisted_count=resisted,
        gave_in_count=gave_in,
        most_craved_items=tuple(tally_items((i for c in items for i in c.items), top_n)),
    )


__all__ = ["craving_stats"]
