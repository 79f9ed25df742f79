"""Subcategory suggestions for free-text input (merchant names, notes)."""

from __future__ import annotations

from .lookup_tables import SUBCATEGORY_KEYWORDS
from .models import SubcategorySuggestion

MAX_SUGGESTIONS = 5

# Every keyword hit carries the same confidence; there is no scoring signal
# yet, so results are ordered by keyword declaration order.
KEYWORD_CONFIDENCE = 0.9


def suggest_subcategories(
    text: str | None, *, limit: int = MAX_SUGGESTIONS
) -> list[SubcategorySuggestion]:
    """Return up to ``limit`` subcategory suggestions for ``text``.

    A keyword entry is included when the keyword occurs in the lowercased,
    trimmed input or the input occurs in the keyword (so partially typed
    words like ``"elec"`` still hit ``"electricity"``). Blank input yields
    no suggestions.
    """

    clean = (text or "").lower().strip()
    if not clean or limit <= 0:
        return []

    out: list[SubcategorySuggestion] = []
    for keyword, mapping in SUBCATEGORY_KEYWORDS.items():
        if keyword in clean or clean in keyword:
            out.append(
                SubcategorySuggestion(
                    subcategory=mapping.subcategory,
                    category=mapping.category,
                    emoji=mapping.emoji,
                    confidence=KEYWORD_CONFIDENCE,
                )
            )
    # Stable: equal confidences keep declaration order.
    out.sort(key=lambda s: s.confidence, reverse=True)
    return out[:limit]


__all__ = ["MAX_SUGGESTIONS", "KEYWORD_CONFIDENCE", "suggest_subcategories"]
