"""Merchant rule matching and rule authoring.

A rule applies to a transaction when its ``original_name`` and the raw
``merchant`` contain one another, compared case-insensitively. Containment is
literal (no tokenization, no fuzzy scoring), so one merchant can satisfy
several rules at once; :class:`RuleMatchStrategy` decides which one wins.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from .models import Category, MerchantRule, Transaction


class RuleMatchStrategy(StrEnum):
    """Tie-break between several matching rules.

    ``FIRST``
        First matching rule in iteration order (the order the sync layer
        delivered the rules in).
    ``LONGEST``
        Matching rule with the longest ``original_name``; ties keep the
        earliest rule.
    """

    FIRST = "first"
    LONGEST = "longest"


def rule_matches(merchant: str, rule: MerchantRule) -> bool:
    """Return ``True`` when ``merchant`` and ``rule.original_name`` overlap.

    Plain containment: an empty merchant is contained in every pattern and so
    matches any rule.
    """

    m = merchant.lower()
    pattern = rule.original_name.lower()
    return pattern in m or m in pattern


def match_rule(
    merchant: str,
    rules: Iterable[MerchantRule],
    *,
    strategy: RuleMatchStrategy = RuleMatchStrategy.FIRST,
) -> MerchantRule | None:
    """Find the rule that applies to ``merchant``, or ``None``.

    Pure function of its inputs; ``rules`` is consumed once.
    """

    if strategy is RuleMatchStrategy.FIRST:
        for rule in rules:
            if rule_matches(merchant, rule):
                return rule
        return None

    best: MerchantRule | None = None
    for rule in rules:
        if not rule_matches(merchant, rule):
            continue
        # Strict ">" keeps the earliest rule among equal lengths.
        if best is None or len(rule.original_name) > len(best.original_name):
            best = rule
    return best


def build_rule_from_edit(
    tx: Transaction,
    renamed_to: str,
    *,
    forced_category: Category | str | None = None,
    forced_subcategory: str | None = None,
    emoji: str | None = None,
) -> MerchantRule | None:
    """Create a rule from a user renaming ``tx``'s merchant.

    Returns ``None`` when there is nothing to alias: the new name is blank or
    identical to the raw merchant. The raw merchant becomes the rule pattern so
    future transactions from the same source pick up the rename.
    """

    new_name = renamed_to.strip()
    if not new_name or new_name == tx.merchant or not tx.merchant.strip():
        return None
    return MerchantRule(
        original_name=tx.merchant,
        renamed_to=new_name,
        forced_category=forced_category,
        forced_subcategory=forced_subcategory,
        emoji=emoji,
    )


__all__ = [
    "RuleMatchStrategy",
    "rule_matches",
    "match_rule",
    "build_rule_from_edit",
]
