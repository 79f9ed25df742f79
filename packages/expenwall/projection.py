"""Transaction projector: raw transactions + merchant rules -> display records.

The projection is recomputed from scratch on every call. Nothing is cached
between calls, so a changed rule set or transaction list can never leave a
stale display value behind.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .logging_setup import get_logger
from .lookup_tables import get_merchant_emoji
from .models import MerchantRule, ProcessedTransaction, Transaction
from .rules import RuleMatchStrategy, match_rule

_logger = get_logger("expenwall.projection")


def project_transaction(
    tx: Transaction,
    rules: Iterable[MerchantRule],
    *,
    strategy: RuleMatchStrategy = RuleMatchStrategy.FIRST,
) -> ProcessedTransaction:
    """Apply the matching rule (if any) to ``tx`` and return its projection.

    Matched rule:
        merchant from ``renamed_to``; category, subcategory and emoji from the
        rule when it sets them, else from the transaction / merchant lookup.
    No rule:
        raw merchant and category, ``subcategory or ""``, and the stored
        ``merchant_emoji`` falling back to the merchant lookup.

    Never raises for a validated ``Transaction``.
    """

    rule = match_rule(tx.merchant, rules, strategy=strategy)
    if rule is not None:
        display = {
            "display_merchant": rule.renamed_to,
            "display_category": rule.forced_category or tx.category,
            "display_subcategory": rule.forced_subcategory or tx.subcategory or "",
            "display_emoji": rule.emoji or get_merchant_emoji(tx.merchant),
            "is_aliased": True,
        }
    else:
        display = {
            "display_merchant": tx.merchant,
            "display_category": tx.category,
            "display_subcategory": tx.subcategory or "",
            "display_emoji": tx.merchant_emoji or get_merchant_emoji(tx.merchant),
            "is_aliased": False,
        }
    # ``dict(tx)`` keeps nested models as instances (no re-serialization).
    return ProcessedTransaction.model_validate({**dict(tx), **display})


def project_transactions(
    transactions: Iterable[Transaction],
    rules: Iterable[MerchantRule],
    *,
    strategy: RuleMatchStrategy = RuleMatchStrategy.FIRST,
) -> list[ProcessedTransaction]:
    """Project every transaction against the full rule set, preserving order.

    ``O(len(transactions) * len(rules))``; sized for personal-finance volumes.
    """

    rule_list: Sequence[MerchantRule] = list(rules)
    out = [project_transaction(tx, rule_list, strategy=strategy) for tx in transactions]
    _logger.debug(
        "project_transactions:done num_transactions=%d num_rules=%d aliased=%d",
        len(out),
        len(rule_list),
        sum(1 for p in out if p.is_aliased),
    )
    return out


__all__ = ["project_transaction", "project_transactions"]
