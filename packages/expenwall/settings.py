"""Explicit runtime configuration.

Settings are read from the environment once (by the CLI, after loading a local
``.env``) and then passed into core functions as plain arguments. Core modules
never consult ambient state themselves.

Environment variables
---------------------
``EXPENWALL_CURRENCY``
    ISO code used to select transactions for dashboards (default ``INR``).
``EXPENWALL_RULE_MATCH``
    ``first`` (default) or ``longest``; see :class:`~expenwall.rules.RuleMatchStrategy`.
``EXPENWALL_TOP_N``
    Size of top-N rankings (default 10).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .logging_setup import get_logger
from .rules import RuleMatchStrategy

DEFAULT_CURRENCY = "INR"
DEFAULT_TOP_N = 10

# Display symbols for the currencies the app offers; unknown codes render as-is.
CURRENCY_SYMBOLS: Mapping[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "AED": "dh",
}

_logger = get_logger("expenwall.settings")


@dataclass(frozen=True, slots=True)
class Settings:
    currency: str = DEFAULT_CURRENCY
    rule_match: RuleMatchStrategy = RuleMatchStrategy.FIRST
    top_n: int = DEFAULT_TOP_N

    @property
    def currency_symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency, self.currency)


def _env_currency(env: Mapping[str, str]) -> str:
    raw = (env.get("EXPENWALL_CURRENCY") or "").strip().upper()
    return raw or DEFAULT_CURRENCY


def _env_rule_match(env: Mapping[str, str]) -> RuleMatchStrategy:
    raw = (env.get("EXPENWALL_RULE_MATCH") or "").strip().lower()
    if not raw:
        return RuleMatchStrategy.FIRST
    try:
        return RuleMatchStrategy(raw)
    except ValueError:
        raise ValueError(
            f"Unsupported EXPENWALL_RULE_MATCH: {raw!r}. "
            f"Allowed: {sorted(s.value for s in RuleMatchStrategy)}"
        ) from None


def _env_top_n(env: Mapping[str, str]) -> int:
    raw = (env.get("EXPENWALL_TOP_N") or "").strip()
    if not raw:
        return DEFAULT_TOP_N
    try:
        n = int(raw)
    except ValueError:
        raise ValueError(f"EXPENWALL_TOP_N must be an integer, got {raw!r}") from None
    if n <= 0:
        raise ValueError("EXPENWALL_TOP_N must be a positive integer")
    return n


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``env`` (defaults to ``os.environ``).

    Invalid values raise ``ValueError`` naming the offending variable.
    """

    source = os.environ if env is None else env
    settings = Settings(
        currency=_env_currency(source),
        rule_match=_env_rule_match(source),
        top_n=_env_top_n(source),
    )
    _logger.debug(
        "load_settings:resolved currency=%s rule_match=%s top_n=%d",
        settings.currency,
        settings.rule_match.value,
        settings.top_n,
    )
    return settings


__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_TOP_N",
    "CURRENCY_SYMBOLS",
    "Settings",
    "load_settings",
]
