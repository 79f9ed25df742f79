"""Adapters for AI-extracted receipt and bank-statement payloads.

The extraction service returns loosely-typed JSON: categories are free text,
fields may be missing or blank, amounts may be signed. These adapters map those
payloads onto :class:`~expenwall.models.Transaction` records.

Mapping rules (receipt):
- ``merchant``: trimmed; blank or missing becomes ``"Unknown Merchant"``
- ``date``: ISO date; missing or unparseable falls back to ``default_date``
- ``amount``: ``totalAmount`` (absolute value); missing becomes ``0``
- ``currency``: upper-cased when present
- ``category``: coerced onto the closed set (unknown labels become ``Other``)
- ``items``: carried over; malformed line items are dropped

Statement lines follow the same rules, read ``amount`` instead of
``totalAmount`` and resolve ``type`` with debit/credit aliases.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Iterator, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from ..logging_setup import get_logger
from ..models import Transaction, TransactionItem, coerce_category, coerce_transaction_type

UNKNOWN_MERCHANT = "Unknown Merchant"

_logger = get_logger("expenwall.ingest.extracted")


def _new_id() -> str:
    return uuid4().hex


def _clean_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = " ".join(value.split())
    return cleaned or None


def _parse_date(value: Any, default: dt.date) -> dt.date:
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            # Extraction sometimes returns a full timestamp; keep the date part.
            return dt.date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    return default


def _parse_amount(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        return abs(Decimal(str(value).replace(",", "").strip()))
    except InvalidOperation:
        return Decimal("0")


def _parse_items(raw: Any) -> tuple[TransactionItem, ...]:
    if not isinstance(raw, list):
        return ()
    items: list[TransactionItem] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        try:
            items.append(TransactionItem.model_validate(entry))
        except ValidationError:
            _logger.debug("parse_items:skip name=%r", entry.get("name"))
    return tuple(items)


def from_receipt_data(
    payload: Mapping[str, Any],
    *,
    default_date: dt.date,
    make_id: Callable[[], str] = _new_id,
) -> Transaction:
    """Build an expense :class:`Transaction` from a receipt extraction payload."""

    currency = _clean_text(payload.get("currency"))
    return Transaction(
        id=make_id(),
        merchant=_clean_text(payload.get("merchant")) or UNKNOWN_MERCHANT,
        amount=_parse_amount(payload.get("totalAmount")),
        category=coerce_category(payload.get("category")),
        subcategory=_clean_text(payload.get("subcategory")),
        date=_parse_date(payload.get("date"), default_date),
        items=_parse_items(payload.get("items")),
        currency=currency.upper() if currency else None,
    )


def from_statement_data(
    payload: Mapping[str, Any],
    *,
    default_date: dt.date,
    currency: str | None = None,
    make_id: Callable[[], str] = _new_id,
) -> Iterator[Transaction]:
    """Yield one :class:`Transaction` per extracted statement line, in order.

    Lines that are not JSON objects are skipped.
    """

    lines = payload.get("transactions")
    if not isinstance(lines, list):
        return
    count = 0
    for line in lines:
        if not isinstance(line, Mapping):
            continue
        count += 1
        yield Transaction(
            id=make_id(),
            merchant=_clean_text(line.get("merchant")) or UNKNOWN_MERCHANT,
            amount=_parse_amount(line.get("amount")),
            category=coerce_category(line.get("category")),
            subcategory=_clean_text(line.get("subcategory")),
            type=coerce_transaction_type(line.get("type")),
            date=_parse_date(line.get("date"), default_date),
            currency=currency,
        )
    _logger.debug("from_statement_data:done lines=%d", count)


__all__ = ["UNKNOWN_MERCHANT", "from_receipt_data", "from_statement_data"]
