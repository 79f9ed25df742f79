"""Load JSON arrays of persisted records from disk.

Files hold either a bare JSON array or an object wrapping the array under the
collection name (``{"transactions": [...]}``), which is how the sync layer
exports them. Every element is validated on its own so that a failure can be
reported with its position.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from os import PathLike
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..logging_setup import get_logger
from ..models import Budget, Craving, MerchantRule, RecurringTransaction, Transaction

M = TypeVar("M", bound=BaseModel)

_logger = get_logger("expenwall.ingest.records")


class RecordLoadError(ValueError):
    """A records file could not be read or one of its records is invalid.

    ``index`` is the zero-based position of the offending record, or ``None``
    when the file as a whole is unusable.
    """

    def __init__(self, path: str, message: str, *, index: int | None = None) -> None:
        self.path = path
        self.index = index
        where = path if index is None else f"{path}[{index}]"
        super().__init__(f"{where}: {message}")


def _read_array(path: Path, key: str) -> Sequence[Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise RecordLoadError(str(path), "file not found") from None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordLoadError(str(path), f"invalid JSON: {e}") from e
    if isinstance(data, dict) and key in data:
        data = data[key]
    if not isinstance(data, list):
        raise RecordLoadError(str(path), f"expected a JSON array of {key}")
    return data


def _load(path: str | PathLike[str], key: str, model: type[M]) -> list[M]:
    p = Path(path)
    raw = _read_array(p, key)
    out: list[M] = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise RecordLoadError(str(p), "record must be a JSON object", index=idx)
        try:
            out.append(model.model_validate(item))
        except ValidationError as e:
            # Keep the first problem only; the full report is on __cause__.
            first = e.errors()[0]
            loc = ".".join(str(part) for part in first["loc"]) or "<record>"
            raise RecordLoadError(str(p), f"{loc}: {first['msg']}", index=idx) from e
    _logger.info("load_%s:done path=%s count=%d", key, p, len(out))
    return out


def load_transactions(path: str | PathLike[str]) -> list[Transaction]:
    return _load(path, "transactions", Transaction)


def load_rules(path: str | PathLike[str]) -> list[MerchantRule]:
    """Rules come back in file order, which is the order rule matching honours."""

    return _load(path, "rules", MerchantRule)


def load_budgets(path: str | PathLike[str]) -> list[Budget]:
    return _load(path, "budgets", Budget)


def load_recurring(path: str | PathLike[str]) -> list[RecurringTransaction]:
    return _load(path, "recurring", RecurringTransaction)


def load_cravings(path: str | PathLike[str]) -> list[Craving]:
    return _load(path, "cravings", Craving)


__all__ = [
    "RecordLoadError",
    "load_transactions",
    "load_rules",
    "load_budgets",
    "load_recurring",
    "load_cravings",
]
