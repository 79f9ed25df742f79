"""Logging for the ``expenwall`` package and its console script.

Library modules call ``get_logger("expenwall.<module>")`` and never attach
handlers; until something configures output, the ``expenwall`` logger carries
a ``NullHandler`` so embedding applications see nothing.

The CLI configures output once per process. The level comes, in order of
precedence, from the ``--verbose``/``--quiet`` flags, then from
``EXPENWALL_LOG_LEVEL``, then defaults to WARNING: command results go to
stdout, so stderr stays quiet unless asked for.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from typing import IO

_PKG_LOGGER_NAME = "expenwall"
_LEVEL_ENV_VAR = "EXPENWALL_LOG_LEVEL"
_DEFAULT_FMT = "%(levelname)s %(name)s: %(message)s"
_CONFIGURED = False

# Repeated -v steps down from the default.
_VERBOSITY_LEVELS: Mapping[int, int] = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def level_from_flags(verbose: int = 0, quiet: bool = False) -> int | None:
    """Map CLI flags to a level; ``None`` when neither flag was given."""

    if quiet:
        return logging.ERROR
    if verbose <= 0:
        return None
    return _VERBOSITY_LEVELS.get(verbose, logging.DEBUG)


def _resolve_level(level: int | str | None, env: Mapping[str, str]) -> int:
    if level is None:
        level = env.get(_LEVEL_ENV_VAR) or logging.WARNING
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelNamesMapping().get(name)
    if resolved is None:
        raise ValueError(f"Unsupported {_LEVEL_ENV_VAR}: {level!r}")
    return resolved


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    """Attach one ``StreamHandler`` to the ``expenwall`` logger.

    Parameters
    ----------
    level:
        ``int`` or level name. ``None`` defers to ``EXPENWALL_LOG_LEVEL`` in
        ``env`` (``os.environ`` by default), else WARNING. An unknown level
        name raises ``ValueError``.
    fmt:
        Record format; defaults to ``"LEVEL logger: message"``.
    stream:
        Destination, ``sys.stderr`` at call time when omitted.

    Later calls in the same process are no-ops.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = _resolve_level(level, os.environ if env is None else env)
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.handlers[:] = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FMT))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["level_from_flags", "configure_logging", "get_logger"]
