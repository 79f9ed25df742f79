"""Pytest configuration for test isolation.

Settings are read from ``EXPENWALL_*`` environment variables, and the CLI also
loads a ``.env`` from the working directory. A developer's shell or a stray
``.env`` in the repo would otherwise leak into assertions about defaults.

The autouse fixture below clears those variables and runs every test from its
own temporary directory. ``load_dotenv`` writes straight into ``os.environ``,
so anything it set is removed again on teardown.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

_PREFIX = "EXPENWALL_"


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in list(os.environ):
        if key.startswith(_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    yield
    for key in [k for k in os.environ if k.startswith(_PREFIX)]:
        del os.environ[key]
