"""Shared pytest fixtures for clozemark tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from clozemark.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate every test from cached settings and stray CLOZE__/APP__ env vars."""
    for key in list(os.environ):
        if key.startswith(("CLOZE__", "APP__")):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
