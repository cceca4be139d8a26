"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from clozemark.models import Blank


@pytest.fixture
def make_templates():
    """Factory for answer templates: make_templates("a", "b/c") -> [Blank, Blank]."""

    def _make(*answers: str) -> list[Blank]:
        return [Blank.from_author_text(a) for a in answers]

    return _make
