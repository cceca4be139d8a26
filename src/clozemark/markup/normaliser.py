"""Blank marker normalisation.

Authors mark blanks with underscore runs of any length >= 3. The scanner only
looks for the canonical ``BLANK_MARKER`` token, so every run is collapsed first.
"""

# Pattern: Functional Core

from __future__ import annotations

from clozemark.markup.marker_constants import BLANK_MARKER, BLANK_RUN_PATTERN


def normalize_blank_markers(html: str) -> str:
    """Replace every maximal run of 3+ underscores with ``BLANK_MARKER``.

    Idempotent: the canonical token is itself a run of exactly three
    underscores, so re-normalising leaves the text unchanged.

    Args:
        html: Author HTML, possibly empty.

    Returns:
        HTML where each underscore run is exactly one blank marker.
    """
    if not html:
        return html
    return BLANK_RUN_PATTERN.sub(BLANK_MARKER, html)
