"""Interleaved scanner for highlight and blank markers.

Walks normalised cloze HTML and replaces each marker with an empty anchor
element in document order, collecting the elements it finds:

- ``!!text!!`` becomes ``<span id='container_highlight_N'></span>``
- ``___`` becomes ``<span id='container_blank_N'></span>``, or a bare
  ``<span></span>`` once the author's answer templates have run out

Scan state is an immutable ``ScanState`` folded through ``_step`` until
neither marker kind is left.
"""

# Pattern: Functional Core

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from clozemark.markup.marker_constants import (
    BLANK_ID_TEMPLATE,
    BLANK_MARKER,
    DEFAULT_ANCHOR_TAG,
    DEFAULT_ID_PREFIX,
    DEFAULT_MAX_HIGHLIGHT_LENGTH,
    HIGHLIGHT_ID_TEMPLATE,
    highlight_pattern,
)
from clozemark.models.elements import Blank, ClozeElement, Highlight

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnchorFormat:
    """How anchors are written into the output HTML."""

    tag: str = DEFAULT_ANCHOR_TAG
    id_prefix: str = DEFAULT_ID_PREFIX

    def anchor(self, element_id: str | None = None) -> str:
        """Empty anchor element, with ``<prefix>_<element_id>`` as its id if given."""
        if element_id is None:
            return f"<{self.tag}></{self.tag}>"
        return f"<{self.tag} id='{self.id_prefix}_{element_id}'></{self.tag}>"


@dataclass(frozen=True)
class ScanState:
    """Accumulator threaded through the scan.

    Attributes:
        html: The HTML with all markers consumed so far replaced by anchors.
        elements: Highlights and blanks in document order.
        highlights: Highlights only, in document order.
        blanks: Blanks only, in document order. Its length is the blank counter.
        unlinked_blank_markers: Blank markers consumed without a template.
    """

    html: str
    elements: tuple[ClozeElement, ...] = ()
    highlights: tuple[Highlight, ...] = ()
    blanks: tuple[Blank, ...] = ()
    unlinked_blank_markers: int = 0


@dataclass(frozen=True)
class ScanResult:
    """Output of ``convert_markup_to_anchors``."""

    html: str
    elements: list[ClozeElement]
    highlights: list[Highlight]
    blanks: list[Blank]
    unlinked_blank_markers: int
    unused_templates: int


def _consume_highlight(
    state: ScanState, match: re.Match[str], anchors: AnchorFormat
) -> ScanState:
    highlight = Highlight(
        text=match.group(1),
        id=HIGHLIGHT_ID_TEMPLATE.format(len(state.highlights)),
    )
    html = (
        state.html[: match.start()]
        + anchors.anchor(highlight.id)
        + state.html[match.end() :]
    )
    return replace(
        state,
        html=html,
        elements=(*state.elements, highlight),
        highlights=(*state.highlights, highlight),
    )


def _consume_blank(
    state: ScanState,
    index: int,
    templates: Sequence[Blank],
    anchors: AnchorFormat,
) -> ScanState:
    before = state.html[:index]
    after = state.html[index + len(BLANK_MARKER) :]

    blank_counter = len(state.blanks)
    if blank_counter >= len(templates):
        # More markers than answers: keep a placeholder, create no element
        return replace(
            state,
            html=before + anchors.anchor() + after,
            unlinked_blank_markers=state.unlinked_blank_markers + 1,
        )

    blank = templates[blank_counter].clone()
    blank.id = BLANK_ID_TEMPLATE.format(blank_counter)
    return replace(
        state,
        html=before + anchors.anchor(blank.id) + after,
        elements=(*state.elements, blank),
        blanks=(*state.blanks, blank),
    )


def _step(
    state: ScanState,
    templates: Sequence[Blank],
    pattern: re.Pattern[str],
    anchors: AnchorFormat,
) -> ScanState | None:
    """Consume the earliest marker in ``state.html``, or return None if none remain.

    Both marker positions are read from the same string in the same step. The
    lower offset wins; a missing marker of one kind never blocks the other.
    """
    match = pattern.search(state.html)
    blank_index = state.html.find(BLANK_MARKER)

    if match is None and blank_index < 0:
        return None
    if match is not None and (blank_index < 0 or match.start() < blank_index):
        return _consume_highlight(state, match, anchors)
    return _consume_blank(state, blank_index, templates, anchors)


def convert_markup_to_anchors(
    html: str,
    blanks: Sequence[Blank],
    *,
    max_highlight_length: int = DEFAULT_MAX_HIGHLIGHT_LENGTH,
    anchors: AnchorFormat | None = None,
) -> ScanResult:
    """Replace highlight and blank markers with anchors in document order.

    Args:
        html: Normalised HTML (see ``normalize_blank_markers``).
        blanks: Author answer templates, in author order. Never mutated; each
            marker gets a clone of the next unused template.
        max_highlight_length: Longest highlight content that still matches.
            Longer or unclosed ``!!`` spans are left verbatim.
        anchors: Anchor tag and id prefix. Defaults to
            ``<span id='container_...'>``.

    Returns:
        ScanResult with the anchored HTML, the elements in document order,
        and counts of unlinked markers and unused templates.
    """
    anchors = anchors or AnchorFormat()
    pattern = highlight_pattern(max_highlight_length)

    state = ScanState(html=html)
    while (next_state := _step(state, blanks, pattern, anchors)) is not None:
        state = next_state

    unused_templates = max(len(blanks) - len(state.blanks), 0)
    logger.debug(
        "Scanned cloze markup: %d highlights, %d blanks, "
        "%d unlinked markers, %d unused templates",
        len(state.highlights),
        len(state.blanks),
        state.unlinked_blank_markers,
        unused_templates,
    )
    return ScanResult(
        html=state.html,
        elements=list(state.elements),
        highlights=list(state.highlights),
        blanks=list(state.blanks),
        unlinked_blank_markers=state.unlinked_blank_markers,
        unused_templates=unused_templates,
    )
