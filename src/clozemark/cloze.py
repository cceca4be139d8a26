"""The Cloze aggregate: anchored HTML plus its blanks and highlights.

Build one with ``create_cloze`` (or ``Cloze.create_cloze``). Construction runs
normalise -> scan -> link in one pass; afterwards only a blank's grading state
(``is_correct``, ``entered_text``) changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from clozemark.config import ClozeConfig
from clozemark.markup.linker import link_highlights
from clozemark.markup.normaliser import normalize_blank_markers
from clozemark.markup.scanner import AnchorFormat, convert_markup_to_anchors

if TYPE_CHECKING:
    from collections.abc import Sequence

    from clozemark.models.elements import (
        Blank,
        ClozeElement,
        Highlight,
        MediaElement,
    )

logger = logging.getLogger(__name__)


@dataclass
class Cloze:
    """A processed cloze exercise.

    Attributes:
        html: Author HTML with every marker replaced by an anchor.
        blanks: Blanks in document order.
        highlights: Highlights in document order.
        elements: Highlights and blanks interleaved in document order.
        media: Author media, passed through for the renderer.
        unlinked_blank_markers: Blank markers that had no answer template and
            became bare placeholders.
    """

    html: str
    blanks: list[Blank] = field(default_factory=list)
    highlights: list[Highlight] = field(default_factory=list)
    elements: list[ClozeElement] = field(default_factory=list, repr=False)
    media: tuple[MediaElement, ...] = ()
    unlinked_blank_markers: int = 0

    @classmethod
    def create_cloze(
        cls,
        html: str,
        blanks: Sequence[Blank],
        media: Sequence[MediaElement],
        *,
        config: ClozeConfig | None = None,
    ) -> Cloze:
        """Build a Cloze from author HTML and answer templates.

        Never raises for string input. Extra blank markers become bare
        placeholders; extra templates are ignored. ``blanks`` is not mutated.

        Args:
            html: Author HTML with ``___`` blanks and ``!!text!!`` highlights.
            blanks: Answer templates in author order.
            media: Author media elements (passthrough).
            config: Scanning options. Defaults to ``ClozeConfig()``; environment
                settings are applied by callers, not read here.

        Returns:
            The constructed Cloze.
        """
        config = config or ClozeConfig()

        normalised = normalize_blank_markers(html)
        result = convert_markup_to_anchors(
            normalised,
            blanks,
            max_highlight_length=config.max_highlight_length,
            anchors=AnchorFormat(tag=config.anchor_tag, id_prefix=config.id_prefix),
        )
        link_highlights(result.elements, result.blanks)

        if result.unlinked_blank_markers and config.warn_on_unlinked_blanks:
            logger.warning(
                "Cloze has %d blank marker(s) without an answer; "
                "rendered as empty placeholders",
                result.unlinked_blank_markers,
            )
        if result.unused_templates:
            logger.debug(
                "Ignoring %d answer template(s) with no blank marker",
                result.unused_templates,
            )

        return cls(
            html=result.html,
            blanks=result.blanks,
            highlights=result.highlights,
            elements=result.elements,
            media=tuple(media),
            unlinked_blank_markers=result.unlinked_blank_markers,
        )

    def check_completeness(self) -> bool:
        """True if every blank is graded correct (vacuously true with no blanks)."""
        return all(blank.is_correct is True for blank in self.blanks)

    def get_highlight(self, highlight_id: str) -> Highlight | None:
        """Look up a highlight by id."""
        for highlight in self.highlights:
            if highlight.id == highlight_id:
                return highlight
        return None

    def get_blank(self, blank_id: str) -> Blank | None:
        """Look up a blank by id."""
        for blank in self.blanks:
            if blank.id == blank_id:
                return blank
        return None

    def _resolve(self, highlight_ids: list[str]) -> list[Highlight]:
        by_id = {h.id: h for h in self.highlights}
        return [by_id[hid] for hid in highlight_ids if hid in by_id]

    def highlights_before(self, blank: Blank) -> list[Highlight]:
        """Highlights preceding ``blank``, nearest first."""
        return self._resolve(blank.highlights_before)

    def highlights_after(self, blank: Blank) -> list[Highlight]:
        """Highlights following ``blank``, nearest first."""
        return self._resolve(blank.highlights_after)


def create_cloze(
    html: str,
    blanks: Sequence[Blank],
    media: Sequence[MediaElement] = (),
    *,
    config: ClozeConfig | None = None,
) -> Cloze:
    """Module-level shortcut for ``Cloze.create_cloze``."""
    return Cloze.create_cloze(html, blanks, media, config=config)
