"""Link each blank to the highlights around it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from clozemark.models.elements import ClozeElementType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from clozemark.models.elements import Blank, ClozeElement


def _highlight_ids(elements: Sequence[ClozeElement]) -> list[str]:
    return [e.id for e in elements if e.type is ClozeElementType.HIGHLIGHT]


def link_highlights(elements: Sequence[ClozeElement], blanks: Sequence[Blank]) -> None:
    """Attach surrounding highlight ids to every blank, in place.

    For a blank at position ``p`` in ``elements``, ``highlights_before`` gets the
    highlights in ``elements[:p]`` nearest first (reversed document order) and
    ``highlights_after`` gets those in ``elements[p + 1:]`` in document order.
    The same highlight may be linked from several blanks.

    Args:
        elements: All scanned elements in document order.
        blanks: The blanks to link. Each must appear in ``elements``.
    """
    positions = {id(element): i for i, element in enumerate(elements)}
    for blank in blanks:
        p = positions[id(blank)]
        before = _highlight_ids(elements[:p])
        before.reverse()
        blank.link_highlight_ids(before, _highlight_ids(elements[p + 1 :]))
