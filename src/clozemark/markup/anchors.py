"""Read generated anchors back out of scanned cloze HTML.

The rendering layer mounts widgets by anchor id; these helpers give it (and the
tests) the ids in document order without re-implementing the scanner.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from selectolax.lexbor import LexborHTMLParser

from clozemark.markup.marker_constants import DEFAULT_ANCHOR_TAG, DEFAULT_ID_PREFIX

if TYPE_CHECKING:
    from selectolax.lexbor import LexborNode


def _generated_id_pattern(id_prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(id_prefix)}_(?:highlight|blank)_\d+$")


def _is_empty(node: LexborNode) -> bool:
    return node.child is None


def anchor_ids(
    html: str,
    *,
    tag: str = DEFAULT_ANCHOR_TAG,
    id_prefix: str = DEFAULT_ID_PREFIX,
) -> list[str]:
    """Return generated anchor ids in document order.

    Only empty ``tag`` elements whose id looks like ``<prefix>_highlight_N`` or
    ``<prefix>_blank_N`` count; author markup using the same tag is ignored.
    """
    if not html:
        return []

    pattern = _generated_id_pattern(id_prefix)
    tree = LexborHTMLParser(html)
    ids: list[str] = []
    for node in tree.css(tag):
        node_id = node.attributes.get("id")
        if node_id and pattern.match(node_id) and _is_empty(node):
            ids.append(node_id)
    return ids


def count_placeholders(
    html: str,
    *,
    tag: str = DEFAULT_ANCHOR_TAG,
    id_prefix: str = DEFAULT_ID_PREFIX,
) -> int:
    """Count generated anchors, including bare placeholders for unlinked blanks.

    Bare placeholders are empty ``tag`` elements without any attributes. Author
    markup of that exact shape is indistinguishable and is counted too.
    """
    if not html:
        return 0

    pattern = _generated_id_pattern(id_prefix)
    tree = LexborHTMLParser(html)
    count = 0
    for node in tree.css(tag):
        if not _is_empty(node):
            continue
        attributes = node.attributes
        node_id = attributes.get("id")
        if not attributes or (node_id and pattern.match(node_id)):
            count += 1
    return count


def element_id_from_anchor(
    anchor_id: str, *, id_prefix: str = DEFAULT_ID_PREFIX
) -> str:
    """Strip the anchor prefix: ``container_blank_0`` -> ``blank_0``."""
    return anchor_id.removeprefix(f"{id_prefix}_")
