"""Cloze markup processing: normalise, scan and link markers."""

from clozemark.markup.anchors import (
    anchor_ids,
    count_placeholders,
    element_id_from_anchor,
)
from clozemark.markup.linker import link_highlights
from clozemark.markup.normaliser import normalize_blank_markers
from clozemark.markup.scanner import (
    AnchorFormat,
    ScanResult,
    ScanState,
    convert_markup_to_anchors,
)

__all__ = [
    "AnchorFormat",
    "ScanResult",
    "ScanState",
    "anchor_ids",
    "convert_markup_to_anchors",
    "count_placeholders",
    "element_id_from_anchor",
    "link_highlights",
    "normalize_blank_markers",
]
