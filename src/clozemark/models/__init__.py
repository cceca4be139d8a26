"""Element models for cloze exercises."""

from clozemark.models.elements import (
    Blank,
    ClozeElement,
    ClozeElementType,
    Highlight,
    IncorrectAnswer,
    MediaElement,
    MediaType,
)

__all__ = [
    "Blank",
    "ClozeElement",
    "ClozeElementType",
    "Highlight",
    "IncorrectAnswer",
    "MediaElement",
    "MediaType",
]
