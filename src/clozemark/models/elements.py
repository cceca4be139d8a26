"""Element types produced by scanning cloze markup.

Highlights and blanks share a ``ClozeElement`` base and are told apart by their
``type`` discriminator. These are plain dataclasses for in-memory use; the
rendering layer consumes them by matching element ids against anchor ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar


class ClozeElementType(StrEnum):
    """Discriminator for the element kinds found in cloze markup."""

    HIGHLIGHT = "highlight"
    BLANK = "blank"


class MediaType(StrEnum):
    """Kinds of media an author can attach to an exercise."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class ClozeElement:
    """Base for elements discovered in cloze markup.

    Subclasses set ``type`` at class level and provide an ``id`` that is unique
    within one Cloze. Not instantiated directly.
    """

    type: ClassVar[ClozeElementType]
    id: str


@dataclass(frozen=True)
class Highlight(ClozeElement):
    """An author-marked span of text (``!!text!!`` in the markup).

    Attributes:
        text: Content captured between the delimiter pairs.
        id: ``highlight_<n>``, zero-based in document order.
    """

    type: ClassVar[ClozeElementType] = ClozeElementType.HIGHLIGHT

    text: str
    id: str


@dataclass(frozen=True)
class IncorrectAnswer:
    """An anticipated wrong answer with the feedback shown for it."""

    text: str
    feedback: str = ""


@dataclass
class Blank(ClozeElement):
    """A fill-in-the-gap slot.

    Author templates only carry the answer specification. ``create_cloze``
    clones a template per blank marker and fills in the runtime fields.

    Attributes:
        correct_answers: Accepted alternatives; any one of them is correct.
        hint: Optional hint text.
        incorrect_answers: Anticipated wrong answers with feedback.
        case_sensitive: Whether the grader should compare case-sensitively.
        id: ``blank_<n>``, zero-based in document order. Empty on templates.
        is_correct: Set by the grader. None until graded.
        entered_text: The learner's current input, set by the UI layer.
        highlights_before: Ids of preceding highlights, nearest first.
        highlights_after: Ids of following highlights, nearest first.
    """

    type: ClassVar[ClozeElementType] = ClozeElementType.BLANK

    correct_answers: list[str] = field(default_factory=list)
    hint: str = ""
    incorrect_answers: list[IncorrectAnswer] = field(default_factory=list)
    case_sensitive: bool = False
    id: str = ""
    is_correct: bool | None = None
    entered_text: str = ""
    highlights_before: list[str] = field(default_factory=list)
    highlights_after: list[str] = field(default_factory=list)

    @classmethod
    def from_author_text(
        cls, text: str, *, hint: str = "", case_sensitive: bool = False
    ) -> Blank:
        """Build a template from slash-separated alternatives, e.g. ``"Paris/paris"``.

        Whitespace around each alternative is stripped and empty alternatives
        are dropped.
        """
        answers = [part.strip() for part in text.split("/")]
        return cls(
            correct_answers=[a for a in answers if a],
            hint=hint,
            case_sensitive=case_sensitive,
        )

    def clone(self) -> Blank:
        """Return a fresh copy of the answer specification.

        The copy has no id, no highlight links and no grading state, and shares
        no mutable lists with the template.
        """
        return Blank(
            correct_answers=list(self.correct_answers),
            hint=self.hint,
            incorrect_answers=list(self.incorrect_answers),
            case_sensitive=self.case_sensitive,
        )

    def link_highlight_ids(self, before: list[str], after: list[str]) -> None:
        """Store the ids of the highlights around this blank."""
        self.highlights_before = list(before)
        self.highlights_after = list(after)


@dataclass(frozen=True)
class MediaElement:
    """Media attached to the exercise. Passed through to the renderer untouched."""

    media_type: MediaType
    source: str
    alt: str = ""
