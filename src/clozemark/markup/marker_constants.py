"""Marker format constants for cloze markup.

Authors write blanks as underscore runs and highlights as ``!!text!!``.
After normalisation every blank is the canonical ``BLANK_MARKER`` token.

Used by markup/normaliser.py and markup/scanner.py.
"""

from __future__ import annotations

import re
from functools import lru_cache

# Any run of 3+ underscores is one blank; normalisation collapses it to exactly 3
BLANK_MARKER = "___"
BLANK_RUN_PATTERN = re.compile(r"_{3,}")

HIGHLIGHT_DELIMITER = "!!"
DEFAULT_MAX_HIGHLIGHT_LENGTH = 40
_SAME_LINE_CHAR = r"[^\n\r\u2028\u2029]"

# Element ids: highlight_<n> and blank_<n>, zero-based per kind
HIGHLIGHT_ID_TEMPLATE = "highlight_{}"
BLANK_ID_TEMPLATE = "blank_{}"

# Anchors carry <prefix>_<element id>, e.g. container_blank_0
DEFAULT_ANCHOR_TAG = "span"
DEFAULT_ID_PREFIX = "container"


@lru_cache(maxsize=8)
def highlight_pattern(
    max_length: int = DEFAULT_MAX_HIGHLIGHT_LENGTH,
) -> re.Pattern[str]:
    """Return the non-greedy ``!!text!!`` pattern for a content length limit.

    Highlight content never crosses a line terminator (\\n, \\r, U+2028, U+2029).
    """
    delim = re.escape(HIGHLIGHT_DELIMITER)
    return re.compile(
        rf"{delim}({_SAME_LINE_CHAR}{{1,{max_length}}}?){delim}", re.IGNORECASE
    )
