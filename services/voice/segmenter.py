"""
Utterance Segmenter

Splits a cleaned utterance into field content and "advance" markers.
Every spoken separator yields its own ADVANCE so a speaker can skip blank
fields by repeating it.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from services.voice.config import SEPARATOR_VARIANTS, longest_first


class SegmentKind(str, Enum):
    """Kinds of segment produced by the segmenter."""
    CONTENT = "content"
    ADVANCE = "advance"


@dataclass(frozen=True)
class Segment:
    """A piece of an utterance: field content or an advance marker."""
    kind: SegmentKind
    text: str = ""

    @property
    def is_advance(self) -> bool:
        return self.kind == SegmentKind.ADVANCE


ADVANCE = Segment(SegmentKind.ADVANCE)

SEPARATOR_PATTERN = re.compile(
    "(" + "|".join(re.escape(variant) for variant in longest_first(SEPARATOR_VARIANTS)) + ")",
    re.IGNORECASE,
)


def content(text: str) -> Segment:
    """Build a CONTENT segment."""
    return Segment(SegmentKind.CONTENT, text)


def segment(clean_text: str) -> List[Segment]:
    """
    Split cleaned text on separator keywords, preserving order.

    Args:
        clean_text: Output of clean_transcript()

    Returns:
        CONTENT and ADVANCE segments in spoken order

    Example:
        >>> segment("سورة البقرة انتهى انتهى")
        [Segment(CONTENT, 'سورة البقرة'), ADVANCE, ADVANCE]
    """
    segments: List[Segment] = []
    if not clean_text:
        return segments

    # The capture group keeps separators at odd positions of the split
    for position, piece in enumerate(SEPARATOR_PATTERN.split(clean_text)):
        if position % 2 == 1:
            segments.append(ADVANCE)
            continue
        piece = piece.strip()
        if piece:
            segments.append(content(piece))
    return segments
