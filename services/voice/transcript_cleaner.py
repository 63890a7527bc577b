"""
Transcript Cleaner

Removes recognition noise from Arabic transcripts before they are
segmented: filler sounds, stutter repeats and stray one-letter tokens.
"""

import re
from typing import List

from services.voice.config import FILLER_WORDS, SEPARATOR_VARIANTS, longest_first
from services.voice.normalization.arabic_numbers import is_digit_token

# Whole-word match; fillers inside longer words are left alone
_FILLER_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(word) for word in longest_first(FILLER_WORDS)) + r")\b"
)

MIN_TOKEN_LENGTH = 2

_SEPARATORS = frozenset(SEPARATOR_VARIANTS)


def remove_fillers(text: str) -> str:
    """Replace whole-word filler tokens with a space."""
    return _FILLER_PATTERN.sub(" ", text)


def collapse_repeats(tokens: List[str]) -> List[str]:
    """
    Collapse runs of identical consecutive tokens ("نعم نعم" → "نعم").

    Separators are kept as spoken: each one moves to the next field, so a
    repeated separator skips a field.
    """
    collapsed: List[str] = []
    for token in tokens:
        if collapsed and collapsed[-1] == token and token not in _SEPARATORS:
            continue
        collapsed.append(token)
    return collapsed


def keep_token(token: str) -> bool:
    """Single-character noise is dropped, single digits survive."""
    return is_digit_token(token) or len(token) >= MIN_TOKEN_LENGTH


def clean_transcript(text: str) -> str:
    """
    Clean a raw recognition transcript.

    Steps:
        1. Remove whole-word fillers (hesitations, coughs, laughter)
        2. Collapse immediately repeated words
        3. Drop tokens shorter than two characters unless they are digits
        4. Rejoin with single spaces

    Args:
        text: Raw transcript from the recognizer

    Returns:
        Cleaned transcript ("" for empty input)
    """
    if not text:
        return ""

    tokens = collapse_repeats(remove_fillers(text).split())
    return " ".join(token for token in tokens if keep_token(token)).strip()
