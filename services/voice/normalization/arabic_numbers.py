"""
Arabic Number Normalization

Digit and spoken-number normalization shared by the transcript cleaner,
the segmenter and every field normalizer.
"""

import re
from typing import Optional

from services.voice.config import (
    ARABIC_DIGITS,
    NUMBER_WORDS,
    NUMBER_WORDS_LONGEST_FIRST,
)

_DIGIT_TABLE = str.maketrans(ARABIC_DIGITS)
_WHOLE_DIGITS = re.compile(r"^\d+$")
_DIGIT_TOKEN = re.compile(r"^[0-9٠-٩]+$")


def normalize_digits(text: str) -> str:
    """Map Arabic-Indic digits (٠-٩) to ASCII digits, leaving everything else."""
    if not text:
        return ""
    return text.translate(_DIGIT_TABLE)


def is_digit_token(token: str) -> bool:
    """True if token is made only of ASCII or Arabic-Indic digits."""
    return bool(_DIGIT_TOKEN.match(token))


def words_to_digits(text: str) -> str:
    """
    Replace every spoken number phrase in text with its digits.

    Phrases are substituted longest first so "خمسة عشر" becomes "15"
    rather than "5 10". Replacement is literal, so every occurrence of a
    phrase in the utterance is replaced.

    Args:
        text: Recognized text

    Returns:
        Text with digits in place of number words
    """
    result = normalize_digits(text)
    for phrase in NUMBER_WORDS_LONGEST_FIRST:
        if phrase in result:
            result = result.replace(phrase, str(NUMBER_WORDS[phrase]))
    return result


def match_number_prefix(text: str) -> Optional[str]:
    """Return the longest number phrase that text starts with, if any."""
    for phrase in NUMBER_WORDS_LONGEST_FIRST:
        if text.startswith(phrase):
            return phrase
    return None


def extract_leading_number(text: str) -> Optional[int]:
    """
    Read a number from the start of spoken text.

    Tries a whole-string digit match first, then the number-word table
    (exact or prefix, longest phrase first).

    Args:
        text: Spoken fragment such as "5", "٥" or "عشرين صفحة"

    Returns:
        The number, or None if the text does not start with one
    """
    if not text:
        return None

    candidate = normalize_digits(text.strip())
    if _WHOLE_DIGITS.match(candidate):
        return int(candidate)

    phrase = match_number_prefix(candidate)
    if phrase is not None:
        return NUMBER_WORDS[phrase]
    return None
