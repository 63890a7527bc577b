"""
Plan Normalizer

Normalize a spoken memorization plan ("سورة البقرة من خمسة إلى عشرة")
to "<surah> (<from>-<to>)".
"""

import re
from typing import Dict, Any, Optional, Tuple

from services.voice.config import RANGE_KEYWORDS_FROM, RANGE_KEYWORDS_TO
from services.voice.normalization.base_normalizer import BaseNormalizer
from services.voice.normalization.arabic_numbers import (
    extract_leading_number,
    normalize_digits,
)


def _alternation(words) -> str:
    return "|".join(re.escape(word) for word in words)


class PlanRangeNormalizer(BaseNormalizer):
    """
    Normalize "X from A to B" plans.

    The from/to keyword sets are configurable per instance. Any text that
    does not yield both numbers is returned unchanged so capture is never
    blocked.
    """

    CANONICAL_PATTERN = re.compile(r"^.+ \(\d+-\d+\)$")

    def __init__(self, from_keywords=None, to_keywords=None):
        super().__init__()
        from_words = from_keywords or RANGE_KEYWORDS_FROM
        to_words = to_keywords or RANGE_KEYWORDS_TO
        self.pattern = re.compile(
            rf"^(.+?)\s+(?:{_alternation(from_words)})\s+(.+?)\s+(?:{_alternation(to_words)})\s+(.+)$",
            re.IGNORECASE,
        )

    def normalize(self, text: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Normalize plan text.

        Args:
            text: Spoken plan
            context: Unused

        Returns:
            "<label> (<A>-<B>)" or the original text
        """
        if not text:
            return ""

        match = self.pattern.match(normalize_digits(text.strip()))
        if not match:
            return text

        label, from_text, to_text = (group.strip() for group in match.groups())
        start = extract_leading_number(from_text)
        end = extract_leading_number(to_text)
        if start is None or end is None:
            return text

        return f"{label} ({start}-{end})"

    def validate(self, text: str) -> Tuple[bool, float]:
        """Validate normalized plan."""
        if not text:
            return False, 0.0
        if self.CANONICAL_PATTERN.match(text):
            return True, 0.95
        return False, 0.4
