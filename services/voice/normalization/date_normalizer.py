"""
Date Normalizer

Normalize spoken or typed dates to D/M/YYYY, filling in the current year
when it is not spoken.
"""

import re
from datetime import date
from typing import Dict, Any, List, Optional, Tuple

from services.voice.config import NUMBER_WORDS
from services.voice.normalization.base_normalizer import BaseNormalizer
from services.voice.normalization.arabic_numbers import (
    match_number_prefix,
    normalize_digits,
)


class DateNormalizer(BaseNormalizer):
    """Normalize spoken dates."""

    DIGITAL_PATTERN = re.compile(
        r"^(\d{1,2})\s*[/\-.]\s*(\d{1,2})(?:\s*[/\-.]\s*(\d{2,4}))?$"
    )
    CANONICAL_PATTERN = re.compile(r"^\d{1,2}/\d{1,2}/\d{1,4}$")
    LEADING_DIGITS = re.compile(r"^(\d+)")
    LEADING_TOKEN = re.compile(r"^\S+\s*")

    # Bound on scanning steps for one utterance
    MAX_SCAN_STEPS = 10

    def normalize(self, text: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Normalize date string.

        Args:
            text: Spoken date ("12/3", "خمسة ثلاثة", "اثنين عشر ثلاثة")
            context: Optional {"today": date} used for the default year

        Returns:
            "D/M/YYYY" or the original text when fewer than two numbers
            are found
        """
        if not text:
            return ""

        current_year = self._current_year(context)
        candidate = normalize_digits(text.strip())

        digital = self.DIGITAL_PATTERN.match(candidate)
        if digital:
            day, month, year = digital.groups()
            return f"{day}/{month}/{year or current_year}"

        numbers = self.scan_numbers(candidate)
        if len(numbers) < 2:
            return text

        day, month = numbers[0], numbers[1]
        year = numbers[2] if len(numbers) > 2 and numbers[2] else current_year
        return f"{day}/{month}/{year}"

    def scan_numbers(self, text: str) -> List[int]:
        """
        Collect number-like tokens left to right.

        Number words (longest phrase first) and digit runs are consumed;
        any other token is skipped.
        """
        numbers: List[int] = []
        remaining = text.strip()
        steps = 0

        while remaining and steps < self.MAX_SCAN_STEPS:
            steps += 1

            phrase = match_number_prefix(remaining)
            if phrase is not None:
                numbers.append(NUMBER_WORDS[phrase])
                remaining = remaining[len(phrase):].strip()
                continue

            digits = self.LEADING_DIGITS.match(remaining)
            if digits:
                numbers.append(int(digits.group(1)))
                remaining = remaining[digits.end():].strip()
                continue

            skipped = self.LEADING_TOKEN.match(remaining)
            remaining = remaining[skipped.end():].strip() if skipped else ""

        return numbers

    def validate(self, text: str) -> Tuple[bool, float]:
        """Validate normalized date."""
        if not text:
            return False, 0.0
        if self.CANONICAL_PATTERN.match(text):
            return True, 1.0
        return False, 0.5

    def _current_year(self, context: Optional[Dict[str, Any]]) -> int:
        today = (context or {}).get("today") or date.today()
        return today.year
