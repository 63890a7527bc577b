"""
Number Normalizer

Page and error counts from voice input.
"""

import re
from typing import Dict, Any, Optional, Tuple

from services.voice.normalization.base_normalizer import BaseNormalizer
from services.voice.normalization.arabic_numbers import (
    extract_leading_number,
    normalize_digits,
)


class NumberNormalizer(BaseNormalizer):
    """
    Normalize counts from voice input.

    Handles:
    - Digits, Arabic-Indic or ASCII: "١٢" → "12"
    - Number words, dialectal included: "خمستاشر" → "15"
    - A number followed by a unit: "عشرين صفحة" → "20"
    - A number embedded in other words: "تقريبا 3 صفحات" → "3"
    """

    DIGIT_RUN = re.compile(r"(\d+)")

    def normalize(
        self,
        text: str,
        context: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Normalize a count.

        Args:
            text: Spoken count
            context: Optional context

        Returns:
            Digit string, or the original text if no number is present
        """
        if not text:
            return ""

        number = extract_leading_number(text)
        if number is not None:
            return str(number)

        match = self.DIGIT_RUN.search(normalize_digits(text.strip()))
        if match:
            return match.group(1)

        return text

    def validate(self, number: str) -> Tuple[bool, float]:
        """
        Validate number format.

        Args:
            number: Normalized number

        Returns:
            Tuple of (is_valid, confidence)
        """
        if not number:
            return False, 0.0

        if number.isascii() and number.isdigit():
            return True, 0.95
        return False, 0.3
