"""
Grade Normalizer

Fold spoken grades onto the canonical grade vocabulary.
"""

from typing import Dict, Any, Optional, Tuple

from services.voice.config import (
    GRADE_OPTIONS,
    GRADE_VARIANTS,
    GRADE_VARIANTS_LONGEST_FIRST,
)
from services.voice.normalization.base_normalizer import BaseNormalizer


class GradeNormalizer(BaseNormalizer):
    """Normalize grades ("جيد جداً" → "جيد جدا", "ما سمع" → "لم يسمع")."""

    def normalize(self, text: str, context: Optional[Dict[str, Any]] = None) -> str:
        if not text:
            return ""

        spoken = text.strip()
        # Longest first: "جيد جدا" must win over "جيد"
        for variant in GRADE_VARIANTS_LONGEST_FIRST:
            if variant in spoken:
                return GRADE_VARIANTS[variant]
        return text

    def validate(self, text: str) -> Tuple[bool, float]:
        if text in GRADE_OPTIONS:
            return True, 0.9
        return False, 0.0
