"""
Normalization Package

Arabic number normalization and field-specific normalizers for voice input.
"""

from services.voice.normalization.arabic_numbers import (
    normalize_digits,
    words_to_digits,
    extract_leading_number,
    is_digit_token,
)
from services.voice.normalization.base_normalizer import BaseNormalizer, NormalizationResult
from services.voice.normalization.plan_normalizer import PlanRangeNormalizer
from services.voice.normalization.date_normalizer import DateNormalizer
from services.voice.normalization.number_normalizer import NumberNormalizer
from services.voice.normalization.checkbox_normalizer import CheckboxNormalizer
from services.voice.normalization.grade_normalizer import GradeNormalizer
from services.voice.normalization.registry import (
    FreeTextNormalizer,
    get_normalizer,
    coerce_field,
    review_field,
)

__all__ = [
    'normalize_digits',
    'words_to_digits',
    'extract_leading_number',
    'is_digit_token',
    'BaseNormalizer',
    'NormalizationResult',
    'PlanRangeNormalizer',
    'DateNormalizer',
    'NumberNormalizer',
    'CheckboxNormalizer',
    'GradeNormalizer',
    'FreeTextNormalizer',
    'get_normalizer',
    'coerce_field',
    'review_field',
]
