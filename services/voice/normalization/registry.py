"""
Normalizer Registry

Dispatches field content to the normalizer for the field's type.
"""

from typing import Any, Dict, Optional, Tuple

from services.voice.config import FieldType
from services.voice.normalization.base_normalizer import BaseNormalizer, NormalizationResult
from services.voice.normalization.plan_normalizer import PlanRangeNormalizer
from services.voice.normalization.date_normalizer import DateNormalizer
from services.voice.normalization.number_normalizer import NumberNormalizer
from services.voice.normalization.checkbox_normalizer import CheckboxNormalizer
from services.voice.normalization.grade_normalizer import GradeNormalizer


class FreeTextNormalizer(BaseNormalizer):
    """Notes are stored exactly as spoken."""

    def normalize(self, text: str, context: Optional[Dict[str, Any]] = None) -> str:
        return text

    def validate(self, text: str) -> Tuple[bool, float]:
        return bool(text), 1.0 if text else 0.0


_NORMALIZERS: Dict[FieldType, BaseNormalizer] = {
    FieldType.PLAN_RANGE: PlanRangeNormalizer(),
    FieldType.DATE: DateNormalizer(),
    FieldType.INTEGER: NumberNormalizer(),
    FieldType.BOOLEAN: CheckboxNormalizer(),
    FieldType.GRADE: GradeNormalizer(),
    FieldType.FREE_TEXT: FreeTextNormalizer(),
}


def get_normalizer(field_type: FieldType) -> BaseNormalizer:
    """Get the shared normalizer instance for a field type."""
    return _NORMALIZERS[FieldType(field_type)]


def coerce_field(
    field_type: FieldType,
    text: str,
    context: Optional[Dict[str, Any]] = None
) -> str:
    """
    Coerce spoken content to a field's canonical value.

    Args:
        field_type: Type of the target field
        text: Content segment for that field
        context: Optional context passed to the normalizer

    Returns:
        Canonical value, or the original text on a miss
    """
    return get_normalizer(field_type).normalize(text, context)


def review_field(
    field_type: FieldType,
    text: str,
    context: Optional[Dict[str, Any]] = None
) -> NormalizationResult:
    """Coerce and report whether the value needs human review."""
    return get_normalizer(field_type).process(text, context)
