"""
Base Normalizer

Abstract base class for all field-specific normalizers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Tuple


@dataclass
class NormalizationResult:
    """Result from normalization."""
    value: str
    is_valid: bool
    confidence: float
    steps: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class BaseNormalizer(ABC):
    """
    Abstract base class for field-specific normalizers.

    All normalizers must implement:
    - normalize(): Transform spoken content to the field's canonical value,
      returning the input unchanged when it does not fit
    - validate(): Check whether a value is canonical for the field type
    """

    @abstractmethod
    def normalize(
        self,
        text: str,
        context: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Normalize text for this field type.

        Args:
            text: Spoken content for one field
            context: Optional context dict

        Returns:
            Canonical value, or the original text on a miss
        """
        pass

    @abstractmethod
    def validate(self, text: str) -> Tuple[bool, float]:
        """
        Validate normalized value.

        Args:
            text: Normalized value

        Returns:
            Tuple of (is_valid, confidence_score)
        """
        pass

    def process(
        self,
        text: str,
        context: Optional[Dict[str, Any]] = None
    ) -> NormalizationResult:
        """
        Full processing pipeline: clean → normalize → validate.

        A value that fails validation is still returned; misses are kept
        verbatim for a human reviewer.
        """
        steps = []

        cleaned = self.clean_input(text)
        steps.append(f"Cleaned: '{text}' → '{cleaned}'")

        normalized = self.normalize(cleaned, context)
        steps.append(f"Normalized: '{cleaned}' → '{normalized}'")

        is_valid, confidence = self.validate(normalized)
        steps.append(f"Validated: valid={is_valid}, confidence={confidence:.2f}")

        errors = [] if is_valid else [f"Kept raw value for review: '{normalized}'"]

        return NormalizationResult(
            value=normalized,
            is_valid=is_valid,
            confidence=confidence,
            steps=steps,
            errors=errors,
        )

    def clean_input(self, text: str) -> str:
        """
        Common pre-processing for all normalizers.

        Arabic has no case, so only surrounding whitespace is removed.
        """
        if not text:
            return ""
        return text.strip()
