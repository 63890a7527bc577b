"""
Checkbox Normalizer

Yes/no answers for the three recitation checkboxes.
"""

from typing import Dict, Any, Optional, Tuple

from services.voice.config import (
    CHECKBOX_DONE_WORDS,
    CHECKBOX_NOT_DONE_WORDS,
    CHECKBOX_TRUE,
    CHECKBOX_FALSE,
)
from services.voice.normalization.base_normalizer import BaseNormalizer


class CheckboxNormalizer(BaseNormalizer):
    """
    Normalize spoken yes/no to "TRUE"/"FALSE".

    Not-done words are checked first so "لم يتم" is never read as "تم".
    Anything else is left for a human to decide.
    """

    def __init__(self, done_words=None, not_done_words=None):
        super().__init__()
        self.done_words = done_words or CHECKBOX_DONE_WORDS
        self.not_done_words = not_done_words or CHECKBOX_NOT_DONE_WORDS

    def normalize(self, text: str, context: Optional[Dict[str, Any]] = None) -> str:
        if not text:
            return ""

        answer = text.strip()
        if any(word in answer for word in self.not_done_words):
            return CHECKBOX_FALSE
        if any(word in answer for word in self.done_words):
            return CHECKBOX_TRUE
        return text

    def validate(self, text: str) -> Tuple[bool, float]:
        if text in (CHECKBOX_TRUE, CHECKBOX_FALSE):
            return True, 0.9
        return False, 0.0
