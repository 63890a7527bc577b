"""
Voice Package

Interpretation of live Arabic speech recognition into recitation records:
normalization, cleaning, segmentation, field coercion, session control and
row assembly.
"""

# Normalizers
from services.voice.normalization import (
    normalize_digits,
    words_to_digits,
    extract_leading_number,
    coerce_field,
    review_field,
    NormalizationResult,
)

# Transcript processing
from services.voice.transcript_cleaner import clean_transcript
from services.voice.segmenter import Segment, SegmentKind, segment

# Recognizer boundary
from services.voice.recognizer import (
    DeviceClass,
    DeviceProfile,
    RecognitionEvent,
    Recognizer,
    detect_device_class,
)

# Session
from services.voice.session import (
    RecognitionSessionController,
    ResultOutcome,
    SessionState,
    SessionStatus,
    advance_cursor,
    split_command,
)
from services.voice.record_assembler import RecordAssembler

# Config
from services.voice.config import FIELD_SCHEMA, FieldType

__all__ = [
    # Normalizers
    'normalize_digits',
    'words_to_digits',
    'extract_leading_number',
    'coerce_field',
    'review_field',
    'NormalizationResult',
    # Transcript processing
    'clean_transcript',
    'Segment',
    'SegmentKind',
    'segment',
    # Recognizer boundary
    'DeviceClass',
    'DeviceProfile',
    'RecognitionEvent',
    'Recognizer',
    'detect_device_class',
    # Session
    'RecognitionSessionController',
    'ResultOutcome',
    'SessionState',
    'SessionStatus',
    'advance_cursor',
    'split_command',
    'RecordAssembler',
    # Config
    'FIELD_SCHEMA',
    'FieldType',
]
