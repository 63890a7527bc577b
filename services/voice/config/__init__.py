"""
Voice Config Package

Configuration files for voice processing.
"""

from services.voice.config.arabic_patterns import (
    ARABIC_DIGITS,
    NUMBER_WORDS,
    NUMBER_WORDS_LONGEST_FIRST,
    FILLER_WORDS,
    SEPARATOR_KEYWORD,
    SEPARATOR_VARIANTS,
    COMMAND_KEYWORDS,
    RANGE_KEYWORDS_FROM,
    RANGE_KEYWORDS_TO,
    CHECKBOX_DONE_WORDS,
    CHECKBOX_NOT_DONE_WORDS,
    CHECKBOX_TRUE,
    CHECKBOX_FALSE,
    GRADE_VARIANTS,
    GRADE_VARIANTS_LONGEST_FIRST,
    GRADE_OPTIONS,
    longest_first,
)

from services.voice.config.field_schema import (
    FieldType,
    FieldDefinition,
    FIELD_SCHEMA,
    FIELD_COUNT,
    COLUMN_NAMES,
    PLAN_COL_INDEX,
    DATE_COL_INDEX,
    PAGES_COL_INDEX,
    STUDENT_LISTEN_COL_INDEX,
    SHEIKH_LISTEN_COL_INDEX,
    HOME_LISTEN_COL_INDEX,
    ERRORS_COL_INDEX,
    GRADE_COL_INDEX,
    NOTES_COL_INDEX,
    NUMBER_COL_INDICES,
    CHECKBOX_COL_INDICES,
    field_type_at,
    empty_record,
)

__all__ = [
    'ARABIC_DIGITS',
    'NUMBER_WORDS',
    'NUMBER_WORDS_LONGEST_FIRST',
    'FILLER_WORDS',
    'SEPARATOR_KEYWORD',
    'SEPARATOR_VARIANTS',
    'COMMAND_KEYWORDS',
    'RANGE_KEYWORDS_FROM',
    'RANGE_KEYWORDS_TO',
    'CHECKBOX_DONE_WORDS',
    'CHECKBOX_NOT_DONE_WORDS',
    'CHECKBOX_TRUE',
    'CHECKBOX_FALSE',
    'GRADE_VARIANTS',
    'GRADE_VARIANTS_LONGEST_FIRST',
    'GRADE_OPTIONS',
    'longest_first',
    'FieldType',
    'FieldDefinition',
    'FIELD_SCHEMA',
    'FIELD_COUNT',
    'COLUMN_NAMES',
    'PLAN_COL_INDEX',
    'DATE_COL_INDEX',
    'PAGES_COL_INDEX',
    'STUDENT_LISTEN_COL_INDEX',
    'SHEIKH_LISTEN_COL_INDEX',
    'HOME_LISTEN_COL_INDEX',
    'ERRORS_COL_INDEX',
    'GRADE_COL_INDEX',
    'NOTES_COL_INDEX',
    'NUMBER_COL_INDICES',
    'CHECKBOX_COL_INDICES',
    'field_type_at',
    'empty_record',
]
