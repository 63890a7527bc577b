"""
Field Schema Configuration

The fixed, ordered set of columns a voice session fills for one
recitation record. Order defines cursor progression; column positions are
relied on by the sheet writer, so the schema is never reordered at runtime.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class FieldType(str, Enum):
    """Coercion type of a record field."""
    PLAN_RANGE = "plan_range"
    DATE = "date"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    GRADE = "grade"
    FREE_TEXT = "free_text"


@dataclass(frozen=True)
class FieldDefinition:
    """One column of the record."""
    index: int
    name: str
    field_type: FieldType


# Record column positions
PLAN_COL_INDEX = 0            # الخطة (surah range)
DATE_COL_INDEX = 1            # تاريخ التسميع الفعلي
PAGES_COL_INDEX = 2           # عدد الصفحات
STUDENT_LISTEN_COL_INDEX = 3  # التسميع عند طالب
SHEIKH_LISTEN_COL_INDEX = 4   # الاستماع لشيخ
HOME_LISTEN_COL_INDEX = 5     # التسميع المنزلي
ERRORS_COL_INDEX = 6          # الأخطاء
GRADE_COL_INDEX = 7           # التقدير
NOTES_COL_INDEX = 8           # ملاحظات

NUMBER_COL_INDICES: Tuple[int, ...] = (PAGES_COL_INDEX, ERRORS_COL_INDEX)
CHECKBOX_COL_INDICES: Tuple[int, ...] = (
    STUDENT_LISTEN_COL_INDEX,
    SHEIKH_LISTEN_COL_INDEX,
    HOME_LISTEN_COL_INDEX,
)

FIELD_SCHEMA: Tuple[FieldDefinition, ...] = (
    FieldDefinition(PLAN_COL_INDEX, "الخطة", FieldType.PLAN_RANGE),
    FieldDefinition(DATE_COL_INDEX, "تاريخ التسميع الفعلي", FieldType.DATE),
    FieldDefinition(PAGES_COL_INDEX, "عدد الصفحات", FieldType.INTEGER),
    FieldDefinition(STUDENT_LISTEN_COL_INDEX, "التسميع عند طالب", FieldType.BOOLEAN),
    FieldDefinition(SHEIKH_LISTEN_COL_INDEX, "الاستماع لشيخ", FieldType.BOOLEAN),
    FieldDefinition(HOME_LISTEN_COL_INDEX, "التسميع المنزلي", FieldType.BOOLEAN),
    FieldDefinition(ERRORS_COL_INDEX, "الأخطاء", FieldType.INTEGER),
    FieldDefinition(GRADE_COL_INDEX, "التقدير", FieldType.GRADE),
    FieldDefinition(NOTES_COL_INDEX, "ملاحظات", FieldType.FREE_TEXT),
)

FIELD_COUNT = len(FIELD_SCHEMA)

COLUMN_NAMES: List[str] = [definition.name for definition in FIELD_SCHEMA]


def field_type_at(index: int) -> FieldType:
    """Get the coercion type of the field at a cursor position."""
    return FIELD_SCHEMA[index].field_type


def empty_record() -> List[str]:
    """Create a blank record with one empty string per field."""
    return [""] * FIELD_COUNT
