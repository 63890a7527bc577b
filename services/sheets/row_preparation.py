"""
Confirm-time row preparation for reviewed records.

Runs before reviewed rows are written, so the pages column reaches the sheet
as a real number and "not done" sessions are recorded consistently.
"""

import re
from typing import Any, List, Optional

from services.voice.config import (
    CHECKBOX_COL_INDICES,
    CHECKBOX_TRUE,
    PAGES_COL_INDEX,
)
from services.voice.normalization.arabic_numbers import normalize_digits

NOT_DONE_MARKER = "لم يتم"

_INVISIBLE = re.compile("[\u200b-\u200d\ufeff]")


def parse_pages(value: Any) -> Optional[float]:
    """
    Pages cell as a number, or None when it is empty or not numeric.

    Example:
        >>> parse_pages(" ١٢ ")
        12
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value

    text = normalize_digits(_INVISIBLE.sub("", str(value)).strip())
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else number


def prepare_confirmed_row(row: List[Any]) -> List[Any]:
    """Prepare one reviewed row; the input row is left untouched."""
    prepared = list(row)
    if len(prepared) <= PAGES_COL_INDEX:
        return prepared

    original = prepared[PAGES_COL_INDEX]
    prepared[PAGES_COL_INDEX] = parse_pages(original)

    if isinstance(original, str) and NOT_DONE_MARKER in original:
        prepared[PAGES_COL_INDEX] = None
        for index in CHECKBOX_COL_INDICES:
            if index < len(prepared):
                prepared[index] = CHECKBOX_TRUE

    return prepared


def prepare_confirmed_rows(rows: List[List[Any]]) -> List[List[Any]]:
    return [prepare_confirmed_row(row) for row in rows]
