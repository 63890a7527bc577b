"""
Field Normalizer Tests

Coercion of spoken content into canonical field values. A miss always
returns the input unchanged.

Run: pytest tests/test_normalizers.py -v
"""

import pytest
from datetime import date

from services.voice.config import FieldType
from services.voice.normalization import (
    CheckboxNormalizer,
    DateNormalizer,
    GradeNormalizer,
    NumberNormalizer,
    PlanRangeNormalizer,
    coerce_field,
    review_field,
)

TODAY = {"today": date(2024, 5, 1)}


# ============================================================================
# Plan Range
# ============================================================================

class TestPlanRangeNormalizer:
    """Tests for "<surah> from A to B" plans."""

    @pytest.fixture
    def normalizer(self):
        return PlanRangeNormalizer()

    def test_spoken_range(self, normalizer):
        assert normalizer.normalize("سورة البقرة من خمسة إلى عشرة") == "سورة البقرة (5-10)"

    def test_digit_range(self, normalizer):
        assert normalizer.normalize("آل عمران من ١ الى ٢٠") == "آل عمران (1-20)"

    def test_no_range_is_kept(self, normalizer):
        assert normalizer.normalize("سورة الكهف") == "سورة الكهف"

    def test_unreadable_numbers_are_kept(self, normalizer):
        text = "سورة البقرة من البداية إلى النهاية"
        assert normalizer.normalize(text) == text

    def test_custom_keywords(self):
        normalizer = PlanRangeNormalizer(from_keywords=["from"], to_keywords=["to"])
        assert normalizer.normalize("Baqarah from 3 to 7") == "Baqarah (3-7)"


# ============================================================================
# Date
# ============================================================================

class TestDateNormalizer:
    """Tests for date coercion."""

    @pytest.fixture
    def normalizer(self):
        return DateNormalizer()

    def test_digital_date_gets_current_year(self, normalizer):
        assert normalizer.normalize("12/3", TODAY) == "12/3/2024"

    def test_digital_date_with_year(self, normalizer):
        assert normalizer.normalize("٥-٦-٢٠٢٣", TODAY) == "5/6/2023"

    def test_spoken_day_and_month(self, normalizer):
        assert normalizer.normalize("خمسة ثلاثة", TODAY) == "5/3/2024"

    def test_third_spoken_number_is_the_year(self, normalizer):
        assert normalizer.normalize("اثنين عشر ثلاثة", TODAY) == "2/10/3"

    def test_other_words_are_skipped(self, normalizer):
        assert normalizer.normalize("يوم عشرين شهر اربعة", TODAY) == "20/4/2024"

    def test_single_number_is_kept(self, normalizer):
        assert normalizer.normalize("اليوم خمسة", TODAY) == "اليوم خمسة"

    def test_defaults_to_current_date(self, normalizer):
        assert normalizer.normalize("1/2").endswith(f"/{date.today().year}")


# ============================================================================
# Counts, Checkboxes, Grades
# ============================================================================

class TestNumberNormalizer:

    @pytest.fixture
    def normalizer(self):
        return NumberNormalizer()

    @pytest.mark.parametrize("text,expected", [
        ("عشرين صفحة", "20"),
        ("١٢", "12"),
        ("خمستاشر", "15"),
        ("تقريبا 3 صفحات", "3"),
        ("كثير", "كثير"),
    ])
    def test_normalize(self, normalizer, text, expected):
        assert normalizer.normalize(text) == expected


class TestCheckboxNormalizer:

    @pytest.fixture
    def normalizer(self):
        return CheckboxNormalizer()

    @pytest.mark.parametrize("text,expected", [
        ("نعم", "TRUE"),
        ("تم", "TRUE"),
        ("صح", "TRUE"),
        ("لا", "FALSE"),
        ("لسه", "FALSE"),
        ("ربما", "ربما"),
    ])
    def test_normalize(self, normalizer, text, expected):
        assert normalizer.normalize(text) == expected

    def test_not_done_checked_first(self, normalizer):
        """'لم يتم' contains 'تم' but means not done."""
        assert normalizer.normalize("لم يتم") == "FALSE"


class TestGradeNormalizer:

    @pytest.fixture
    def normalizer(self):
        return GradeNormalizer()

    @pytest.mark.parametrize("text,expected", [
        ("ممتاز", "ممتاز"),
        ("جيد جداً", "جيد جدا"),
        ("جيد جدا", "جيد جدا"),
        ("جيد", "جيد"),
        ("ما سمع", "لم يسمع"),
        ("رائع", "رائع"),
    ])
    def test_normalize(self, normalizer, text, expected):
        assert normalizer.normalize(text) == expected


# ============================================================================
# Registry
# ============================================================================

class TestRegistry:
    """Tests for dispatch by field type."""

    def test_coerce_by_type(self):
        assert coerce_field(FieldType.INTEGER, "عشرين صفحة") == "20"
        assert coerce_field(FieldType.BOOLEAN, "نعم") == "TRUE"
        assert coerce_field(FieldType.DATE, "12/3", TODAY) == "12/3/2024"

    def test_free_text_is_verbatim(self):
        assert coerce_field(FieldType.FREE_TEXT, "يحتاج مراجعة سورة الملك") == "يحتاج مراجعة سورة الملك"

    def test_review_flags_misses(self):
        result = review_field(FieldType.GRADE, "رائع")
        assert result.value == "رائع"
        assert result.is_valid is False
        assert result.errors

    def test_review_accepts_canonical(self):
        result = review_field(FieldType.PLAN_RANGE, "سورة البقرة من خمسة إلى عشرة")
        assert result.value == "سورة البقرة (5-10)"
        assert result.is_valid is True
        assert not result.errors
