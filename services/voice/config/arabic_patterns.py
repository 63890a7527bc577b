"""
Arabic Speech Patterns Configuration

Vocabulary used to interpret dialectal Arabic speech recognition output:
spoken numbers, filler sounds, command keywords and field value words.
"""

# Arabic-Indic digits
ARABIC_DIGITS = {
    "٠": "0", "١": "1", "٢": "2", "٣": "3", "٤": "4",
    "٥": "5", "٦": "6", "٧": "7", "٨": "8", "٩": "9",
}

# Spoken number words (MSA and Levantine variants)
NUMBER_WORDS = {
    "واحد": 1,
    "اثنين": 2, "اثنان": 2,
    "ثلاثة": 3, "ثلاث": 3,
    "اربعة": 4, "أربعة": 4, "اربع": 4, "أربع": 4,
    "خمسة": 5, "خمس": 5,
    "ستة": 6, "ست": 6,
    "سبعة": 7, "سبع": 7,
    "ثمانية": 8, "ثماني": 8, "ثمان": 8,
    "تسعة": 9, "تسع": 9,
    "عشرة": 10, "عشر": 10,
    "احدعش": 11, "إحدعش": 11, "حداشر": 11, "احد عشر": 11, "أحد عشر": 11,
    "اثنعش": 12, "إثنعش": 12, "اطنعش": 12, "اثنا عشر": 12, "إثنا عشر": 12, "اتناشر": 12,
    "ثلاثطعش": 13, "ثلتطعش": 13, "ثلاث عشر": 13, "ثلاثة عشر": 13, "تلتاشر": 13,
    "اربعطعش": 14, "أربعطعش": 14, "اربع عشر": 14, "أربعة عشر": 14, "اربعتاشر": 14,
    "خمسطعش": 15, "خمستاشر": 15, "خمس عشر": 15, "خمسة عشر": 15,
    "ستطعش": 16, "سطعش": 16, "ست عشر": 16, "ستة عشر": 16, "ستاشر": 16,
    "سبعطعش": 17, "سبعتاشر": 17, "سبع عشر": 17, "سبعة عشر": 17,
    "ثمنطعش": 18, "تمنطعش": 18, "ثمانية عشر": 18, "تمنتاشر": 18, "ثماني عشر": 18,
    "تسعطعش": 19, "تسعتاشر": 19, "تسع عشر": 19, "تسعة عشر": 19,
    "عشرين": 20,
    "واحد وعشرين": 21, "اثنين وعشرين": 22, "ثلاثة وعشرين": 23,
    "اربعة وعشرين": 24, "أربعة وعشرين": 24, "خمسة وعشرين": 25,
    "ستة وعشرين": 26, "سبعة وعشرين": 27, "ثمانية وعشرين": 28,
    "تسعة وعشرين": 29,
    "ثلاثين": 30, "واحد وثلاثين": 31,
}

# Hesitations, cough/laughter markers and stray interjections
FILLER_WORDS = [
    "آ", "آآ", "امم", "مم", "ها", "ضحك", "كحة", "سعال", "اه", "أه", "إه",
]

# "This field is complete, move on" as written by the recognizer
SEPARATOR_KEYWORD = "انتهى"
SEPARATOR_VARIANTS = ["انتهى", "انتهي", "انتهت", "انتها", "إنتهى", "إنتهي"]

# Whole-utterance commands that advance the cursor
COMMAND_KEYWORDS = ["انتهى", "انتها", "خلص", "تم", "التالي", "كمل"]

# Plan range: "<surah> من <A> إلى <B>"
RANGE_KEYWORDS_FROM = ["من", "مِن"]
RANGE_KEYWORDS_TO = ["إلى", "الى", "الي", "إلي", "لـ", "ل"]

# Checkbox answers (not-done is matched first)
CHECKBOX_DONE_WORDS = ["تم", "تمّ", "نعم", "اه", "أه", "ايوا", "أيوا", "صح", "تمام"]
CHECKBOX_NOT_DONE_WORDS = ["لا", "لم يتم", "لم", "ما تم", "لسا", "لسه"]
CHECKBOX_TRUE = "TRUE"
CHECKBOX_FALSE = "FALSE"

# Spoken grade → canonical grade label
GRADE_VARIANTS = {
    "ممتاز": "ممتاز",
    "جيد جدا": "جيد جدا",
    "جيد جداً": "جيد جدا",
    "جيد": "جيد",
    "مقبول": "مقبول",
    "لم يسمع": "لم يسمع",
    "ما سمع": "لم يسمع",
    "لم يسمّع": "لم يسمع",
}

GRADE_OPTIONS = ["ممتاز", "جيد جدا", "جيد", "مقبول", "لم يسمع"]


def longest_first(phrases):
    """Return phrases ordered longest first (stable for equal lengths)."""
    return sorted(phrases, key=len, reverse=True)


# Sorted once; lookups must try multi-word phrases before their components
NUMBER_WORDS_LONGEST_FIRST = longest_first(NUMBER_WORDS)
GRADE_VARIANTS_LONGEST_FIRST = longest_first(GRADE_VARIANTS)
