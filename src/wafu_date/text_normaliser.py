from __future__ import annotations

import unicodedata

from .kanji_numerals import contains_kanji_number, replace_kanji_numbers

# 全角英字 → 半角小文字, 全角数字 → 半角数字, 半角大文字 → 小文字
WIDTH_FOLD_TABLE = str.maketrans({
    **{chr(code): chr(code - 0xFF21 + ord("a")) for code in range(0xFF21, 0xFF3B)},
    **{chr(code): chr(code - 0xFF10 + ord("0")) for code in range(0xFF10, 0xFF1A)},
    **{chr(code): chr(code + 32) for code in range(ord("A"), ord("Z") + 1)},
    ".": None,
})


def fold_width(text: str) -> str:
    """Drop periods and fold full-width letters/digits and capitals to ASCII lowercase."""
    return text.translate(WIDTH_FOLD_TABLE)


def normalise_date_text(text: str) -> str:
    """Prepare a date string for era-calendar parsing.

    Applying the function to its own output returns the same string.
    """
    if not text:
        return ""

    cleaned = fold_width(text)
    # NFKC may expose new capitals or periods (e.g. Ⅰ, ．), so fold again
    cleaned = fold_width(unicodedata.normalize("NFKC", cleaned))

    if contains_kanji_number(cleaned):
        cleaned = replace_kanji_numbers(cleaned)
    return cleaned
