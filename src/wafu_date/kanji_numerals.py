from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

# 通常の漢数字と大字（正式表記）
KANJI_DIGIT_VALUES: Mapping[str, int] = MappingProxyType({
    "〇": 0,
    "一": 1,
    "二": 2,
    "三": 3,
    "四": 4,
    "亖": 4,
    "五": 5,
    "六": 6,
    "七": 7,
    "八": 8,
    "九": 9,
    "零": 0,
    "壱": 1,
    "壹": 1,
    "弌": 1,
    "弐": 2,
    "貳": 2,
    "貮": 2,
    "弍": 2,
    "参": 3,
    "參": 3,
    "弎": 3,
    "肆": 4,
    "伍": 5,
    "陸": 6,
    "漆": 7,
    "柒": 7,
    "質": 7,
    "捌": 8,
    "玖": 9,
})

KANJI_UNIT_VALUES: Mapping[str, int] = MappingProxyType({
    "十": 10,
    "拾": 10,
    "什": 10,
    "廿": 20,
    "卄": 20,
    "丗": 30,
    "卅": 30,
    "卌": 40,
    "百": 100,
    "佰": 100,
    "陌": 100,
    "千": 1000,
    "仟": 1000,
    "阡": 1000,
    "万": 10_000,
    "萬": 10_000,
})

NUMERAL_CLASS = "".join(KANJI_DIGIT_VALUES) + "".join(KANJI_UNIT_VALUES)
KANJI_NUMBER_PATTERN = re.compile(f"[{re.escape(NUMERAL_CLASS)}]+")

INVALID_NUMERAL = -1


def parse_kanji_number(text: str) -> int:
    """Convert one run of kanji numerals to an integer.

    Runs containing a unit (十, 百, 廿 ...) are accumulated positionally, so
    "三十一" is 31 and a bare "十" is 10. Runs made only of digits are read as
    a plain digit string ("二〇二四" is 2024). Returns ``INVALID_NUMERAL`` for
    an empty run or one containing any other character.
    """
    if not text:
        return INVALID_NUMERAL

    total = 0
    current = 0
    has_unit = False

    for ch in text:
        digit = KANJI_DIGIT_VALUES.get(ch)
        if digit is not None:
            current = digit
            continue
        unit = KANJI_UNIT_VALUES.get(ch)
        if unit is None:
            return INVALID_NUMERAL
        if unit >= 20 and current == 0:
            # 廿・卅・卌 は単体で 20/30/40
            total += unit
        else:
            total += (current or 1) * unit
        current = 0
        has_unit = True

    if has_unit:
        return total + current

    digits = "".join(str(KANJI_DIGIT_VALUES[ch]) for ch in text)
    if not digits.isdigit():
        return INVALID_NUMERAL
    try:
        return int(digits)
    except ValueError:
        # 桁数が int 変換の上限を超える
        return INVALID_NUMERAL


def replace_kanji_numbers(text: str) -> str:
    """Replace every run of kanji numerals with its decimal value.

    Runs that cannot be converted are left as they are.
    """

    def replace(match: re.Match[str]) -> str:
        value = parse_kanji_number(match.group())
        return str(value) if value >= 0 else match.group()

    return KANJI_NUMBER_PATTERN.sub(replace, text)


def contains_kanji_number(text: str) -> bool:
    """True when the text holds at least one kanji numeral character."""
    return KANJI_NUMBER_PATTERN.search(text) is not None
