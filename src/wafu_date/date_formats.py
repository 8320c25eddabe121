from __future__ import annotations

import re
from datetime import date
from typing import NamedTuple, Optional, Pattern, Tuple


class FormatPattern(NamedTuple):
    name: str
    regex: Pattern[str]


FORMAT_TOKENS = {
    "yyyy": r"(?P<year>[0-9]{4})",
    "MM": r"(?P<month>[0-9]{2})",
    "M": r"(?P<month>[0-9]{1,2})",
    "dd": r"(?P<day>[0-9]{2})",
    "d": r"(?P<day>[0-9]{1,2})",
}
FORMAT_TOKEN_PATTERN = re.compile(r"yyyy|MM|M|dd|d")

# 前後の空白は ASCII のみ許容（全角スペースは正規化後の和暦解析で扱う）
SURROUNDING_WHITESPACE = " \t\r\n\v\f"

# 日付ありのパターンを、その接頭辞になり得る年月のみのパターンより先に並べる
FORMAT_NAMES: Tuple[str, ...] = (
    "yyyyMMdd",
    "yyyyMM",

    "yyyy年MM月dd日",
    "yyyy/MM/dd",
    "yyyy-MM-dd",
    "yyyy.MM.dd",

    "yyyy年M月d日",
    "yyyy/M/d",
    "yyyy-M-d",
    "yyyy.M.d",

    "yyyy年MM月",
    "yyyy/MM",
    "yyyy-MM",
    "yyyy.MM",

    "yyyy年M月",
    "yyyy/M",
    "yyyy-M",
    "yyyy.M",
)


def compile_format(name: str) -> FormatPattern:
    parts = []
    position = 0
    for token in FORMAT_TOKEN_PATTERN.finditer(name):
        parts.append(re.escape(name[position:token.start()]))
        parts.append(FORMAT_TOKENS[token.group()])
        position = token.end()
    parts.append(re.escape(name[position:]))
    return FormatPattern(name, re.compile("".join(parts), re.IGNORECASE))


FORMAT_PATTERNS: Tuple[FormatPattern, ...] = tuple(compile_format(name) for name in FORMAT_NAMES)


def match_exact_format(text: str) -> Optional[Tuple[date, FormatPattern]]:
    """Try the fixed formats in order.

    A pattern that fits the text but names an impossible date (month 13,
    day 0, 31 April ...) is skipped rather than clamped.
    """
    candidate = text.strip(SURROUNDING_WHITESPACE)
    for pattern in FORMAT_PATTERNS:
        match = pattern.regex.fullmatch(candidate)
        if not match:
            continue
        day = match.groupdict().get("day") or "1"
        try:
            value = date(int(match.group("year")), int(match.group("month")), int(day))
        except ValueError:
            continue
        return value, pattern
    return None


def parse_exact_format(text: str) -> Optional[date]:
    matched = match_exact_format(text)
    return matched[0] if matched else None
