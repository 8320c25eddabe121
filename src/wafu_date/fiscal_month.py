from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .text_normaliser import fold_width

KANJI_MONTH_NAMES = (
    "一月",
    "二月",
    "三月",
    "四月",
    "五月",
    "六月",
    "七月",
    "八月",
    "九月",
    "十月",
    "十一月",
    "十二月",
)

# 和風月名（漢字・ひらがな・カタカナ）
CLASSICAL_MONTH_NAMES: Tuple[Tuple[str, ...], ...] = (
    ("睦月", "むつき", "ムツキ"),
    ("如月", "きさらぎ", "キサラギ"),
    ("弥生", "やよい", "ヤヨイ"),
    ("卯月", "うづき", "ウヅキ"),
    ("皐月", "さつき", "サツキ"),
    ("水無月", "みなづき", "ミナヅキ"),
    ("文月", "ふみづき", "フミヅキ"),
    ("葉月", "はづき", "ハヅキ"),
    ("長月", "ながつき", "ナガツキ"),
    ("神無月", "かんなづき", "カンナヅキ"),
    ("霜月", "しもつき", "シモツキ"),
    ("師走", "しわす", "シワス"),
)

ENGLISH_MONTH_NAMES: Tuple[Tuple[str, ...], ...] = (
    ("jan", "january"),
    ("feb", "february"),
    ("mar", "march"),
    ("apr", "april"),
    ("may",),
    ("jun", "june"),
    ("jul", "july"),
    ("aug", "august"),
    ("sep", "sept", "september"),
    ("oct", "octo", "october"),
    ("nov", "novem", "november"),
    ("dec", "decem", "december"),
)

FISCAL_YEAR_START_MONTH = 4


def _month_aliases(month: int) -> Iterable[str]:
    yield str(month)
    if month < 10:
        yield f"{month:02d}"
    yield f"{month}月"
    yield KANJI_MONTH_NAMES[month - 1]
    yield from CLASSICAL_MONTH_NAMES[month - 1]
    yield from ENGLISH_MONTH_NAMES[month - 1]


def _build_month_aliases() -> Mapping[str, int]:
    aliases: Dict[str, int] = {}
    for month in range(1, 13):
        for alias in _month_aliases(month):
            if alias in aliases:
                raise ValueError(f"Month alias '{alias}' is defined for both {aliases[alias]} and {month}")
            aliases[alias] = month
    return MappingProxyType(aliases)


MONTH_ALIASES = _build_month_aliases()


def resolve_month_alias(text: str) -> Optional[int]:
    """Return the month (1-12) when the whole text is a month token."""
    return MONTH_ALIASES.get(fold_width(text.strip()))


def fiscal_year_for_month(month: int, today: date) -> int:
    """Pick the calendar year a bare month refers to, counting years from April.

    On 2025-06-15 a "1" means January 2026. During January to March a month
    of that quarter earlier than the current one also moves to the next year,
    so on 2025-02-10 "1" is January 2026 while "3" stays March 2025.
    """
    year = today.year
    if today.month >= FISCAL_YEAR_START_MONTH and month < FISCAL_YEAR_START_MONTH:
        year += 1
    if today.month < FISCAL_YEAR_START_MONTH and month < FISCAL_YEAR_START_MONTH and month < today.month:
        year += 1
    return year


def parse_fiscal_month(text: str, today: date) -> Optional[date]:
    month = resolve_month_alias(text)
    if month is None:
        return None
    return date(fiscal_year_for_month(month, today), month, 1)
