from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Era:
    name: str
    aliases: Tuple[str, ...]
    start: date

    @property
    def offset(self) -> int:
        return self.start.year - 1


# 新しい順
ERAS: Tuple[Era, ...] = (
    Era("令和", ("令", "r"), date(2019, 5, 1)),
    Era("平成", ("平", "h"), date(1989, 1, 8)),
    Era("昭和", ("昭", "s"), date(1926, 12, 25)),
    Era("大正", ("大", "t"), date(1912, 7, 30)),
    Era("明治", ("明", "m"), date(1868, 1, 25)),
)

ERA_BY_ALIAS: Mapping[str, Era] = MappingProxyType({
    alias: era
    for era in ERAS
    for alias in (era.name, *era.aliases)
})

FIRST_YEAR = "元"

ERA_CLASS = "|".join(sorted(ERA_BY_ALIAS, key=len, reverse=True))
ERA_TOKEN = rf"(?:(?P<era>{ERA_CLASS})\s*)?"
YEAR_TOKEN = rf"(?P<year>[0-9]{{1,4}}|{FIRST_YEAR})"
MONTH_TOKEN = r"(?P<month>[0-9]{1,2})"
DAY_TOKEN = r"(?P<day>[0-9]{1,2})"
SEPARATOR = r"[/\-\s]"

FULL_DATE_REGEX = re.compile(
    rf"{ERA_TOKEN}{YEAR_TOKEN}\s*(?:年|{SEPARATOR})\s*{MONTH_TOKEN}\s*(?:月|{SEPARATOR})\s*{DAY_TOKEN}\s*日?"
)
YEAR_MONTH_REGEX = re.compile(
    rf"{ERA_TOKEN}{YEAR_TOKEN}\s*(?P<sep>年|{SEPARATOR})\s*{MONTH_TOKEN}\s*月?"
)
MONTH_DAY_REGEX = re.compile(rf"{MONTH_TOKEN}\s*(?:月|[/\-])\s*{DAY_TOKEN}\s*日?")


def era_for_date(value: date) -> Optional[Era]:
    for era in ERAS:
        if value >= era.start:
            return era
    return None


def _next_era(era: Era) -> Optional[Era]:
    index = ERAS.index(era)
    return ERAS[index - 1] if index > 0 else None


def _within_era(value: date, era: Era) -> bool:
    if value < era.start:
        return False
    following = _next_era(era)
    return following is None or value < following.start


def _build_date(
    era: Optional[Era], raw_year: str, month: int, day: int, today: date
) -> Optional[date]:
    if era is None and raw_year == FIRST_YEAR:
        return None

    if era is None and len(raw_year) >= 3:
        try:
            return date(int(raw_year), month, day)
        except ValueError:
            return None

    if era is None:
        # 元号なしの1-2桁の年は今日時点の元号とみなす
        era = era_for_date(today)
        if era is None:
            return None

    try:
        era_year = 1 if raw_year == FIRST_YEAR else int(raw_year)
        if era_year < 1:
            return None
        value = date(era.offset + era_year, month, day)
    except ValueError:
        return None
    return value if _within_era(value, era) else None


def parse_era_date(text: str, today: date) -> Optional[date]:
    """Parse a normalised date string that may carry a Japanese era.

    Accepts year-month-day, year-month (day 1) and month-day (today's year),
    separated by 年/月/日, slashes, hyphens or spaces.
    """
    candidate = text.strip()
    if not candidate:
        return None

    match = FULL_DATE_REGEX.fullmatch(candidate)
    if match:
        era = ERA_BY_ALIAS.get(match.group("era") or "")
        return _build_date(
            era, match.group("year"), int(match.group("month")), int(match.group("day")), today
        )

    match = YEAR_MONTH_REGEX.fullmatch(candidate)
    if match:
        era = ERA_BY_ALIAS.get(match.group("era") or "")
        raw_year = match.group("year")
        if era is not None or match.group("sep") == "年" or len(raw_year) >= 3:
            return _build_date(era, raw_year, int(match.group("month")), 1, today)

    match = MONTH_DAY_REGEX.fullmatch(candidate)
    if match:
        try:
            return date(today.year, int(match.group("month")), int(match.group("day")))
        except ValueError:
            return None
    return None
