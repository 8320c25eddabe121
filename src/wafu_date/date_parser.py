from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .date_formats import match_exact_format
from .fiscal_month import parse_fiscal_month
from .japanese_calendar import parse_era_date
from .text_normaliser import normalise_date_text

logger = logging.getLogger("wafu_date.parser")

STAGE_FISCAL_MONTH = "fiscal_month"
STAGE_EXACT_FORMAT = "exact_format"
STAGE_ERA_CALENDAR = "era_calendar"


@dataclass(frozen=True)
class DateMatch:
    value: date
    stage: str
    pattern: Optional[str] = None


def parse_date(text: str, *, today: Optional[date] = None) -> Optional[DateMatch]:
    """Interpret a loosely formatted date string.

    The strategies run in order and the first one that succeeds wins:

    1. a bare month ("4", "４月", "弥生", "Apr") resolved against the fiscal
       year that starts in April;
    2. the fixed Western formats such as ``yyyy/MM/dd`` or ``yyyyMM``;
    3. the Japanese era calendar ("令和六年三月十五日", "H31/4/30") after
       width folding and kanji-numeral conversion.

    Parameters
    ----------
    text: str
        Input string. ``None`` is rejected with ``TypeError``.
    today: Optional[date]
        Reference date for bare months and year-less input. Sampled once from
        the local clock when omitted.
    """
    if text is None:
        raise TypeError("text must be a str, not None")
    if not text.strip():
        return None

    if today is None:
        today = date.today()

    value = parse_fiscal_month(text, today)
    if value is not None:
        logger.debug("Resolved %r as fiscal month -> %s", text, value)
        return DateMatch(value, STAGE_FISCAL_MONTH)

    exact = match_exact_format(text)
    if exact is not None:
        value, pattern = exact
        logger.debug("Matched %r with format %s -> %s", text, pattern.name, value)
        return DateMatch(value, STAGE_EXACT_FORMAT, pattern.name)

    normalised = normalise_date_text(text)
    value = parse_era_date(normalised, today)
    if value is not None:
        logger.debug("Parsed %r (normalised %r) with era calendar -> %s", text, normalised, value)
        return DateMatch(value, STAGE_ERA_CALENDAR)

    logger.debug("No date found in %r (normalised %r)", text, normalised)
    return None


def try_parse_date(text: str, *, today: Optional[date] = None) -> Tuple[bool, Optional[date]]:
    match = parse_date(text, today=today)
    if match is None:
        return False, None
    return True, match.value
