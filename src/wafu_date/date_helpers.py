"""Small calendar helpers built around the date parser."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from .date_parser import parse_date


def get_today() -> date:
    return date.today()


def get_first_date(year: Optional[int] = None, month: Optional[int] = None) -> date:
    """その月の月初。年月を省略した場合は今月。"""
    if year is None or month is None:
        today = get_today()
        year = today.year if year is None else year
        month = today.month if month is None else month
    return date(year, month, 1)


def get_end_date(value: date) -> date:
    """その月の月末"""
    return date(value.year, value.month, monthrange(value.year, value.month)[1])


def to_datetime(value: Optional[date]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.combine(value, time.min)


def to_date(value: Optional[datetime]) -> Optional[date]:
    if value is None:
        return None
    return value.date()


def to_date_or(text: Optional[str], default: date, *, today: Optional[date] = None) -> date:
    if text is None or not text.strip():
        return default
    match = parse_date(text, today=today)
    return match.value if match else default


def to_date_or_today(text: Optional[str], *, today: Optional[date] = None) -> date:
    if today is None:
        today = get_today()
    return to_date_or(text, today, today=today)


def to_ja_string(span: timedelta) -> str:
    """日・時間・分・秒のうち 0 でない部分だけを並べる（例: "1日 2時間 5秒"）"""
    hours, remainder = divmod(span.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts: List[str] = []
    if span.days > 0:
        parts.append(f"{span.days}日")
    if hours > 0:
        parts.append(f"{hours}時間")
    if minutes > 0:
        parts.append(f"{minutes}分")
    if seconds > 0:
        parts.append(f"{seconds}秒")
    return " ".join(parts)


def to_approximate_ja_string(span: timedelta) -> str:
    """最も大きい単位だけで「約N日」のように表す。次の単位が半分以上なら繰り上げる。"""
    hours, remainder = divmod(span.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if span.days > 0:
        return f"約{span.days + (1 if hours >= 12 else 0)}日"
    if hours > 0:
        return f"約{hours + (1 if minutes >= 30 else 0)}時間"
    if minutes > 0:
        return f"約{minutes + (1 if seconds >= 30 else 0)}分"
    return f"{seconds}秒"
