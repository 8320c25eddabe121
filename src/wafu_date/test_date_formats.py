from __future__ import annotations

from datetime import date

import pytest

from .date_formats import FORMAT_PATTERNS, match_exact_format, parse_exact_format


@pytest.mark.parametrize(
    ("text", "expected", "pattern"),
    [
        ("20240315", date(2024, 3, 15), "yyyyMMdd"),
        ("202403", date(2024, 3, 1), "yyyyMM"),
        ("2024年03月15日", date(2024, 3, 15), "yyyy年MM月dd日"),
        ("2024/03/15", date(2024, 3, 15), "yyyy/MM/dd"),
        ("2024-03-15", date(2024, 3, 15), "yyyy-MM-dd"),
        ("2024.03.15", date(2024, 3, 15), "yyyy.MM.dd"),
        ("2024年3月15日", date(2024, 3, 15), "yyyy年M月d日"),
        ("2024/3/5", date(2024, 3, 5), "yyyy/M/d"),
        ("2024/03", date(2024, 3, 1), "yyyy/MM"),
        ("2024-03", date(2024, 3, 1), "yyyy-MM"),
        ("2024.03", date(2024, 3, 1), "yyyy.MM"),
        ("2024年3月", date(2024, 3, 1), "yyyy年M月"),
        ("2024.3", date(2024, 3, 1), "yyyy.M"),
    ],
)
def test_match_exact_format(text: str, expected: date, pattern: str) -> None:
    matched = match_exact_format(text)
    assert matched is not None
    value, used = matched
    assert value == expected
    assert used.name == pattern


def test_day_bearing_pattern_is_not_shadowed_by_month_only_prefix() -> None:
    value, used = match_exact_format("2024/03/15")
    assert value == date(2024, 3, 15)
    assert used.name == "yyyy/MM/dd"


def test_day_bearing_patterns_come_before_month_only_patterns() -> None:
    names = [pattern.name for pattern in FORMAT_PATTERNS]
    assert names.index("yyyy/MM/dd") < names.index("yyyy/MM")
    assert names.index("yyyy年M月d日") < names.index("yyyy年M月")


def test_surrounding_whitespace_is_tolerated() -> None:
    assert parse_exact_format("  2024-03-15\t") == date(2024, 3, 15)


@pytest.mark.parametrize(
    "text",
    ["2024/13/01", "2024/00/01", "2024/02/30", "2024/03/32", "20241301", "２０２４/03/15", "24/03/15", "2024/03/15 extra"],
)
def test_impossible_or_foreign_input_is_rejected(text: str) -> None:
    assert match_exact_format(text) is None


def test_only_ascii_whitespace_is_stripped() -> None:
    assert match_exact_format("2024/03/15　") is None
    assert match_exact_format("　2024/03/15") is None
