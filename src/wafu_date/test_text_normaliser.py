from __future__ import annotations

import pytest

from .text_normaliser import fold_width, normalise_date_text


def test_fold_width_lowercases_and_drops_periods() -> None:
    assert fold_width("Jan.") == "jan"
    assert fold_width("ＤＥＣ") == "dec"
    assert fold_width("１２月") == "12月"


def test_normalise_fullwidth_matches_halfwidth() -> None:
    assert normalise_date_text("２０２４／０３／１５") == "2024/03/15"


def test_normalise_strips_periods() -> None:
    assert normalise_date_text("R6.3.15") == "r6315"


def test_normalise_converts_kanji_numerals() -> None:
    assert normalise_date_text("令和六年三月十五日") == "令和6年3月15日"
    assert normalise_date_text("平成三十一年四月三十日") == "平成31年4月30日"


@pytest.mark.parametrize("text", ["2024/03/15", "invalid", "令和6年3月15日", "r6-3-15"])
def test_normalise_is_idempotent(text: str) -> None:
    once = normalise_date_text(text)
    assert normalise_date_text(once) == once


def test_normalise_ascii_is_noop() -> None:
    assert normalise_date_text("2024/03/15") == "2024/03/15"
    assert normalise_date_text("") == ""
