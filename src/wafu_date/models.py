from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .settings import settings


def _check_text(value: str) -> str:
    if not value.strip():
        raise ValueError("日付文字列が空です。内容を入力してください。")
    if len(value) > settings.max_input_characters:
        raise ValueError(f"日付文字列が長すぎます (最大{settings.max_input_characters}文字)")
    return value


class ParseDateRequest(BaseModel):
    text: str = Field(..., description="解析する日付文字列 (例: 令和6年3月15日, 2024/03/15, 弥生)")
    today: Optional[date] = Field(
        default=None,
        description="年度判定・年の省略時に基準とする日付。省略時はサーバーの今日の日付",
    )

    @field_validator("text")
    @classmethod
    def ensure_text(cls, value: str) -> str:
        return _check_text(value)


class ParseDateResult(BaseModel):
    """1件の解析結果。"""

    input: str = Field(..., description="入力された文字列")
    success: bool = Field(..., description="日付として解釈できたかどうか")
    date_iso: Optional[str] = Field(
        default=None,
        description="ISO-8601 形式の解析結果 (解析できなかった場合は null)",
    )
    stage: Optional[str] = Field(
        default=None,
        description="解析に成功した段階 (fiscal_month / exact_format / era_calendar)",
    )
    pattern: Optional[str] = Field(default=None, description="一致した固定フォーマット (exact_format のみ)")


class ParseDateResponse(ParseDateResult):
    today: date = Field(..., description="解析に使用した基準日")


class BatchParseRequest(BaseModel):
    texts: List[str] = Field(..., min_length=1, description="解析する日付文字列の一覧")
    today: Optional[date] = Field(default=None, description="全件で共通に使用する基準日")

    @field_validator("texts")
    @classmethod
    def ensure_texts(cls, value: List[str]) -> List[str]:
        if len(value) > settings.max_batch_size:
            raise ValueError(f"件数が上限を超えています (最大{settings.max_batch_size}件)")
        return [_check_text(text) for text in value]


class BatchParseResponse(BaseModel):
    results: List[ParseDateResult] = Field(..., description="入力順に並んだ解析結果")
    total: int = Field(..., description="入力件数")
    parsed: int = Field(..., description="日付として解釈できた件数")
    today: date = Field(..., description="解析に使用した基準日")
    generated_at: datetime = Field(..., description="レスポンス生成日時 (UTC)")


class MonthRangeResponse(BaseModel):
    input: str
    date_iso: str = Field(..., description="解析された日付 (ISO-8601)")
    first_date: date = Field(..., description="月初")
    end_date: date = Field(..., description="月末")
