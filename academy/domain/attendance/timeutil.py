"""
시간 문자열 ↔ 분 변환 유틸 (외부 라이브러리 없음)

잘못된 입력은 예외 대신 0 / "-" 로 떨어진다.
"""
from __future__ import annotations

import math
from datetime import date
from typing import Optional

MISSING_TIME = "-"


def round_half_up(value: float) -> int:
    """x.5는 +방향으로 올림 (Python round()의 banker's rounding 회피)."""
    return int(math.floor(value + 0.5))


def time_to_minutes(value: Optional[str]) -> int:
    """'HH:MM' → 자정 기준 분. 비었거나 ':' 없거나 숫자가 아니면 0."""
    if not value or ":" not in value:
        return 0
    parts = value.strip().split(":")
    try:
        return int(parts[0]) * 60 + int(parts[1])
    except (ValueError, IndexError):
        return 0


def minutes_to_signed_hhmm(total_minutes: float) -> str:
    """분 → '[-]HH:MM' (표시 전용)."""
    rounded = round_half_up(total_minutes)
    sign = "-" if rounded < 0 else ""
    hours, minutes = divmod(abs(rounded), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_registry_time(raw) -> str:
    """
    registry 입실/퇴실 시각 정규화.
    - '09:05' / '09:05:33' → '09:05'
    - '0905' / '090533'   → '09:05'
    - None / 4자 미만       → '-'
    """
    if raw is None or len(str(raw)) < 4:
        return MISSING_TIME
    s = str(raw).strip()
    if ":" in s:
        return s[:5]
    return f"{s[:2]}:{s[2:4]}"


def to_date_key(value) -> str:
    """date / 'YYYY-MM-DD' / 'YYYYMMDD' → 'YYYYMMDD'."""
    if isinstance(value, date):
        return value.strftime("%Y%m%d")
    return "".join(ch for ch in str(value or "") if ch.isdigit())


def short_date_label(date_key: str) -> str:
    """'20260115' → '01/15'."""
    return f"{date_key[4:6]}/{date_key[6:8]}"


def month_list(start_key: str, end_key: str) -> list[str]:
    """시작일~종료일이 걸치는 모든 'YYYYMM' (양끝 포함, 오름차순)."""
    year, month = int(start_key[:4]), int(start_key[4:6])
    end_year, end_month = int(end_key[:4]), int(end_key[4:6])
    months: list[str] = []
    while (year, month) <= (end_year, end_month):
        months.append(f"{year:04d}{month:02d}")
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return months
