"""
날짜별 기준 시간표 결정 + 점심 공제 계산 — 순수 파이썬
"""
from __future__ import annotations

from typing import Mapping

from academy.domain.attendance.entities import (
    CourseScheduleConfig,
    ExceptionEntry,
    ResolvedDailySchedule,
)


def lunch_overlap(start: int, end: int, lunch_start: int, lunch_end: int) -> int:
    """[start, end] 와 점심 구간이 겹치는 분. 점심이 없거나 뒤집혀 있으면 0."""
    if lunch_start <= 0 or lunch_end <= lunch_start:
        return 0
    return max(0, min(end, lunch_end) - max(start, lunch_start))


def resolve_day(
    date_key: str,
    config: CourseScheduleConfig,
    exception_map: Mapping[str, ExceptionEntry],
) -> ResolvedDailySchedule:
    start, end = config.default_start, config.default_end
    lunch_start, lunch_end = config.default_lunch_start, config.default_lunch_end

    exception = exception_map.get(date_key)
    if exception is not None:
        start, end = exception.start, exception.end
        if exception.has_explicit_lunch:
            lunch_start, lunch_end = exception.lunch_start, exception.lunch_end

    full_credit = (end - start) - lunch_overlap(start, end, lunch_start, lunch_end)
    return ResolvedDailySchedule(
        date_key=date_key,
        start=start,
        end=end,
        lunch_start=lunch_start,
        lunch_end=lunch_end,
        full_credit_minutes=max(0, full_credit),
    )


def resolve_days(
    date_keys,
    config: CourseScheduleConfig,
    exception_map: Mapping[str, ExceptionEntry],
) -> dict[str, ResolvedDailySchedule]:
    return {key: resolve_day(key, config, exception_map) for key in date_keys}
