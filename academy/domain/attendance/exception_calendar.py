"""
특수일정(schedule_change) 파서 — 순수 파이썬

과정 레코드의 자유 텍스트 한 칸에 날짜별 수업시간 override가 들어 있다.

    20241005=09:00~18:00(12:00~13:00), 20241006=09:00~13:00
    <date8>=<start>~<end>[(<lunch_start>~<lunch_end>)]

- 구분자: ',' 또는 줄바꿈 (연속 허용)
- 괄호 없음 → "그날은 점심 없음" (has_explicit_lunch=True, 0폭 점심).
  과정 기본 점심을 물려받는 것이 아니다.
- 괄호 있음 → 수업/점심 둘 다 명시
- 해석 불가 항목은 건너뛰고 나머지는 그대로 적용
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from academy.domain.attendance.entities import ExceptionEntry
from academy.domain.attendance.timeutil import time_to_minutes, to_date_key
from academy.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

_SEGMENT_SPLIT = re.compile(r"[\n,]+")

SKIPPED = "skipped"


def _parse_range(text: str) -> Optional[tuple[int, int]]:
    bounds = text.split("~")
    if len(bounds) != 2:
        return None
    return time_to_minutes(bounds[0].strip()), time_to_minutes(bounds[1].strip())


def parse_exception_segment(segment: str) -> Result[ExceptionEntry]:
    """항목 1개 → Ok(ExceptionEntry) 또는 Err(사유, code="skipped")."""
    pair = segment.split("=")
    if len(pair) != 2:
        return Err("expected <date>=<time range>", code=SKIPPED, source=segment)

    date_key = to_date_key(pair[0].strip())
    if len(date_key) != 8:
        return Err("date must be 8 digits (YYYYMMDD)", code=SKIPPED, source=segment)

    content = pair[1].strip()
    lunch_start = lunch_end = 0

    if "(" in content and ")" in content:
        class_part, lunch_part = content.split("(", 1)
        class_range = _parse_range(class_part.strip())
        lunch_range = _parse_range(lunch_part.replace(")", "").strip())
        has_explicit_lunch = lunch_range is not None
        if lunch_range is not None:
            lunch_start, lunch_end = lunch_range
    else:
        class_range = _parse_range(content)
        # 괄호 없는 항목 = 점심 없음으로 명시
        has_explicit_lunch = True

    if class_range is None:
        return Err("class time must be <start>~<end>", code=SKIPPED, source=segment)

    start, end = class_range
    if start <= 0 or end <= 0:
        return Err("class time is not a valid HH:MM range", code=SKIPPED, source=segment)

    return Ok(
        ExceptionEntry(
            date_key=date_key,
            start=start,
            end=end,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
            has_explicit_lunch=has_explicit_lunch,
        )
    )


def parse_exception_segments(raw: Optional[str]) -> list[Result[ExceptionEntry]]:
    """빈 조각은 결과에 포함하지 않는다."""
    if not raw:
        return []
    return [
        parse_exception_segment(segment.strip())
        for segment in _SEGMENT_SPLIT.split(raw)
        if segment.strip()
    ]


def build_exception_map(results: Iterable[Result[ExceptionEntry]]) -> dict[str, ExceptionEntry]:
    """같은 날짜가 여러 번 나오면 뒤의 항목이 이긴다."""
    exception_map: dict[str, ExceptionEntry] = {}
    for result in results:
        if isinstance(result, Ok):
            exception_map[result.value.date_key] = result.value
        else:
            logger.debug("schedule exception skipped | reason=%s segment=%r", result.message, result.source)
    return exception_map


def parse_exceptions(raw: Optional[str]) -> dict[str, ExceptionEntry]:
    """특수일정 원문 → {YYYYMMDD: ExceptionEntry}. 절대 예외를 던지지 않는다."""
    return build_exception_map(parse_exception_segments(raw))
