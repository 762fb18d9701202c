"""
학생별 출결 누적 + 최종 판정 — 순수 파이썬

날짜 오름차순 left fold. 중도탈락(99)을 만나면 그 이후 날짜는 blank 처리되어
출석/결손 어느 쪽에도 더해지지 않는다 (결석으로 치지 않음).
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import reduce
from typing import Mapping, Sequence

from academy.domain.attendance.classifier import COLOR_DROPOUT, COLOR_FULL, COLOR_PARTIAL, classify_day
from academy.domain.attendance.entities import (
    ABSENT_CATEGORIES,
    AT_RISK_THRESHOLD_MINUTES,
    ATTEND_CATEGORIES,
    AttendanceLogEntry,
    CompletionThresholds,
    DailyClassification,
    DayCategory,
    ResolvedDailySchedule,
    StudentAggregate,
    StudentRow,
    Verdict,
)
from academy.domain.attendance.timeutil import minutes_to_signed_hhmm

TEXT_COMPLETED = "충족(수료)"
TEXT_DROPPED_OUT = "중도탈락"
TEXT_EXPELLED = "제적"
TEXT_NOT_APPLICABLE = "-"

ROW_COLORS = {
    Verdict.DROPPED_OUT: COLOR_DROPOUT,
    Verdict.COMPLETED: COLOR_FULL,
    Verdict.FAILED: COLOR_DROPOUT,
    Verdict.AT_RISK: COLOR_PARTIAL,
}


@dataclass(frozen=True)
class StudentAccumulator:
    attended_minutes: int = 0
    uncompleted_minutes: int = 0
    attend_count: int = 0
    absent_count: int = 0
    dropped_out: bool = False
    days: tuple[tuple[str, DailyClassification], ...] = field(default_factory=tuple)

    def add(self, date_key: str, day: DailyClassification) -> "StudentAccumulator":
        days = self.days + ((date_key, day),)
        if day.category == DayCategory.DROPOUT:
            return replace(self, dropped_out=True, days=days)
        if not day.contributes:
            return replace(self, days=days)
        return replace(
            self,
            attended_minutes=self.attended_minutes + day.net_minutes,
            uncompleted_minutes=self.uncompleted_minutes + day.uncompleted_minutes,
            attend_count=self.attend_count + (day.category in ATTEND_CATEGORIES),
            absent_count=self.absent_count + (day.category in ABSENT_CATEGORIES),
            days=days,
        )


def decide_verdict(
    attended_minutes: int,
    uncompleted_minutes: int,
    dropped_out: bool,
    thresholds: CompletionThresholds,
) -> Verdict:
    """수료 > 중도탈락 > 제적 > 경고 > 진행중 순."""
    remaining_to_complete = thresholds.target_completion_minutes - attended_minutes
    remaining_absence = thresholds.max_allowable_absence_minutes - uncompleted_minutes
    if remaining_to_complete <= 0:
        return Verdict.COMPLETED
    if dropped_out:
        return Verdict.DROPPED_OUT
    if remaining_absence < 0:
        return Verdict.FAILED
    if remaining_absence < AT_RISK_THRESHOLD_MINUTES:
        return Verdict.AT_RISK
    return Verdict.IN_PROGRESS


def aggregate_student(
    student_id: str,
    student_name: str,
    dates: Sequence[str],
    logs_by_date: Mapping[str, AttendanceLogEntry],
    schedules: Mapping[str, ResolvedDailySchedule],
    thresholds: CompletionThresholds,
) -> StudentAggregate:
    """dates는 오름차순이어야 한다 (중도탈락 이후 차단이 순서에 의존)."""

    def step(acc: StudentAccumulator, date_key: str) -> StudentAccumulator:
        day = classify_day(logs_by_date.get(date_key), schedules[date_key], prior_dropout=acc.dropped_out)
        return acc.add(date_key, day)

    acc = reduce(step, sorted(dates), StudentAccumulator())
    return StudentAggregate(
        student_id=student_id,
        student_name=student_name,
        attended_minutes=acc.attended_minutes,
        uncompleted_minutes=acc.uncompleted_minutes,
        attend_count=acc.attend_count,
        absent_count=acc.absent_count,
        dropped_out=acc.dropped_out,
        days=dict(acc.days),
        verdict=decide_verdict(acc.attended_minutes, acc.uncompleted_minutes, acc.dropped_out, thresholds),
        remaining_to_complete_minutes=thresholds.target_completion_minutes - acc.attended_minutes,
        remaining_absence_minutes=thresholds.max_allowable_absence_minutes - acc.uncompleted_minutes,
    )


def to_student_row(no: int, aggregate: StudentAggregate) -> StudentRow:
    verdict = aggregate.verdict

    if verdict == Verdict.COMPLETED:
        remaining_complete = TEXT_COMPLETED
    elif verdict == Verdict.DROPPED_OUT:
        remaining_complete = TEXT_DROPPED_OUT
    else:
        remaining_complete = minutes_to_signed_hhmm(aggregate.remaining_to_complete_minutes)

    if verdict == Verdict.DROPPED_OUT:
        remaining_absence = TEXT_NOT_APPLICABLE
    elif verdict == Verdict.FAILED:
        remaining_absence = TEXT_EXPELLED
    else:
        remaining_absence = minutes_to_signed_hhmm(aggregate.remaining_absence_minutes)

    return StudentRow(
        no=no,
        student_id=aggregate.student_id,
        name=aggregate.student_name,
        daily=dict(aggregate.days),
        remaining_complete=remaining_complete,
        uncompleted=minutes_to_signed_hhmm(aggregate.uncompleted_minutes),
        remaining_absence=remaining_absence,
        attend_count=aggregate.attend_count,
        absent_count=aggregate.absent_count,
        row_color=ROW_COLORS.get(verdict),
        is_dropped_out=aggregate.dropped_out,
        verdict=verdict,
        attended_minutes=aggregate.attended_minutes,
        uncompleted_minutes=aggregate.uncompleted_minutes,
    )