"""
학생 1명 × 날짜 1일 출결 분류 — 순수 파이썬

규칙은 위에서부터 평가하며 처음 맞는 규칙이 이긴다 (순서 변경 금지).

    1. prior_dropout      → blank (집계 제외)
    2. 로그 없음            → absent
    3. 상태코드 99         → dropout
    4. 상태코드 02 / 결석   → absent
    5. 출석인정 (공가 등)    → excused (전일 인정)
    6. 입/퇴실 시각 누락     → present-incomplete (결석과 동일하게 0분)
    7. 그 외              → present-complete (10분 유예 + 점심 공제)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from academy.domain.attendance.entities import (
    AttendanceLogEntry,
    DailyClassification,
    DayCategory,
    ResolvedDailySchedule,
)
from academy.domain.attendance.schedule import lunch_overlap
from academy.domain.attendance.timeutil import MISSING_TIME, format_registry_time, time_to_minutes

GRACE_MINUTES = 10

STATUS_DROPOUT = "99"
STATUS_ABSENT = "02"
STATUS_ABSENT_LABEL = "결석"
EXCUSED_STATUS_CODES = ("06", "07", "09")

# 셀 표시용 색상 (프론트 호환)
COLOR_BLANK = "#efefef"
COLOR_ABSENT = "#f4c7c3"
COLOR_DROPOUT = "#ea9999"
COLOR_EXCUSED = "#c9daf8"
COLOR_FULL = "#d9ead3"
COLOR_PARTIAL = "#fce8b2"

TEXT_DROPOUT = "중도탈락"
TEXT_FULL = "O"


@dataclass(frozen=True)
class DayContext:
    log: Optional[AttendanceLogEntry]
    schedule: ResolvedDailySchedule
    prior_dropout: bool = False

    @property
    def status_code(self) -> str:
        return str(self.log.status_code or "").strip() if self.log else ""

    @property
    def status_name(self) -> str:
        return str(self.log.status_name or "").strip() if self.log else ""

    @property
    def in_time(self) -> str:
        return format_registry_time(self.log.check_in_time) if self.log else MISSING_TIME

    @property
    def out_time(self) -> str:
        return format_registry_time(self.log.check_out_time) if self.log else MISSING_TIME


class ClassificationRule(NamedTuple):
    name: str
    matches: Callable[[DayContext], bool]
    classify: Callable[[DayContext], DailyClassification]


def _full_miss(ctx: DayContext, category: DayCategory, text: str) -> DailyClassification:
    full = ctx.schedule.full_credit_minutes
    return DailyClassification(
        category=category,
        net_minutes=0,
        uncompleted_minutes=full,
        display_text=text,
        display_color=COLOR_ABSENT,
    )


def _is_excused(ctx: DayContext) -> bool:
    code, name = ctx.status_code, ctx.status_name
    if code == "" and name != "" and name != STATUS_ABSENT_LABEL:
        return True
    return code in EXCUSED_STATUS_CODES


def compute_net_minutes(in_time: str, out_time: str, schedule: ResolvedDailySchedule) -> int:
    """
    입퇴실 시각 → 인정 분.
    - 입실 ≤ 시작+10분 → 시작 시각으로 인정
    - 퇴실 ≥ 종료-10분 → 종료 시각으로 인정
    - 인정 구간과 점심 구간의 겹침 공제
    - [0, full_credit] 로 clamp
    """
    actual_in = time_to_minutes(in_time)
    actual_out = time_to_minutes(out_time)

    recognized_in = schedule.start if actual_in <= schedule.start + GRACE_MINUTES else actual_in
    recognized_out = schedule.end if actual_out >= schedule.end - GRACE_MINUTES else actual_out

    net = (recognized_out - recognized_in) - lunch_overlap(
        recognized_in, recognized_out, schedule.lunch_start, schedule.lunch_end
    )
    return max(0, min(net, schedule.full_credit_minutes))


def _classify_present(ctx: DayContext) -> DailyClassification:
    full = ctx.schedule.full_credit_minutes
    net = compute_net_minutes(ctx.in_time, ctx.out_time, ctx.schedule)
    uncompleted = full - net
    if uncompleted == 0:
        text, color = TEXT_FULL, COLOR_FULL
    else:
        text, color = f"{ctx.in_time}\n{ctx.out_time}", COLOR_PARTIAL
    return DailyClassification(
        category=DayCategory.PRESENT_COMPLETE,
        net_minutes=net,
        uncompleted_minutes=uncompleted,
        display_text=text,
        display_color=color,
    )


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "prior_dropout",
        lambda ctx: ctx.prior_dropout,
        lambda ctx: DailyClassification(DayCategory.BLANK, display_color=COLOR_BLANK),
    ),
    ClassificationRule(
        "no_log",
        lambda ctx: ctx.log is None,
        lambda ctx: _full_miss(ctx, DayCategory.ABSENT, MISSING_TIME),
    ),
    ClassificationRule(
        "dropout",
        lambda ctx: ctx.status_code == STATUS_DROPOUT,
        lambda ctx: DailyClassification(
            DayCategory.DROPOUT, display_text=TEXT_DROPOUT, display_color=COLOR_DROPOUT
        ),
    ),
    ClassificationRule(
        "absent",
        lambda ctx: ctx.status_code == STATUS_ABSENT or ctx.status_name == STATUS_ABSENT_LABEL,
        lambda ctx: _full_miss(ctx, DayCategory.ABSENT, STATUS_ABSENT_LABEL),
    ),
    ClassificationRule(
        "excused",
        _is_excused,
        lambda ctx: DailyClassification(
            DayCategory.EXCUSED,
            net_minutes=ctx.schedule.full_credit_minutes,
            uncompleted_minutes=0,
            display_text=ctx.status_name,
            display_color=COLOR_EXCUSED,
        ),
    ),
    ClassificationRule(
        "incomplete_timestamps",
        lambda ctx: ctx.in_time == MISSING_TIME or ctx.out_time == MISSING_TIME,
        lambda ctx: _full_miss(ctx, DayCategory.PRESENT_INCOMPLETE, MISSING_TIME),
    ),
    ClassificationRule("present", lambda ctx: True, _classify_present),
)


def match_rule(ctx: DayContext, rules: tuple[ClassificationRule, ...] = RULES) -> ClassificationRule:
    for rule in rules:
        if rule.matches(ctx):
            return rule
    raise LookupError("no classification rule matched")  # 마지막 규칙이 catch-all


def classify_day(
    log: Optional[AttendanceLogEntry],
    schedule: ResolvedDailySchedule,
    prior_dropout: bool = False,
) -> DailyClassification:
    ctx = DayContext(log=log, schedule=schedule, prior_dropout=prior_dropout)
    return match_rule(ctx).classify(ctx)
