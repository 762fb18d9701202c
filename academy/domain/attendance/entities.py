"""
출결 정산 도메인 엔티티 — 순수 파이썬 (Django/ORM/requests 미사용)

시간 값은 모두 "자정 기준 분(minutes since midnight)" 정수.
날짜 키는 항상 8자리 YYYYMMDD 문자열.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from academy.domain.attendance.timeutil import round_half_up, time_to_minutes

# 수료 기준: 총 시간의 80% 출석, 결손 허용 20%
COMPLETION_RATIO = 0.8
ABSENCE_RATIO = 0.2

# 남은 결손 허용 시간이 이 값 미만이면 경고
AT_RISK_THRESHOLD_MINUTES = 240

DEFAULT_START_TIME = "19:00"
DEFAULT_END_TIME = "22:00"


class DayCategory(str, Enum):
    """학생 1명 × 날짜 1일 분류 결과."""
    BLANK = "blank"  # 중도탈락 이후 (집계 제외)
    DROPOUT = "dropout"
    ABSENT = "absent"
    EXCUSED = "excused"
    PRESENT_COMPLETE = "present-complete"
    PRESENT_INCOMPLETE = "present-incomplete"


# 출석 일수로 세는 분류 / 결석 일수로 세는 분류
ATTEND_CATEGORIES = (DayCategory.EXCUSED, DayCategory.PRESENT_COMPLETE)
ABSENT_CATEGORIES = (DayCategory.ABSENT, DayCategory.PRESENT_INCOMPLETE)


class Verdict(str, Enum):
    COMPLETED = "completed"
    DROPPED_OUT = "dropped-out"
    FAILED = "failed"
    AT_RISK = "at-risk"
    IN_PROGRESS = "in-progress"


@dataclass(frozen=True)
class CourseScheduleConfig:
    """과정 기본 시간표 + 특수일정 원문. 계산 중 불변."""
    default_start: int
    default_end: int
    total_course_hours: float
    default_lunch_start: int = 0
    default_lunch_end: int = 0
    is_weekend_course: bool = False
    schedule_exceptions_raw: Optional[str] = None


@dataclass(frozen=True)
class ExceptionEntry:
    """특수일정 1건 (날짜별 수업/점심 시간 override)."""
    date_key: str
    start: int
    end: int
    lunch_start: int = 0
    lunch_end: int = 0
    has_explicit_lunch: bool = True


@dataclass(frozen=True)
class ResolvedDailySchedule:
    date_key: str
    start: int
    end: int
    lunch_start: int
    lunch_end: int
    full_credit_minutes: int


@dataclass(frozen=True)
class AttendanceLogEntry:
    """외부 출결 registry의 일별 로그 1건 (원문 문자열 유지)."""
    student_id: str
    student_name: str
    date: str
    status_code: str = ""
    status_name: str = ""
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None


@dataclass(frozen=True)
class DailyClassification:
    category: DayCategory
    net_minutes: int = 0
    uncompleted_minutes: int = 0
    display_text: str = ""
    display_color: str = ""

    @property
    def contributes(self) -> bool:
        """합계에 반영되는 날인지 (중도탈락 당일/이후는 False)."""
        return self.category not in (DayCategory.BLANK, DayCategory.DROPOUT)


@dataclass(frozen=True)
class CompletionThresholds:
    target_completion_minutes: int
    max_allowable_absence_minutes: int

    @classmethod
    def for_hours(cls, total_course_hours: float) -> "CompletionThresholds":
        total_minutes = (total_course_hours or 0) * 60
        return cls(
            target_completion_minutes=round_half_up(total_minutes * COMPLETION_RATIO),
            max_allowable_absence_minutes=round_half_up(total_minutes * ABSENCE_RATIO),
        )


@dataclass
class StudentAggregate:
    student_id: str
    student_name: str
    attended_minutes: int = 0
    uncompleted_minutes: int = 0
    attend_count: int = 0
    absent_count: int = 0
    dropped_out: bool = False
    days: dict[str, DailyClassification] = field(default_factory=dict)
    verdict: Verdict = Verdict.IN_PROGRESS
    remaining_to_complete_minutes: int = 0
    remaining_absence_minutes: int = 0


@dataclass(frozen=True)
class Course:
    """영속 계층에서 읽어 온 과정 레코드 (출결 정산에 필요한 필드만)."""
    id: int
    name: str
    course_code_id: str
    start_date: Optional[date]
    end_date: Optional[date]
    round: int = 1
    start_time: str = ""
    end_time: str = ""
    lunch_start: str = ""
    lunch_end: str = ""
    total_hours: float = 0
    is_weekend: bool = False
    schedule_change: Optional[str] = None

    def schedule_config(self) -> CourseScheduleConfig:
        return CourseScheduleConfig(
            default_start=time_to_minutes(self.start_time or DEFAULT_START_TIME),
            default_end=time_to_minutes(self.end_time or DEFAULT_END_TIME),
            default_lunch_start=time_to_minutes(self.lunch_start or ""),
            default_lunch_end=time_to_minutes(self.lunch_end or ""),
            total_course_hours=self.total_hours or 0,
            is_weekend_course=self.is_weekend,
            schedule_exceptions_raw=self.schedule_change,
        )


@dataclass(frozen=True)
class StudentRow:
    """표시 계층용 학생 행."""
    no: int
    student_id: str
    name: str
    daily: dict[str, DailyClassification]
    remaining_complete: str
    uncompleted: str
    remaining_absence: str
    attend_count: int
    absent_count: int
    row_color: Optional[str]
    is_dropped_out: bool
    verdict: Verdict
    attended_minutes: int
    uncompleted_minutes: int


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    completed: int
    failed_or_dropped: int
    at_risk: int


@dataclass(frozen=True)
class CourseAttendanceResult:
    course: Course
    dates: list[str]
    raw_dates: list[str]
    students: list[StudentRow]
    summary: AttendanceSummary
    thresholds: CompletionThresholds
    failed_months: list[str] = field(default_factory=list)
