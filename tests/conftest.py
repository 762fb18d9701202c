from datetime import date

import pytest

from academy.domain.attendance.entities import (
    AttendanceLogEntry,
    Course,
    CourseScheduleConfig,
    ResolvedDailySchedule,
)

# 2026-01-05(월) ~ 2026-01-16(금) 평일 10일
TEN_WEEKDAYS = [
    "20260105", "20260106", "20260107", "20260108", "20260109",
    "20260112", "20260113", "20260114", "20260115", "20260116",
]


def make_log(student_id="S1", name="김철수", day="20260105", code="01", status="출석",
             check_in="0900", check_out="1800"):
    return AttendanceLogEntry(
        student_id=student_id,
        student_name=name,
        date=day,
        status_code=code,
        status_name=status,
        check_in_time=check_in,
        check_out_time=check_out,
    )


def make_course(**overrides):
    fields = dict(
        id=1,
        name="파이썬 데이터 분석",
        course_code_id="AIG20250000001",
        round=1,
        start_date=date(2026, 1, 5),
        end_date=date(2026, 1, 16),
        start_time="09:00",
        end_time="18:00",
        lunch_start="12:00",
        lunch_end="13:00",
        total_hours=100,
        is_weekend=False,
        schedule_change=None,
    )
    fields.update(overrides)
    return Course(**fields)


@pytest.fixture
def day_schedule():
    """09:00~18:00, 점심 12:00~13:00 → 480분."""
    return ResolvedDailySchedule(
        date_key="20260105", start=540, end=1080, lunch_start=720, lunch_end=780, full_credit_minutes=480,
    )


@pytest.fixture
def course_config():
    return CourseScheduleConfig(
        default_start=540,
        default_end=1080,
        default_lunch_start=720,
        default_lunch_end=780,
        total_course_hours=100,
    )
