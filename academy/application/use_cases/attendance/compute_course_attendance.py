"""
과정 출결 정산 Use Case — 도메인/포트만 사용 (Django/requests 미사용)

흐름:
  과정 조회 → 대상 기간 [시작일, min(종료일, 오늘)] → 월별 registry 조회 (병렬, 월 단위 격리)
  → (날짜, 학생) 인덱스 → 학생별 fold → 요약 집계

월 하나의 조회 실패는 "그 달 기록 0건"으로 취급하고 WARNING 로그만 남긴다.
registry 장애 시 결석이 과다 집계될 수 있으므로 failed_months를 결과에 함께 싣는다.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from academy.application.ports.registry import AttendanceRegistryPort
from academy.application.ports.repositories import CourseRepository
from academy.domain.attendance.aggregator import aggregate_student, to_student_row
from academy.domain.attendance.entities import (
    AttendanceLogEntry,
    AttendanceSummary,
    CompletionThresholds,
    Course,
    CourseAttendanceResult,
    Verdict,
)
from academy.domain.attendance.errors import (
    AttendanceComputationCancelled,
    CourseNotFoundError,
    InvalidCourseConfigError,
)
from academy.domain.attendance.exception_calendar import parse_exceptions
from academy.domain.attendance.schedule import resolve_days
from academy.domain.attendance.timeutil import month_list, short_date_label, to_date_key

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


@dataclass
class FetchedLogs:
    logs: list[AttendanceLogEntry] = field(default_factory=list)
    failed_months: list[str] = field(default_factory=list)


def effective_window(course: Course, today: date) -> tuple[str, str]:
    """(시작일, min(종료일, 오늘)) — 둘 다 YYYYMMDD."""
    if course.start_date is None or course.end_date is None:
        raise InvalidCourseConfigError(f"Course {course.id} has no start/end date")
    start_key = to_date_key(course.start_date)
    end_key = min(to_date_key(course.end_date), to_date_key(today))
    return start_key, end_key


def _raise_if_cancelled(cancel_event: Optional[threading.Event], course: Course) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise AttendanceComputationCancelled(f"Attendance computation cancelled | course={course.id}")


def fetch_course_logs(
    registry: AttendanceRegistryPort,
    course: Course,
    today: date,
    *,
    cancel_event: Optional[threading.Event] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> FetchedLogs:
    """
    대상 기간이 걸친 모든 월을 bounded fan-out으로 조회.
    - 월 하나 실패 → 빈 결과 + failed_months 기록 (다른 월은 계속)
    - cancel_event set → 시작 안 한 월은 취소하고 AttendanceComputationCancelled
    """
    start_key, end_key = effective_window(course, today)
    if end_key < start_key:
        return FetchedLogs()

    months = month_list(start_key, end_key)
    round_no = str(course.round or 1)
    by_month: dict[str, list[AttendanceLogEntry]] = {}
    failed: list[str] = []

    _raise_if_cancelled(cancel_event, course)

    def fetch_one(month: str) -> list[AttendanceLogEntry]:
        if cancel_event is not None and cancel_event.is_set():
            return []
        return registry.fetch_month(course.course_code_id, round_no, month)

    pool = ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(months))),
        thread_name_prefix="attendance-fetch",
    )
    try:
        pending = {pool.submit(fetch_one, month): month for month in months}
        while pending:
            done, _ = wait(pending, timeout=0.5, return_when=FIRST_COMPLETED)
            for future in done:
                month = pending.pop(future)
                try:
                    by_month[month] = list(future.result())
                    logger.debug(
                        "registry month fetched | course=%s round=%s month=%s count=%d",
                        course.course_code_id, round_no, month, len(by_month[month]),
                    )
                except Exception as e:
                    by_month[month] = []
                    failed.append(month)
                    logger.warning(
                        "registry month fetch failed, treated as empty | course=%s round=%s month=%s error=%s",
                        course.course_code_id, round_no, month, e,
                    )
            _raise_if_cancelled(cancel_event, course)
    finally:
        # 취소 시 진행 중인 요청은 기다리지 않는다
        cancelled = cancel_event is not None and cancel_event.is_set()
        pool.shutdown(wait=not cancelled, cancel_futures=cancelled)

    logs: list[AttendanceLogEntry] = []
    for month in months:
        logs.extend(by_month.get(month, []))
    return FetchedLogs(logs=logs, failed_months=sorted(failed))


def _index_students(
    logs: Iterable[AttendanceLogEntry],
) -> tuple[list[str], dict[str, str], dict[str, dict[str, AttendanceLogEntry]]]:
    """(정렬된 날짜, 학생명, 학생별 날짜→로그). 같은 날짜 중복 시 뒤 로그가 이긴다."""
    date_set: set[str] = set()
    names: dict[str, str] = {}
    logs_by_student: dict[str, dict[str, AttendanceLogEntry]] = {}
    for log in logs:
        date_set.add(log.date)
        names.setdefault(log.student_id, log.student_name)
        logs_by_student.setdefault(log.student_id, {})[log.date] = log
    return sorted(date_set), names, logs_by_student


def compute_attendance(
    course: Course,
    raw_logs: Iterable[AttendanceLogEntry],
    today: date,
    *,
    failed_months: Optional[list[str]] = None,
) -> CourseAttendanceResult:
    """I/O 없음. 이미 받아 온 로그로 과정 전체 정산."""
    start_key, end_key = effective_window(course, today)
    valid_logs = [log for log in raw_logs if start_key <= log.date <= end_key]
    dates, names, logs_by_student = _index_students(valid_logs)

    config = course.schedule_config()
    schedules = resolve_days(dates, config, parse_exceptions(config.schedule_exceptions_raw))
    thresholds = CompletionThresholds.for_hours(config.total_course_hours)

    student_ids = sorted(names, key=lambda sid: (names[sid], sid))
    rows = [
        to_student_row(
            no,
            aggregate_student(sid, names[sid], dates, logs_by_student[sid], schedules, thresholds),
        )
        for no, sid in enumerate(student_ids, start=1)
    ]

    summary = AttendanceSummary(
        total=len(rows),
        completed=sum(1 for r in rows if r.verdict == Verdict.COMPLETED),
        failed_or_dropped=sum(1 for r in rows if r.verdict in (Verdict.FAILED, Verdict.DROPPED_OUT)),
        at_risk=sum(1 for r in rows if r.verdict == Verdict.AT_RISK),
    )
    return CourseAttendanceResult(
        course=course,
        dates=[short_date_label(d) for d in dates],
        raw_dates=dates,
        students=rows,
        summary=summary,
        thresholds=thresholds,
        failed_months=list(failed_months or []),
    )


def compute_course_attendance(
    courses: CourseRepository,
    registry: AttendanceRegistryPort,
    course_id: int,
    *,
    today: Optional[date] = None,
    cancel_event: Optional[threading.Event] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> CourseAttendanceResult:
    """
    과정 1건 출결 정산.
    Raises: CourseNotFoundError, InvalidCourseConfigError, AttendanceComputationCancelled
    """
    if today is None:
        today = date.today()

    course = courses.get_course(course_id)
    if course is None:
        raise CourseNotFoundError(course_id)

    logger.info(
        "Attendance compute start | course=%s code=%s round=%s today=%s",
        course.id, course.course_code_id, course.round, today,
    )
    fetched = fetch_course_logs(
        registry, course, today, cancel_event=cancel_event, max_workers=max_workers,
    )
    result = compute_attendance(course, fetched.logs, today, failed_months=fetched.failed_months)
    logger.info(
        "Attendance computed | course=%s logs=%d dates=%d students=%d failed_months=%s",
        course.id, len(fetched.logs), len(result.raw_dates), result.summary.total,
        ",".join(result.failed_months) or "-",
    )
    return result
