"""
출결 정산 도메인 오류 — 순수 파이썬
"""
from __future__ import annotations


class AttendanceDomainError(Exception):
    """출결 정산 규칙 위반 등."""
    pass


class CourseNotFoundError(AttendanceDomainError):
    """과정이 DB에 없음."""

    def __init__(self, course_id) -> None:
        super().__init__(f"Course not found: {course_id}")
        self.course_id = course_id


class InvalidCourseConfigError(AttendanceDomainError):
    """시작일/종료일 누락 등 정산 불가능한 과정 설정."""
    pass


class AttendanceComputationCancelled(AttendanceDomainError):
    """호출자가 취소 신호를 보냄 (남은 월별 조회 중단)."""
    pass


class RegistryFetchError(AttendanceDomainError):
    """외부 registry 월별 조회 실패 (네트워크 오류 / 깨진 응답)."""

    def __init__(self, course_code, round_no, year_month, reason) -> None:
        super().__init__(
            f"Registry fetch failed: course={course_code} round={round_no} month={year_month} ({reason})"
        )
        self.course_code = course_code
        self.round_no = round_no
        self.year_month = year_month
