"""
외부 출결 registry 포트 (requests 미사용)
"""
from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from academy.domain.attendance.entities import AttendanceLogEntry


class AttendanceRegistryPort(Protocol):
    """(과정코드, 회차, 월) 단위 일별 출결 로그 조회."""

    @abstractmethod
    def fetch_month(self, course_code: str, round_no: str, year_month: str) -> list[AttendanceLogEntry]:
        """
        year_month: 'YYYYMM'.
        HTML/빈 응답이면 빈 리스트.
        네트워크 오류/깨진 응답은 RegistryFetchError 등 예외로 올린다
        (use case가 월 단위로 격리하고 failed_months에 기록).
        """
        ...
