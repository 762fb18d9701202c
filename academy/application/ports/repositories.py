"""
Repository 포트 — 과정 레코드 조회 (Django/ORM 미사용)
"""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional, Protocol

from academy.domain.attendance.entities import Course


class CourseRepository(Protocol):
    """과정 영속화 조회 전용."""

    @abstractmethod
    def get_course(self, course_id: int) -> Optional[Course]:
        """course_id로 조회. 없으면 None."""
        ...
