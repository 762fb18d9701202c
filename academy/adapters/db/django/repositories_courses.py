"""
Course Repository — CourseRepository 포트 구현.
ORM 접근은 메서드 내부에서만 lazy import (도메인/유스케이스는 Django를 모른다).
"""
from __future__ import annotations

from typing import Any, Optional

from academy.domain.attendance.entities import Course

WEEKEND = "WEEKEND"


def course_from_model(obj: Any) -> Course:
    """apps.domains.courses.models.Course row → 도메인 Course."""
    return Course(
        id=obj.id,
        name=obj.course_name,
        course_code_id=str(obj.course_code_id or ""),
        round=obj.round or 1,
        start_date=obj.start_date,
        end_date=obj.end_date,
        start_time=obj.start_time or "",
        end_time=obj.end_time or "",
        lunch_start=obj.lunch_start or "",
        lunch_end=obj.lunch_end or "",
        total_hours=obj.total_hours or 0,
        is_weekend=obj.is_weekend == WEEKEND,
        schedule_change=obj.schedule_change or None,
    )


def course_get(course_id) -> Optional[Any]:
    from apps.domains.courses.models import Course as CourseModel
    return CourseModel.objects.filter(id=course_id).first()


class DjangoCourseRepository:
    """CourseRepository 구현 (읽기 전용)."""

    def get_course(self, course_id: int) -> Optional[Course]:
        obj = course_get(course_id)
        if obj is None:
            return None
        return course_from_model(obj)
