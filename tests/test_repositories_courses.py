from datetime import date
from types import SimpleNamespace

import pytest

from academy.adapters.db.django.repositories_courses import DjangoCourseRepository, course_from_model


def course_row(**overrides):
    fields = dict(
        id=7,
        course_name="주말 웹개발",
        course_code_id="AIG20250000002",
        round=None,
        start_date=date(2026, 1, 3),
        end_date=date(2026, 3, 29),
        start_time="09:00",
        end_time="18:00",
        lunch_start="",
        lunch_end="",
        total_hours=None,
        is_weekend="WEEKEND",
        schedule_change="",
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestCourseFromModel:
    def test_defaults(self):
        course = course_from_model(course_row())

        assert course.id == 7
        assert course.name == "주말 웹개발"
        assert course.round == 1
        assert course.total_hours == 0
        assert course.is_weekend is True
        assert course.schedule_change is None

    def test_weekday(self):
        course = course_from_model(course_row(is_weekend="WEEKDAY", round=2, schedule_change="20260110=09:00~13:00"))

        assert course.is_weekend is False
        assert course.round == 2
        assert course.schedule_change == "20260110=09:00~13:00"


@pytest.mark.django_db
class TestDjangoCourseRepository:
    def test_get_course(self):
        from apps.domains.courses.models import Course as CourseModel

        row = CourseModel.objects.create(
            course_name="파이썬 데이터 분석",
            course_code_id="AIG20250000001",
            round=3,
            start_date=date(2026, 1, 5),
            end_date=date(2026, 1, 16),
            start_time="09:00",
            end_time="18:00",
            lunch_start="12:00",
            lunch_end="13:00",
            total_hours=100,
        )

        course = DjangoCourseRepository().get_course(row.id)

        assert course.course_code_id == "AIG20250000001"
        assert course.round == 3
        assert course.is_weekend is False
        assert course.schedule_config().default_lunch_start == 720

    def test_missing_course(self):
        assert DjangoCourseRepository().get_course(9999) is None
