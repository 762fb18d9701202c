# apps/domains/attendance/views.py
#
# GET /api/v1/attendance/{course_id}/
# 인증은 DRF 기본 permission(IsAuthenticated)이 먼저 처리한다.

import logging

from django.conf import settings
from django.utils import timezone

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from academy.adapters.db.django.repositories_courses import DjangoCourseRepository
from academy.adapters.registry.hrd.client import HrdAttendanceRegistry
from academy.application.use_cases.attendance.compute_course_attendance import (
    DEFAULT_MAX_WORKERS,
    compute_course_attendance,
)
from academy.domain.attendance.errors import (
    AttendanceComputationCancelled,
    CourseNotFoundError,
    InvalidCourseConfigError,
)

from .serializers import CourseAttendanceSerializer

logger = logging.getLogger(__name__)


def build_registry():
    return HrdAttendanceRegistry.from_settings(settings)


class CourseAttendanceView(APIView):
    """과정 1건 출결 정산 결과."""

    def get(self, request, course_id):
        registry = build_registry()
        try:
            result = compute_course_attendance(
                DjangoCourseRepository(),
                registry,
                course_id,
                today=timezone.localdate(),
                max_workers=getattr(settings, "ATTENDANCE_FETCH_MAX_WORKERS", DEFAULT_MAX_WORKERS),
            )
        except CourseNotFoundError:
            return Response(
                {"detail": "Course not found"},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InvalidCourseConfigError as e:
            return Response(
                {"detail": str(e)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except AttendanceComputationCancelled:
            return Response(
                {"detail": "Attendance computation cancelled"},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        finally:
            registry.close()

        return Response(
            CourseAttendanceSerializer(result).data,
            status=status.HTTP_200_OK,
        )
