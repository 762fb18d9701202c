# apps/domains/attendance/urls.py
from django.urls import path

from .views import CourseAttendanceView

urlpatterns = [
    path("<int:course_id>/", CourseAttendanceView.as_view(), name="course-attendance"),
]
