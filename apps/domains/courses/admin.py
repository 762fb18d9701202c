# domains/courses/admin.py

from django.contrib import admin
from .models import Course


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "course_name",
        "course_code_id",
        "round",
        "is_weekend",
        "start_date",
        "end_date",
        "total_hours",
    )
    list_display_links = ("id", "course_name")
    list_filter = ("is_weekend",)
    search_fields = ("course_name", "course_code_id")
    ordering = ("-start_date",)
