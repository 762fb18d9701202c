from django.db import models

from apps.api.common.models import TimestampModel


# ========================================================
# Course
# ========================================================

class Course(TimestampModel):
    """
    훈련 과정 1회차.
    출결 정산은 시간표/총시간/특수일정 필드만 읽는다.
    """

    class DayType(models.TextChoices):
        WEEKDAY = "WEEKDAY", "평일"
        WEEKEND = "WEEKEND", "주말"

    course_name = models.CharField(max_length=255)
    course_code_id = models.CharField(max_length=50, db_index=True)
    round = models.PositiveIntegerField(null=True, blank=True)

    is_weekend = models.CharField(
        max_length=10,
        choices=DayType.choices,
        default=DayType.WEEKDAY,
    )
    room_number = models.CharField(max_length=50, blank=True)

    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)

    # "HH:MM"
    start_time = models.CharField(max_length=5, blank=True)
    end_time = models.CharField(max_length=5, blank=True)
    lunch_start = models.CharField(max_length=5, blank=True)
    lunch_end = models.CharField(max_length=5, blank=True)

    total_hours = models.FloatField(null=True, blank=True)

    schedule_change = models.TextField(
        blank=True,
        help_text="특수일정 (예: 20241005=09:00~18:00(12:00~13:00), 20241006=09:00~13:00)",
    )

    class Meta:
        ordering = ["-start_date", "id"]

    def __str__(self):
        return f"{self.course_name} ({self.round or 1}회차)"
