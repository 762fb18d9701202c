# apps/domains/attendance/serializers.py
#
# CourseAttendanceResult(dataclass) → 응답 JSON.
# 입력 검증 없음 (출력 전용).

from rest_framework import serializers


class DailyCellSerializer(serializers.Serializer):
    category = serializers.CharField(source="category.value")
    text = serializers.CharField(source="display_text")
    color = serializers.CharField(source="display_color")
    net_minutes = serializers.IntegerField()
    uncompleted_minutes = serializers.IntegerField()


class StudentRowSerializer(serializers.Serializer):
    no = serializers.IntegerField()
    student_id = serializers.CharField()
    name = serializers.CharField()
    daily = serializers.SerializerMethodField()
    remaining_complete = serializers.CharField()
    uncompleted = serializers.CharField()
    remaining_absence = serializers.CharField()
    attend_count = serializers.IntegerField()
    absent_count = serializers.IntegerField()
    row_color = serializers.CharField(allow_null=True)
    is_dropped_out = serializers.BooleanField()
    verdict = serializers.CharField(source="verdict.value")
    attended_minutes = serializers.IntegerField()
    uncompleted_minutes = serializers.IntegerField()

    def get_daily(self, obj):
        return {
            date_key: DailyCellSerializer(cell).data
            for date_key, cell in obj.daily.items()
        }


class CourseSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    course_code_id = serializers.CharField()
    round = serializers.IntegerField()
    total_hours = serializers.FloatField()
    start_time = serializers.CharField()
    end_time = serializers.CharField()
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    is_weekend = serializers.BooleanField()
    lunch_start = serializers.CharField(allow_blank=True)
    lunch_end = serializers.CharField(allow_blank=True)


class AttendanceSummarySerializer(serializers.Serializer):
    total = serializers.IntegerField()
    completed = serializers.IntegerField()
    failed_or_dropped = serializers.IntegerField()
    at_risk = serializers.IntegerField()


class CompletionThresholdsSerializer(serializers.Serializer):
    target_completion_minutes = serializers.IntegerField()
    max_allowable_absence_minutes = serializers.IntegerField()


class CourseAttendanceSerializer(serializers.Serializer):
    course = CourseSummarySerializer()
    dates = serializers.ListField(child=serializers.CharField())
    raw_dates = serializers.ListField(child=serializers.CharField())
    students = StudentRowSerializer(many=True)
    summary = AttendanceSummarySerializer()
    thresholds = CompletionThresholdsSerializer()
    failed_months = serializers.ListField(child=serializers.CharField())
