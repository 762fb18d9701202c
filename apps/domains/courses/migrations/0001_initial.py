# Generated manually

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("course_name", models.CharField(max_length=255)),
                ("course_code_id", models.CharField(db_index=True, max_length=50)),
                ("round", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "is_weekend",
                    models.CharField(
                        choices=[("WEEKDAY", "평일"), ("WEEKEND", "주말")],
                        default="WEEKDAY",
                        max_length=10,
                    ),
                ),
                ("room_number", models.CharField(blank=True, max_length=50)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("start_time", models.CharField(blank=True, max_length=5)),
                ("end_time", models.CharField(blank=True, max_length=5)),
                ("lunch_start", models.CharField(blank=True, max_length=5)),
                ("lunch_end", models.CharField(blank=True, max_length=5)),
                ("total_hours", models.FloatField(blank=True, null=True)),
                (
                    "schedule_change",
                    models.TextField(
                        blank=True,
                        help_text="특수일정 (예: 20241005=09:00~18:00(12:00~13:00), 20241006=09:00~13:00)",
                    ),
                ),
            ],
            options={
                "ordering": ["-start_date", "id"],
            },
        ),
    ]
