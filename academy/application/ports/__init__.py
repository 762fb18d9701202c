from academy.application.ports.repositories import CourseRepository
from academy.application.ports.registry import AttendanceRegistryPort

__all__ = [
    "CourseRepository",
    "AttendanceRegistryPort",
]
