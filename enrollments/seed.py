"""Sample rows used as the known fixture for the enrollment reports.

Student 8 has no declared major and no enrollments, course 106 has no
enrollments, and the Spring2026 enrollments are still in progress (no grade).
"""
from __future__ import annotations

import datetime
import logging
from decimal import Decimal

from django.db import transaction

from .models import Course, Enrollment, Student

logger = logging.getLogger(__name__)

STUDENTS = [
    (1, "Alice", "Johnson", "Computer Science", datetime.date(2023, 9, 1)),
    (2, "Bob", "Smith", "Business", datetime.date(2023, 9, 1)),
    (3, "Charlie", "Brown", "Computer Science", datetime.date(2024, 1, 15)),
    (4, "Diana", "Prince", "Mathematics", datetime.date(2023, 9, 1)),
    (5, "Ethan", "Clark", "Business", datetime.date(2024, 1, 15)),
    (6, "Fiona", "Green", "Mathematics", datetime.date(2023, 9, 1)),
    (7, "George", "Miller", "Computer Science", datetime.date(2024, 1, 15)),
    (8, "Hannah", "Davis", None, datetime.date(2023, 9, 1)),
]

COURSES = [
    (101, "INSY8311", "Database Development", "Computer Science", 3),
    (102, "BUSN7501", "Business Analytics", "Business", 3),
    (103, "MATH6101", "Advanced Calculus", "Mathematics", 4),
    (104, "INSY8320", "Data Warehousing", "Computer Science", 3),
    (105, "ECON7100", "Microeconomics", "Business", 3),
    (106, "PHYS6200", "Quantum Physics", "Physics", 4),
]

ENROLLMENTS = [
    (1, 1, 101, "Fall2025", Decimal("3.8"), datetime.date(2025, 9, 1)),
    (2, 1, 104, "Fall2025", Decimal("3.5"), datetime.date(2025, 9, 1)),
    (3, 2, 102, "Fall2025", Decimal("3.2"), datetime.date(2025, 9, 2)),
    (4, 2, 105, "Fall2025", Decimal("3.9"), datetime.date(2025, 9, 2)),
    (5, 3, 101, "Fall2025", Decimal("2.8"), datetime.date(2025, 9, 1)),
    (6, 4, 103, "Fall2025", Decimal("3.7"), datetime.date(2025, 9, 3)),
    (7, 5, 102, "Fall2025", Decimal("3.0"), datetime.date(2025, 9, 2)),
    (8, 5, 105, "Fall2025", Decimal("3.4"), datetime.date(2025, 9, 2)),
    (9, 6, 103, "Fall2025", Decimal("3.6"), datetime.date(2025, 9, 3)),
    (10, 7, 101, "Fall2025", Decimal("3.1"), datetime.date(2025, 9, 1)),
    (11, 7, 104, "Fall2025", Decimal("3.3"), datetime.date(2025, 9, 1)),
    (12, 1, 103, "Spring2026", None, datetime.date(2026, 1, 15)),
    (13, 2, 103, "Spring2026", None, datetime.date(2026, 1, 15)),
    (14, 3, 102, "Spring2026", None, datetime.date(2026, 1, 16)),
    (15, 4, 101, "Spring2026", None, datetime.date(2026, 1, 15)),
]


@transaction.atomic
def load_sample_data(reset: bool = False) -> dict[str, int]:
    """Insert or refresh the fixture rows and return the row count per table.

    Rows are keyed by their primary key, so running the loader twice leaves the
    tables unchanged. With ``reset`` every existing row is removed first.
    """

    if reset:
        # Enrollments go with their students and courses
        Student.objects.all().delete()
        Course.objects.all().delete()
        logger.info("Cleared existing students, courses and enrollments")

    for student_id, first_name, last_name, major, enrollment_date in STUDENTS:
        Student.objects.update_or_create(
            student_id=student_id,
            defaults={
                "first_name": first_name,
                "last_name": last_name,
                "major": major,
                "enrollment_date": enrollment_date,
            },
        )

    for course_id, course_code, course_name, department, credits in COURSES:
        Course.objects.update_or_create(
            course_id=course_id,
            defaults={
                "course_code": course_code,
                "course_name": course_name,
                "department": department,
                "credits": credits,
            },
        )

    for enrollment_id, student_id, course_id, semester, grade, enrollment_date in ENROLLMENTS:
        Enrollment.objects.update_or_create(
            enrollment_id=enrollment_id,
            defaults={
                "student_id": student_id,
                "course_id": course_id,
                "semester": semester,
                "grade": grade,
                "enrollment_date": enrollment_date,
            },
        )

    counts = {
        "students": Student.objects.count(),
        "courses": Course.objects.count(),
        "enrollments": Enrollment.objects.count(),
    }
    logger.info(
        "Sample data loaded: %(students)d students, %(courses)d courses, %(enrollments)d enrollments",
        counts,
    )
    return counts
