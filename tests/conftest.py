"""Shared fixtures for the enrollment reporting tests."""

import datetime
from decimal import Decimal

import pytest

import app
from enrollments.models import Course, Enrollment, Student
from enrollments.seed import load_sample_data


@pytest.fixture
def seeded(db):
    """Database loaded with the sample students, courses and enrollments."""
    return load_sample_data()


@pytest.fixture
def make_student(db):
    def _make(student_id, major="Physics", enrollment_date=datetime.date(2024, 9, 1), **kwargs):
        return Student.objects.create(
            student_id=student_id,
            first_name=kwargs.pop("first_name", f"First{student_id}"),
            last_name=kwargs.pop("last_name", f"Last{student_id}"),
            major=major,
            enrollment_date=enrollment_date,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_course(db):
    def _make(course_id, course_code=None, department="Physics", credits=3, **kwargs):
        return Course.objects.create(
            course_id=course_id,
            course_code=course_code or f"C{course_id}",
            course_name=kwargs.pop("course_name", f"Course {course_id}"),
            department=department,
            credits=credits,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_enrollment(db):
    def _make(enrollment_id, student_id, course_id, semester="Fall2025", grade=None, **kwargs):
        return Enrollment.objects.create(
            enrollment_id=enrollment_id,
            student_id=student_id,
            course_id=course_id,
            semester=semester,
            grade=Decimal(str(grade)) if grade is not None else None,
            enrollment_date=kwargs.pop("enrollment_date", datetime.date(2025, 9, 1)),
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_db(tmp_path):
    """SQLite file built from the raw DDL and seed statements."""
    db_path = tmp_path / "university_enrollment.db"
    app.init_db(db_path, with_sample=True)
    return db_path


@pytest.fixture
def sample_conn(sample_db):
    conn = app.connect(sample_db)
    yield conn
    conn.close()
