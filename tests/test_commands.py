"""Management commands: seeding and printing reports."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from enrollments.models import Course, Enrollment, Student


def _run(*args, **options):
    out = StringIO()
    call_command(*args, stdout=out, **options)
    return out.getvalue()


class TestSeedEnrollment:
    def test_seed_reports_counts(self, db):
        output = _run("seed_enrollment")

        assert "students: 8" in output
        assert "courses: 6" in output
        assert "enrollments: 15" in output

    def test_seed_is_idempotent(self, db):
        _run("seed_enrollment")
        _run("seed_enrollment")

        assert Student.objects.count() == 8
        assert Course.objects.count() == 6
        assert Enrollment.objects.count() == 15

    def test_reset_drops_extra_rows(self, seeded, make_student):
        make_student(99)

        _run("seed_enrollment", "--reset")

        assert not Student.objects.filter(pk=99).exists()
        assert Student.objects.count() == 8

    def test_conflicting_rows_raise_command_error(self, db, make_course):
        make_course(500, course_code="INSY8311")

        with pytest.raises(CommandError, match="conflicts"):
            _run("seed_enrollment")

        assert Student.objects.count() == 0


class TestEnrollmentReport:
    def test_prints_one_row_per_line(self, seeded):
        output = _run("enrollment_report", "unenrolled-students")

        lines = output.strip().splitlines()
        assert len(lines) == 1
        assert "'student_name': 'Hannah Davis'" in lines[0]

    def test_semester_option(self, seeded):
        output = _run("enrollment_report", "complete-enrollments", "--semester", "Spring2026")

        assert len(output.strip().splitlines()) == 4
        assert "Fall2025" not in output

    def test_csv_output(self, seeded):
        output = _run("enrollment_report", "table-counts", "--csv")

        assert output.splitlines() == [
            "table_name,record_count",
            "students,8",
            "courses,6",
            "enrollments,15",
        ]

    def test_limit_option(self, seeded):
        output = _run("enrollment_report", "course-rankings", "--limit", "2")

        assert len(output.strip().splitlines()) == 2

    def test_invalid_limit(self, seeded):
        with pytest.raises(CommandError, match="--limit"):
            _run("enrollment_report", "course-rankings", "--limit", "0")

    def test_unknown_report(self, seeded):
        with pytest.raises(CommandError):
            _run("enrollment_report", "no-such-report")

    def test_empty_result(self, db):
        output = _run("enrollment_report", "courses-without-enrollments")

        assert output.strip() == "No rows."
