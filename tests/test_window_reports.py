"""Ranking, aggregate, navigation and distribution window reports."""

from collections import defaultdict
from decimal import Decimal

import pytest

from enrollments import reports
from enrollments.models import Enrollment


def _ranking_tuples(rows):
    return [
        (row["department"], row["course_code"], row["enrollment_count"], row["row_num"], row["rank"], row["dense_rank"])
        for row in rows
    ]


class TestCourseRankings:
    def test_seed_rankings(self, seeded):
        rows = reports.course_rankings()

        assert _ranking_tuples(rows) == [
            ("Business", "BUSN7501", 3, 1, 1, 1),
            ("Business", "ECON7100", 2, 2, 2, 2),
            ("Computer Science", "INSY8311", 4, 1, 1, 1),
            ("Computer Science", "INSY8320", 2, 2, 2, 2),
            ("Mathematics", "MATH6101", 4, 1, 1, 1),
            ("Physics", "PHYS6200", 0, 1, 1, 1),
        ]
        assert [row["percent_rank"] for row in rows] == [1.0, 0.0, 1.0, 0.0, 0.0, 0.0]

    def test_ties_share_rank_and_leave_gaps(self, seeded, make_course, make_enrollment):
        make_course(107, course_code="INSY8400", department="Computer Science")
        make_course(108, course_code="INSY8500", department="Computer Science")
        make_enrollment(100, 2, 107)
        make_enrollment(101, 3, 107)
        make_enrollment(102, 5, 108)

        rows = [row for row in reports.course_rankings() if row["department"] == "Computer Science"]

        assert _ranking_tuples(rows) == [
            ("Computer Science", "INSY8311", 4, 1, 1, 1),
            ("Computer Science", "INSY8320", 2, 2, 2, 2),
            ("Computer Science", "INSY8400", 2, 3, 2, 2),
            ("Computer Science", "INSY8500", 1, 4, 4, 3),
        ]
        percent_ranks = {row["course_code"]: row["percent_rank"] for row in rows}
        assert percent_ranks["INSY8500"] == 0.0
        assert percent_ranks["INSY8320"] == pytest.approx(1 / 3)
        assert percent_ranks["INSY8400"] == pytest.approx(1 / 3)
        assert percent_ranks["INSY8311"] == 1.0

    def test_limit(self, seeded):
        rows = reports.course_rankings(limit=3)

        assert [row["course_code"] for row in rows] == ["BUSN7501", "ECON7100", "INSY8311"]


class TestDepartmentTrends:
    def test_seed_trends(self, seeded):
        rows = reports.department_trends()

        assert [
            (
                row["department"],
                row["semester"],
                row["enrollment_count"],
                row["running_total_rows"],
                row["running_total_range"],
            )
            for row in rows
        ] == [
            ("Business", "Fall2025", 4, 4, 4),
            ("Business", "Spring2026", 1, 5, 5),
            ("Computer Science", "Fall2025", 5, 5, 5),
            ("Computer Science", "Spring2026", 1, 6, 6),
            ("Mathematics", "Fall2025", 2, 2, 2),
            ("Mathematics", "Spring2026", 2, 4, 4),
        ]
        assert [row["centered_moving_avg"] for row in rows] == pytest.approx([2.5, 2.5, 3.0, 3.0, 2.0, 2.0])

    def test_running_total_at_last_semester_is_partition_sum(self, seeded, make_enrollment):
        make_enrollment(100, 1, 102, semester="Summer2026")
        make_enrollment(101, 2, 102, semester="Winter2026")

        rows = reports.department_trends()

        by_department = defaultdict(list)
        for row in rows:
            by_department[row["department"]].append(row)
        for department_rows in by_department.values():
            assert department_rows[-1]["running_total_rows"] == sum(r["enrollment_count"] for r in department_rows)

    def test_centered_average_uses_neighbours(self, seeded, make_enrollment):
        make_enrollment(100, 1, 102, semester="Summer2026")
        make_enrollment(101, 2, 102, semester="Summer2026")
        make_enrollment(102, 3, 105, semester="Summer2026")

        business = [row for row in reports.department_trends() if row["department"] == "Business"]

        assert [row["enrollment_count"] for row in business] == [4, 1, 3]
        assert [row["centered_moving_avg"] for row in business] == pytest.approx([2.5, 8 / 3, 2.0])
        assert [row["running_total_rows"] for row in business] == [4, 5, 8]


class TestSemesterGrowth:
    def test_seed_has_single_graded_semester(self, seeded):
        rows = reports.semester_growth()

        assert [(row["course_code"], row["semester"], row["enrollments"]) for row in rows] == [
            ("BUSN7501", "Fall2025", 2),
            ("ECON7100", "Fall2025", 2),
            ("INSY8311", "Fall2025", 3),
            ("INSY8320", "Fall2025", 2),
            ("MATH6101", "Fall2025", 2),
        ]
        assert [row["avg_grade"] for row in rows] == pytest.approx([3.1, 3.65, 9.7 / 3, 3.4, 3.65])
        for row in rows:
            assert row["prev_semester_enrollments"] is None
            assert row["enrollment_growth"] is None
            assert row["prev_semester_avg_grade"] is None
            assert row["grade_change"] is None
            assert row["next_semester_enrollments"] is None

    def test_lag_and_lead_across_semesters(self, seeded):
        Enrollment.objects.filter(pk=12).update(grade=Decimal("3.0"))
        Enrollment.objects.filter(pk=13).update(grade=Decimal("3.4"))
        Enrollment.objects.filter(pk=15).update(grade=Decimal("4.0"))

        rows = {(row["course_code"], row["semester"]): row for row in reports.semester_growth()}

        math_fall = rows[("MATH6101", "Fall2025")]
        math_spring = rows[("MATH6101", "Spring2026")]
        assert math_fall["prev_semester_enrollments"] is None
        assert math_fall["next_semester_enrollments"] == 2
        assert math_spring["prev_semester_enrollments"] == 2
        assert math_spring["enrollment_growth"] == 0
        assert math_spring["prev_semester_avg_grade"] == pytest.approx(3.65)
        assert math_spring["grade_change"] == pytest.approx(-0.45)
        assert math_spring["next_semester_enrollments"] is None

        database_spring = rows[("INSY8311", "Spring2026")]
        assert database_spring["enrollments"] == 1
        assert database_spring["prev_semester_enrollments"] == 3
        assert database_spring["enrollment_growth"] == -2
        assert database_spring["grade_change"] == pytest.approx(4.0 - 9.7 / 3)

    def test_ungraded_semesters_are_skipped(self, seeded):
        semesters = {row["semester"] for row in reports.semester_growth()}

        assert semesters == {"Fall2025"}


class TestGpaQuartiles:
    def test_seed_segments(self, seeded):
        rows = reports.gpa_quartiles()

        assert [
            (row["major"], row["student_name"], row["courses_completed"], row["performance_quartile"])
            for row in rows
        ] == [
            ("Business", "Bob Smith", 2, 1),
            ("Business", "Ethan Clark", 2, 2),
            ("Computer Science", "Alice Johnson", 2, 1),
            ("Computer Science", "George Miller", 2, 2),
        ]
        assert [row["cumulative_gpa"] for row in rows] == pytest.approx([3.55, 3.2, 3.65, 3.2])
        assert [row["cumulative_distribution"] for row in rows] == pytest.approx([1.0, 0.5, 1.0, 0.5])
        assert [row["performance_segment"] for row in rows] == [
            "Top Performer",
            "Above Average",
            "Top Performer",
            "Above Average",
        ]

    def test_four_students_get_distinct_quartiles(self, db, make_student, make_course, make_enrollment):
        make_course(1, course_code="PHYS100")
        make_course(2, course_code="PHYS200")
        for offset, grade in enumerate([2.0, 4.0, 3.0, 3.5]):
            student_id = 20 + offset
            make_student(student_id, major="Physics")
            make_enrollment(100 + 2 * offset, student_id, 1, grade=grade)
            make_enrollment(101 + 2 * offset, student_id, 2, grade=grade)

        rows = reports.gpa_quartiles()

        assert [(row["student_id"], row["performance_quartile"]) for row in rows] == [
            (21, 1),
            (23, 2),
            (22, 3),
            (20, 4),
        ]
        assert [row["performance_segment"] for row in rows] == [
            "Top Performer",
            "Above Average",
            "Average",
            "Needs Improvement",
        ]
        assert [row["cumulative_distribution"] for row in rows] == pytest.approx([1.0, 0.75, 0.5, 0.25])

    def test_students_need_two_completed_courses_and_a_major(self, seeded):
        student_ids = {row["student_id"] for row in reports.gpa_quartiles()}

        # 3, 4 and 6 have a single graded course; 8 has no major
        assert student_ids == {1, 2, 5, 7}


class TestCourseSemesterTrends:
    def test_seed_trends(self, seeded):
        rows = {(row["course_code"], row["semester"]): row for row in reports.course_semester_trends()}

        database_fall = rows[("INSY8311", "Fall2025")]
        database_spring = rows[("INSY8311", "Spring2026")]
        assert database_fall["semester_enrollments"] == 3
        assert database_fall["three_semester_moving_avg"] == pytest.approx(3.0)
        assert database_fall["cumulative_enrollments"] == 3
        assert database_fall["semester_rank"] == 1
        assert database_spring["semester_enrollments"] == 1
        assert database_spring["three_semester_moving_avg"] == pytest.approx(2.0)
        assert database_spring["cumulative_enrollments"] == 4
        assert database_spring["semester_rank"] == 2

        assert rows[("MATH6101", "Spring2026")]["semester_rank"] == 1
        assert rows[("BUSN7501", "Fall2025")]["semester_rank"] == 2
        assert ("PHYS6200", "Fall2025") not in rows


class TestTableCounts:
    def test_seed_counts(self, seeded):
        assert reports.table_counts() == [
            {"table_name": "students", "record_count": 8},
            {"table_name": "courses", "record_count": 6},
            {"table_name": "enrollments", "record_count": 15},
        ]
