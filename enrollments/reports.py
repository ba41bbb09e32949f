"""Read-only enrollment reports built on the ORM.

Join reports query the base tables directly. Window reports run over the
aggregate views (see ``CourseEnrollmentStats`` and friends) so every window
function sees a plain column instead of an aggregate expression.
"""
from __future__ import annotations

from itertools import combinations, groupby
from operator import attrgetter

from django.conf import settings
from django.db import transaction
from django.db.models import Avg, CharField, F, QuerySet, RowRange, Sum, Value, ValueRange, Window
from django.db.models.functions import Concat, CumeDist, DenseRank, Lag, Lead, Ntile, PercentRank, Rank, RowNumber

from .models import (
    Course,
    CourseEnrollmentStats,
    CourseSemesterStats,
    DepartmentSemesterStats,
    Enrollment,
    Student,
    StudentGpa,
)

ENROLLED = "Enrolled"
STUDENT_NOT_ENROLLED = "Student Not Enrolled"
COURSE_NOT_TAKEN = "Course Not Taken"
NO_MATCH = "No Match"

PERFORMANCE_SEGMENTS = {
    1: "Top Performer",
    2: "Above Average",
    3: "Average",
    4: "Needs Improvement",
}


def _full_name(prefix: str = "") -> Concat:
    return Concat(f"{prefix}first_name", Value(" "), f"{prefix}last_name", output_field=CharField())


def _difference(current, previous):
    if current is None or previous is None:
        return None
    return current - previous


# --- Join reports ---------------------------------------------------------


def complete_enrollments(semester: str | None = None) -> QuerySet:
    """Enrollments of one semester with their student and course, best grade first."""

    if semester is None:
        semester = settings.ENROLLMENT_DEFAULT_SEMESTER
    return (
        Enrollment.objects.filter(semester=semester)
        .annotate(
            student_name=_full_name("student__"),
            major=F("student__major"),
            course_code=F("course__course_code"),
            course_name=F("course__course_name"),
        )
        .order_by(F("grade").desc(nulls_last=True), "enrollment_id")
        .values(
            "enrollment_id",
            "student_id",
            "student_name",
            "major",
            "course_code",
            "course_name",
            "semester",
            "grade",
        )
    )


def unenrolled_students() -> QuerySet:
    return (
        Student.objects.filter(enrollments__isnull=True)
        .annotate(student_name=_full_name(), student_enrollment_date=F("enrollment_date"))
        .order_by("student_id")
        .values("student_id", "student_name", "major", "student_enrollment_date")
    )


def courses_without_enrollments() -> QuerySet:
    return (
        Course.objects.filter(enrollments__isnull=True)
        .order_by("course_id")
        .values("course_id", "course_code", "course_name", "department", "credits")
    )


def audit_status(has_student: bool, has_enrollment: bool, has_course: bool) -> str:
    """Classify one row of the students/enrollments/courses outer join."""

    if has_enrollment:
        return ENROLLED
    if has_student:
        return STUDENT_NOT_ENROLLED
    if has_course:
        return COURSE_NOT_TAKEN
    return NO_MATCH


def _audit_row(student: dict | None = None, course: dict | None = None) -> dict:
    return {
        "student_id": student["student_id"] if student else None,
        "course_id": course["course_id"] if course else None,
        "student_info": str(student["student_id"]) if student else "No Student",
        "student_name": student["student_name"] if student else "N/A",
        "course_info": course["course_code"] if course else "No Course",
        "course_name": course["course_name"] if course else "N/A",
        "status": audit_status(student is not None, False, course is not None),
    }


@transaction.atomic
def enrollment_audit() -> list[dict]:
    """Rows of the students/enrollments/courses outer join that are not fully matched.

    Enrollment foreign keys are mandatory, so the unmatched rows are exactly the
    students without enrollments and the courses without enrollments.
    """

    rows = [_audit_row(student=student) for student in unenrolled_students()]
    rows.extend(_audit_row(course=course) for course in courses_without_enrollments())
    rows.sort(
        key=lambda row: (
            row["student_id"] is None,
            row["student_id"] or 0,
            row["course_id"] is None,
            row["course_id"] or 0,
        )
    )
    return rows


def peer_groups() -> list[dict]:
    """Pairs of students sharing a declared major and an admission date."""

    students = Student.objects.exclude(major__isnull=True).order_by("major", "enrollment_date", "student_id")
    pairs = []
    for (major, enrollment_date), group in groupby(students, key=attrgetter("major", "enrollment_date")):
        # group is ordered by id, so each pair comes out as (lower id, higher id)
        for first, second in combinations(list(group), 2):
            pairs.append(
                {
                    "student1_id": first.student_id,
                    "student1_name": first.full_name,
                    "student2_id": second.student_id,
                    "student2_name": second.full_name,
                    "major": major,
                    "enrollment_date": enrollment_date,
                }
            )
    return pairs


# --- Window reports -------------------------------------------------------


def course_rankings(limit: int | None = None) -> list[dict]:
    """Rank courses by enrollment count within their department."""

    by_department = [F("department")]
    by_count = F("enrollment_count").desc()
    queryset = (
        CourseEnrollmentStats.objects.annotate(
            row_num=Window(RowNumber(), partition_by=by_department, order_by=[by_count, F("course_code").asc()]),
            rank=Window(Rank(), partition_by=by_department, order_by=by_count),
            dense_rank=Window(DenseRank(), partition_by=by_department, order_by=by_count),
            percent_rank=Window(PercentRank(), partition_by=by_department, order_by=F("enrollment_count").asc()),
        )
        .order_by("department", "-enrollment_count", "course_code")
        .values(
            "department",
            "course_code",
            "course_name",
            "enrollment_count",
            "row_num",
            "rank",
            "dense_rank",
            "percent_rank",
        )
    )
    if limit is not None:
        queryset = queryset[:limit]
    return list(queryset)


def department_trends() -> list[dict]:
    """Running totals and a centered moving average of enrollments per department."""

    by_department = [F("department")]
    by_semester = F("semester").asc()
    return list(
        DepartmentSemesterStats.objects.annotate(
            running_total_rows=Window(
                Sum("enrollment_count"),
                partition_by=by_department,
                order_by=by_semester,
                frame=RowRange(start=None, end=0),
            ),
            running_total_range=Window(
                Sum("enrollment_count"),
                partition_by=by_department,
                order_by=by_semester,
                frame=ValueRange(start=None, end=0),
            ),
            centered_moving_avg=Window(
                Avg("enrollment_count"),
                partition_by=by_department,
                order_by=by_semester,
                frame=RowRange(start=-1, end=1),
            ),
        )
        .order_by("department", "semester")
        .values(
            "semester",
            "department",
            "enrollment_count",
            "running_total_rows",
            "running_total_range",
            "centered_moving_avg",
        )
    )


def semester_growth() -> list[dict]:
    """Semester-over-semester change of completed enrollments and average grade per course."""

    by_course = [F("course_code")]
    by_semester = F("semester").asc()
    rows = list(
        CourseSemesterStats.objects.filter(graded_count__gt=0)
        .annotate(
            enrollments=F("graded_count"),
            prev_semester_enrollments=Window(Lag("graded_count", 1), partition_by=by_course, order_by=by_semester),
            prev_semester_avg_grade=Window(Lag("avg_grade", 1), partition_by=by_course, order_by=by_semester),
            next_semester_enrollments=Window(Lead("graded_count", 1), partition_by=by_course, order_by=by_semester),
        )
        .order_by("course_code", "semester")
        .values(
            "course_code",
            "course_name",
            "semester",
            "enrollments",
            "avg_grade",
            "prev_semester_enrollments",
            "prev_semester_avg_grade",
            "next_semester_enrollments",
        )
    )
    for row in rows:
        row["enrollment_growth"] = _difference(row["enrollments"], row["prev_semester_enrollments"])
        row["grade_change"] = _difference(row["avg_grade"], row["prev_semester_avg_grade"])
    return rows


def gpa_quartiles() -> list[dict]:
    """Segment students into GPA quartiles within their major."""

    by_major = [F("major")]
    rows = list(
        StudentGpa.objects.annotate(
            student_name=_full_name(),
            performance_quartile=Window(Ntile(4), partition_by=by_major, order_by=F("cumulative_gpa").desc()),
            # fraction of the major at or below this GPA, hence ascending
            cumulative_distribution=Window(CumeDist(), partition_by=by_major, order_by=F("cumulative_gpa").asc()),
        )
        .order_by("major", "-cumulative_gpa", "student_id")
        .values(
            "student_id",
            "student_name",
            "major",
            "cumulative_gpa",
            "courses_completed",
            "performance_quartile",
            "cumulative_distribution",
        )
    )
    for row in rows:
        row["performance_segment"] = PERFORMANCE_SEGMENTS[row["performance_quartile"]]
    return rows


def course_semester_trends() -> list[dict]:
    """Moving average, cumulative count and per-semester rank of course enrollments."""

    by_course = [F("course_code")]
    by_semester = F("semester").asc()
    return list(
        CourseSemesterStats.objects.annotate(
            semester_enrollments=F("enrollment_count"),
            three_semester_moving_avg=Window(
                Avg("enrollment_count"),
                partition_by=by_course,
                order_by=by_semester,
                frame=RowRange(start=-2, end=0),
            ),
            cumulative_enrollments=Window(
                Sum("enrollment_count"),
                partition_by=by_course,
                order_by=by_semester,
                frame=RowRange(start=None, end=0),
            ),
            semester_rank=Window(Rank(), partition_by=[F("semester")], order_by=F("enrollment_count").desc()),
        )
        .order_by("course_code", "semester")
        .values(
            "course_code",
            "course_name",
            "semester",
            "semester_enrollments",
            "three_semester_moving_avg",
            "cumulative_enrollments",
            "semester_rank",
        )
    )


@transaction.atomic
def table_counts() -> list[dict]:
    return [
        {"table_name": "students", "record_count": Student.objects.count()},
        {"table_name": "courses", "record_count": Course.objects.count()},
        {"table_name": "enrollments", "record_count": Enrollment.objects.count()},
    ]


REPORTS = {
    "complete-enrollments": complete_enrollments,
    "unenrolled-students": unenrolled_students,
    "courses-without-enrollments": courses_without_enrollments,
    "enrollment-audit": enrollment_audit,
    "peer-groups": peer_groups,
    "course-rankings": course_rankings,
    "department-trends": department_trends,
    "semester-growth": semester_growth,
    "gpa-quartiles": gpa_quartiles,
    "course-semester-trends": course_semester_trends,
    "table-counts": table_counts,
}
